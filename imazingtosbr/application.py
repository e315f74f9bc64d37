"""Core entrypoint driven by the command frontend: convert one file, append it."""

from __future__ import annotations

import logging
from pathlib import Path

from imazingtosbr.api_objects.types import ConversionSummary
from imazingtosbr.errors import (
    CollectionNotConfiguredError,
    ConversionError,
    ImazingToSbrError,
    InputNotFoundError,
    UnsupportedFileKindError,
)
from imazingtosbr.models import (
    CallBatch,
    Collection,
    ConversionResult,
    FileKind,
    MessageBatch,
    utc_now,
)
from imazingtosbr.pipeline.convert import convert_file
from imazingtosbr.store.collection import append_calls, append_messages, load_or_default, save
from imazingtosbr.utils.logging import get_logger


class Application:
    def __init__(
        self,
        import_file: str | Path,
        *,
        collection_file: str | Path = "",
        tag: str = "",
        logger: logging.Logger | None = None,
    ) -> None:
        if not str(import_file) or not Path(import_file).is_file():
            raise InputNotFoundError(import_file)
        self.import_file = Path(import_file)
        self.collection_file = Path(collection_file) if str(collection_file) else None
        self.tag = tag
        self.logger = logger or get_logger(__name__)

    def convert(self) -> ConversionResult:
        self.logger.debug("converting file %s", self.import_file)
        result = convert_file(self.import_file)
        self.logger.info(
            "converted %s: file_type=%s records=%d duration_ms=%d",
            self.import_file.name,
            result.kind.value,
            result.row_count,
            result.duration_ms,
        )
        return result

    def append(self, result: ConversionResult) -> Collection:
        """Load the collection (or start empty), append the batch, save it back."""
        if self.collection_file is None:
            raise CollectionNotConfiguredError()

        collection = load_or_default(self.collection_file)
        if result.kind is FileKind.CALL_HISTORY and isinstance(result.batch, CallBatch):
            appended = append_calls(collection, result.batch)
        elif result.kind is FileKind.MESSAGE_HISTORY and isinstance(result.batch, MessageBatch):
            appended = append_messages(collection, result.batch)
        else:
            raise UnsupportedFileKindError(result.kind)

        save(collection, self.collection_file)
        self.logger.info(
            "appended %d records to %s (calls=%d sms=%d mms=%d)",
            appended,
            self.collection_file,
            len(collection.calls),
            len(collection.sms),
            len(collection.mms),
        )
        return collection

    def run(self) -> ConversionSummary:
        """Convert then append exactly once.

        Failures do not raise; they are reported on the returned summary
        together with the detected file kind. Nothing is written unless the
        whole file converted.
        """
        summary = ConversionSummary(
            import_file=str(self.import_file),
            collection_file=str(self.collection_file or ""),
            started_at=utc_now(),
            ended_at=utc_now(),
            tag=self.tag,
        )
        try:
            if self.collection_file is None:
                raise CollectionNotConfiguredError()
            result = self.convert()
            summary.kind = result.kind
            summary.records_converted = result.row_count
            collection = self.append(result)
        except ConversionError as exc:
            summary.kind = exc.kind
            summary.error_message = str(exc)
        except ImazingToSbrError as exc:
            summary.error_message = str(exc)
        else:
            summary.records_appended = result.row_count
            summary.calls_total = len(collection.calls)
            summary.sms_total = len(collection.sms)
            summary.mms_total = len(collection.mms)
        summary.ended_at = utc_now()
        if summary.error_message:
            self.logger.error("import failed: %s", summary.error_message)
        return summary
