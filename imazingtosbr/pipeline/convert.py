"""Turn one iMazing CSV export into an in-memory record batch."""

from __future__ import annotations

import csv
import time
from collections.abc import Iterator
from pathlib import Path

from imazingtosbr.errors import ConversionError, InputNotFoundError, RowReadError
from imazingtosbr.models import ConversionResult, FileKind
from imazingtosbr.pipeline.resolve import ColumnMap, resolve_header
from imazingtosbr.pipeline.transform import NumberedRow, transform_calls, transform_messages
from imazingtosbr.utils.logging import debug_event, get_logger

logger = get_logger(__name__)


def _read_header(reader: Iterator[list[str]], path: Path) -> list[str] | None:
    try:
        for row in reader:
            if row:
                return row
    except (csv.Error, UnicodeDecodeError) as exc:
        raise RowReadError(1, str(exc), path=path) from exc
    return None


def iter_rows(reader, columns: ColumnMap, *, path: str | Path = "") -> Iterator[NumberedRow]:
    """Yield ``(line_number, row)`` pairs, rejecting rows whose width differs from the header."""
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except (csv.Error, UnicodeDecodeError) as exc:
            raise RowReadError(reader.line_num, str(exc), path=path, kind=columns.kind) from exc
        if not row:
            continue
        if len(row) != columns.width:
            raise RowReadError(
                reader.line_num,
                f"expected {columns.width} fields, got {len(row)}",
                row=row,
                path=path,
                kind=columns.kind,
            )
        yield reader.line_num, row


def convert_file(path: str | Path) -> ConversionResult:
    """Classify and transform a whole CSV export.

    Nothing is returned until every row has been transformed; any error
    aborts the conversion without a partial batch.
    """
    csv_path = Path(path)
    started = time.perf_counter()
    debug_event(logger, "convert.start", file=str(csv_path))

    try:
        fh = csv_path.open("r", encoding="utf-8-sig", newline="")
    except FileNotFoundError:
        raise InputNotFoundError(csv_path) from None
    except OSError as exc:
        raise ConversionError(f"cannot open file: {exc}", path=csv_path) from exc

    with fh:
        reader = csv.reader(fh)
        columns = resolve_header(_read_header(reader, csv_path), path=csv_path)
        rows = iter_rows(reader, columns, path=csv_path)
        if columns.kind is FileKind.CALL_HISTORY:
            batch = transform_calls(rows, columns, path=csv_path)
            row_count = len(batch.calls)
        elif columns.kind is FileKind.MESSAGE_HISTORY:
            batch = transform_messages(rows, columns, path=csv_path)
            row_count = len(batch.sms)
        else:  # pragma: no cover - resolve_header only yields known layouts
            raise ConversionError("no transformer for layout", path=csv_path)

    duration_ms = int((time.perf_counter() - started) * 1000)
    debug_event(
        logger,
        "convert.done",
        file=str(csv_path),
        kind=columns.kind.value,
        rows=row_count,
        duration_ms=duration_ms,
    )
    return ConversionResult(
        kind=columns.kind,
        batch=batch,
        source_path=str(csv_path),
        row_count=row_count,
        duration_ms=duration_ms,
    )
