"""JSON collection file: load-or-default, append, save."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from imazingtosbr.errors import CollectionLoadError, CollectionSaveError
from imazingtosbr.models import CallBatch, Collection, MessageBatch
from imazingtosbr.utils.logging import debug_event, get_logger

logger = get_logger(__name__)


def load_or_default(path: str | Path) -> Collection:
    collection_path = Path(path)
    if not collection_path.exists():
        debug_event(logger, "collection.default", file=str(collection_path))
        return Collection()

    try:
        with collection_path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, UnicodeDecodeError) as exc:
        raise CollectionLoadError(collection_path, str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise CollectionLoadError(collection_path, f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise CollectionLoadError(collection_path, "top-level value must be an object")
    try:
        collection = Collection.from_dict(payload)
    except ValueError as exc:
        raise CollectionLoadError(collection_path, str(exc)) from exc

    debug_event(
        logger,
        "collection.loaded",
        file=str(collection_path),
        calls=len(collection.calls),
        sms=len(collection.sms),
        mms=len(collection.mms),
    )
    return collection


def append_calls(collection: Collection, batch: CallBatch) -> int:
    return collection.add_calls(batch)


def append_messages(collection: Collection, batch: MessageBatch) -> int:
    return collection.add_messages(batch)


def save(collection: Collection, path: str | Path) -> None:
    """Write the full collection, replacing the file in one rename."""
    collection_path = Path(path)
    tmp_name: str | None = None
    try:
        collection_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{collection_path.name}.",
            suffix=".tmp",
            dir=collection_path.parent,
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(collection.to_dict(), fh, ensure_ascii=False, indent=2)
            fh.write("\n")
        os.replace(tmp_name, collection_path)
        tmp_name = None
    except (OSError, TypeError, ValueError) as exc:
        raise CollectionSaveError(collection_path, str(exc)) from exc
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)

    debug_event(
        logger,
        "collection.saved",
        file=str(collection_path),
        calls=len(collection.calls),
        sms=len(collection.sms),
        mms=len(collection.mms),
    )
