"""Row-level normalization of iMazing call and message exports."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from imazingtosbr.constants import (
    DATA_FROM,
    DATE_LAYOUT,
    DIRECTION_OUTGOING,
    TYPE_INCOMING,
    TYPE_OUTGOING,
)
from imazingtosbr.errors import DateParseError
from imazingtosbr.models import CallBatch, CallRecord, MessageBatch, MessageRecord
from imazingtosbr.pipeline.resolve import ColumnMap
from imazingtosbr.utils.logging import debug_event, get_logger

logger = get_logger(__name__)

# strptime alone accepts single-digit fields; the export layout never has them.
_DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")

NumberedRow = tuple[int, list[str]]


def parse_export_date(text: str) -> datetime:
    """Parse an export timestamp. The value carries no zone and is read as UTC wall-clock."""
    if not _DATE_SHAPE.fullmatch(text):
        raise ValueError(f"{text!r} does not match {DATE_LAYOUT}")
    return datetime.strptime(text, DATE_LAYOUT).replace(tzinfo=UTC)


def to_epoch_millis(value: datetime) -> str:
    return str(int(value.timestamp()) * 1000)


def split_service(text: str) -> str:
    service, _, _ = text.partition(":")
    return service


def direction_code(text: str) -> str:
    return TYPE_OUTGOING if text == DIRECTION_OUTGOING else TYPE_INCOMING


def _epoch_for(
    row_number: int,
    text: str,
    column: str,
    columns: ColumnMap,
    path: str | Path,
) -> str:
    try:
        return to_epoch_millis(parse_export_date(text))
    except ValueError:
        raise DateParseError(row_number, text, column, path=path, kind=columns.kind) from None


def transform_call_row(
    row_number: int, row: list[str], columns: ColumnMap, *, path: str | Path = ""
) -> CallRecord:
    readable_date = columns.value(row, "Date")
    contact = columns.value(row, "Contact")
    return CallRecord(
        contact_name=contact,
        date=_epoch_for(row_number, readable_date, "Date", columns, path),
        readable_date=readable_date,
        presentation=contact,
        duration=columns.value(row, "Duration"),
        data_from=DATA_FROM,
        service_type=split_service(columns.value(row, "Service")),
        number=columns.value(row, "Number"),
        type=direction_code(columns.value(row, "Call Type")),
    )


def transform_message_row(
    row_number: int, row: list[str], columns: ColumnMap, *, path: str | Path = ""
) -> MessageRecord:
    readable_date = columns.value(row, "Message Date")
    contact_name = columns.value(row, "Sender Name")
    if contact_name == "":
        contact_name = columns.value(row, "Chat Session")
    return MessageRecord(
        contact_name=contact_name,
        subject=columns.value(row, "Subject"),
        body=columns.value(row, "Text"),
        date=_epoch_for(row_number, readable_date, "Message Date", columns, path),
        readable_date=readable_date,
        address=columns.value(row, "Sender ID"),
        status=columns.value(row, "Status"),
        type=direction_code(columns.value(row, "Type")),
    )


def transform_calls(
    rows: Iterable[NumberedRow], columns: ColumnMap, *, path: str | Path = ""
) -> CallBatch:
    batch = CallBatch()
    for row_number, row in rows:
        call = transform_call_row(row_number, row, columns, path=path)
        debug_event(logger, "call", row=row_number, call=call.to_dict())
        batch.calls.append(call)
    batch.count = str(len(batch.calls))
    return batch


def transform_messages(
    rows: Iterable[NumberedRow], columns: ColumnMap, *, path: str | Path = ""
) -> MessageBatch:
    batch = MessageBatch()
    for row_number, row in rows:
        message = transform_message_row(row_number, row, columns, path=path)
        debug_event(logger, "sms", row=row_number, sms=message.to_dict())
        batch.sms.append(message)
    return batch
