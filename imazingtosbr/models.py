from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


def utc_now() -> datetime:
    return datetime.now(UTC)


class FileKind(StrEnum):
    UNKNOWN = "unknown"
    CALL_HISTORY = "call_history"
    MESSAGE_HISTORY = "message_history"


@dataclass(slots=True)
class CallRecord:
    contact_name: str
    date: str
    readable_date: str
    presentation: str
    duration: str
    data_from: str
    service_type: str
    number: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "contactName": self.contact_name,
            "date": self.date,
            "readableDate": self.readable_date,
            "presentation": self.presentation,
            "duration": self.duration,
            "dataFrom": self.data_from,
            "serviceType": self.service_type,
            "number": self.number,
            "type": self.type,
        }


@dataclass(slots=True)
class MessageRecord:
    contact_name: str
    subject: str
    body: str
    date: str
    readable_date: str
    address: str
    status: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "contactName": self.contact_name,
            "subject": self.subject,
            "body": self.body,
            "date": self.date,
            "readableDate": self.readable_date,
            "address": self.address,
            "status": self.status,
            "type": self.type,
        }


@dataclass(slots=True)
class CallBatch:
    calls: list[CallRecord] = field(default_factory=list)
    count: str = "0"


@dataclass(slots=True)
class MessageBatch:
    sms: list[MessageRecord] = field(default_factory=list)
    mms: list[dict[str, Any]] = field(default_factory=list)


RecordBatch = CallBatch | MessageBatch


@dataclass(slots=True)
class ConversionResult:
    kind: FileKind
    batch: RecordBatch
    source_path: str
    row_count: int
    duration_ms: int = 0


@dataclass(slots=True)
class Collection:
    """Persisted archive of calls, SMS and MMS entries.

    Entries already on disk are kept as loaded so fields this package does
    not know about survive a load/save cycle.
    """

    key: str = ""
    calls: list[dict[str, Any]] = field(default_factory=list)
    sms: list[dict[str, Any]] = field(default_factory=list)
    mms: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Collection:
        key = payload.get("key") or ""
        if not isinstance(key, str):
            raise ValueError("'key' must be a string")
        lists: dict[str, list[dict[str, Any]]] = {}
        for name in ("calls", "sms", "mms"):
            raw = payload.get(name)
            if raw is None:
                raw = []
            if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
                raise ValueError(f"'{name}' must be a list of objects")
            lists[name] = list(raw)
        return cls(key=key, calls=lists["calls"], sms=lists["sms"], mms=lists["mms"])

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "calls": self.calls,
            "sms": self.sms,
            "mms": self.mms,
        }

    def add_calls(self, batch: CallBatch) -> int:
        self.calls.extend(call.to_dict() for call in batch.calls)
        return len(batch.calls)

    def add_messages(self, batch: MessageBatch) -> int:
        self.sms.extend(message.to_dict() for message in batch.sms)
        self.mms.extend(dict(item) for item in batch.mms)
        return len(batch.sms) + len(batch.mms)
