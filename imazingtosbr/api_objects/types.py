"""Type-safe objects reported back to the command frontend."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from imazingtosbr.models import FileKind


@dataclass(slots=True)
class ConversionSummary:
    """Outcome of one convert-then-append invocation."""

    import_file: str
    collection_file: str
    started_at: datetime
    ended_at: datetime
    kind: FileKind = FileKind.UNKNOWN
    tag: str = ""
    records_converted: int = 0
    records_appended: int = 0
    calls_total: int = 0
    sms_total: int = 0
    mms_total: int = 0
    error_message: str | None = None

    @property
    def duration_seconds(self) -> float:
        return max(0.0, (self.ended_at - self.started_at).total_seconds())

    @property
    def ok(self) -> bool:
        return self.error_message is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "import_file": self.import_file,
            "collection_file": self.collection_file,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat(),
            "duration_seconds": self.duration_seconds,
            "file_kind": self.kind.value,
            "tag": self.tag,
            "records_converted": self.records_converted,
            "records_appended": self.records_appended,
            "totals": {
                "calls": self.calls_total,
                "sms": self.sms_total,
                "mms": self.mms_total,
            },
            "error": self.error_message,
        }
