"""Header classification and column-index resolution for iMazing CSV exports."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from imazingtosbr.constants import CALL_HEADER_MARKER, MESSAGE_HEADER_MARKER
from imazingtosbr.errors import EmptyInputError, UnrecognizedFormatError
from imazingtosbr.models import FileKind
from imazingtosbr.utils.logging import debug_event, get_logger

logger = get_logger(__name__)

BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class RecordLayout:
    """Known column set of one export type, keyed by its first header cell."""

    kind: FileKind
    marker: str
    columns: tuple[str, ...]
    optional: frozenset[str] = field(default_factory=frozenset)

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(name for name in self.columns if name not in self.optional)


CALL_LAYOUT = RecordLayout(
    kind=FileKind.CALL_HISTORY,
    marker=CALL_HEADER_MARKER,
    columns=("Call Type", "Date", "Duration", "Number", "Contact", "Location", "Service"),
    optional=frozenset({"Location"}),
)

MESSAGE_LAYOUT = RecordLayout(
    kind=FileKind.MESSAGE_HISTORY,
    marker=MESSAGE_HEADER_MARKER,
    columns=(
        "Chat Session",
        "Message Date",
        "Delivered Date",
        "Read Date",
        "Edited Date",
        "Service",
        "Type",
        "Sender ID",
        "Sender Name",
        "Status",
        "Replying to",
        "Subject",
        "Text",
        "Attachment",
        "Attachment type",
    ),
    optional=frozenset(
        {
            "Delivered Date",
            "Read Date",
            "Edited Date",
            "Service",
            "Replying to",
            "Attachment",
            "Attachment type",
        }
    ),
)

LAYOUTS: tuple[RecordLayout, ...] = (CALL_LAYOUT, MESSAGE_LAYOUT)


@dataclass(frozen=True, slots=True)
class ColumnMap:
    layout: RecordLayout
    indexes: Mapping[str, int]
    width: int

    def __getitem__(self, name: str) -> int:
        if name not in self.layout.columns:
            raise KeyError(f"{name!r} is not a column of the {self.layout.kind.value} layout")
        return self.indexes[name]

    def get(self, name: str) -> int | None:
        return self.indexes.get(name)

    def value(self, row: list[str], name: str) -> str:
        return row[self[name]]

    @property
    def kind(self) -> FileKind:
        return self.layout.kind


def _normalize(cell: str) -> str:
    return cell.strip().casefold()


def classify_header(header: list[str]) -> RecordLayout | None:
    if not header:
        return None
    first = header[0].lstrip(BOM)
    for layout in LAYOUTS:
        if first == layout.marker:
            return layout
    return None


def build_column_map(layout: RecordLayout, header: list[str], *, path: str | Path = "") -> ColumnMap:
    positions: dict[str, int] = {}
    for idx, cell in enumerate(header):
        positions.setdefault(_normalize(cell.lstrip(BOM) if idx == 0 else cell), idx)

    indexes: dict[str, int] = {}
    for name in layout.columns:
        idx = positions.get(_normalize(name))
        if idx is not None:
            indexes[name] = idx

    missing = [name for name in layout.required if name not in indexes]
    if missing:
        raise UnrecognizedFormatError(
            header,
            path=path,
            reason=f"{layout.kind.value} header is missing required columns {missing!r}",
        )
    return ColumnMap(layout=layout, indexes=MappingProxyType(indexes), width=len(header))


def resolve_header(header: list[str] | None, *, path: str | Path = "") -> ColumnMap:
    """Classify the header row and return the column map for its layout.

    Raises ``EmptyInputError`` when there is no header at all and
    ``UnrecognizedFormatError`` when the first cell matches no known layout
    or required columns are absent.
    """
    if not header:
        raise EmptyInputError(path=path)

    for idx, cell in enumerate(header):
        debug_event(logger, "header", header=cell, index=idx)

    layout = classify_header(header)
    if layout is None:
        raise UnrecognizedFormatError(header, path=path)

    column_map = build_column_map(layout, header, path=path)
    for name, idx in column_map.indexes.items():
        debug_event(logger, "column", kind=layout.kind.value, column=name, index=idx)
    return column_map
