"""Error taxonomy for import runs. Every error is fatal to one invocation."""

from __future__ import annotations

from pathlib import Path

from imazingtosbr.models import FileKind


class ImazingToSbrError(RuntimeError):
    pass


class InputNotFoundError(ImazingToSbrError):
    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"import file does not exist: {self.path}")


class ConversionError(ImazingToSbrError):
    """Base for failures while turning a CSV file into records."""

    def __init__(self, message: str, *, path: str | Path = "", kind: FileKind = FileKind.UNKNOWN) -> None:
        self.path = str(path)
        self.kind = kind
        prefix = f"{self.path}: " if self.path else ""
        super().__init__(prefix + message)


class EmptyInputError(ConversionError):
    def __init__(self, *, path: str | Path = "") -> None:
        super().__init__("file has no header row", path=path)


class UnrecognizedFormatError(ConversionError):
    def __init__(self, header: list[str], *, path: str | Path = "", reason: str = "") -> None:
        self.header = list(header)
        detail = reason or f"unrecognized header {self.header[:3]!r}"
        super().__init__(detail, path=path)


class RowReadError(ConversionError):
    def __init__(
        self,
        row_number: int,
        reason: str,
        *,
        row: list[str] | None = None,
        path: str | Path = "",
        kind: FileKind = FileKind.UNKNOWN,
    ) -> None:
        self.row_number = row_number
        self.row = list(row) if row is not None else None
        message = f"row {row_number}: {reason}"
        if self.row is not None:
            message += f" (row={self.row!r})"
        super().__init__(message, path=path, kind=kind)


class DateParseError(ConversionError):
    def __init__(
        self,
        row_number: int,
        value: str,
        column: str,
        *,
        path: str | Path = "",
        kind: FileKind = FileKind.UNKNOWN,
    ) -> None:
        self.row_number = row_number
        self.value = value
        self.column = column
        super().__init__(
            f"row {row_number}: cannot parse {column!r} value {value!r} as YYYY-MM-DD HH:MM:SS",
            path=path,
            kind=kind,
        )


class CollectionLoadError(ImazingToSbrError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"cannot load collection {self.path}: {reason}")


class CollectionSaveError(ImazingToSbrError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"cannot save collection {self.path}: {reason}")


class UnsupportedFileKindError(ImazingToSbrError):
    def __init__(self, kind: FileKind) -> None:
        self.kind = kind
        super().__init__(f"unsupported file kind: {kind.value}")


class CollectionNotConfiguredError(ImazingToSbrError):
    def __init__(self) -> None:
        super().__init__("no collection file configured")
