"""CSV classification and record transformation."""

from imazingtosbr.pipeline.convert import convert_file
from imazingtosbr.pipeline.resolve import CALL_LAYOUT, MESSAGE_LAYOUT, ColumnMap, resolve_header

__all__ = ["CALL_LAYOUT", "MESSAGE_LAYOUT", "ColumnMap", "convert_file", "resolve_header"]
