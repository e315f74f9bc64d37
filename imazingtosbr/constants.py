"""Package-wide constants and defaults."""

from __future__ import annotations

APP_NAME = "imazingtosbr"
COMMAND_NAME = "iphone2sbr"

ENV_PREFIX = "IPHONE2SBR"

DEFAULT_VERBOSITY = 2

# Provenance tag written into every converted call.
DATA_FROM = "iMazing"

# Timestamp layout used by iMazing exports, no zone marker.
DATE_LAYOUT = "%Y-%m-%d %H:%M:%S"

DIRECTION_OUTGOING = "Outgoing"

TYPE_INCOMING = "1"
TYPE_OUTGOING = "2"

CALL_HEADER_MARKER = "Call type"
MESSAGE_HEADER_MARKER = "Chat Session"
