"""Shared logging helpers for the importer."""

from __future__ import annotations

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_FORMAT = "%(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_DEBUG_CLIP = 220

# Verbosity scale of the command frontend.
VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

_configured_level: int | None = None


def level_from_verbosity(verbosity: int) -> int:
    if verbosity < 0:
        return logging.WARNING
    return VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)


def setup_logging(level: int = logging.INFO, *, force: bool = False) -> None:
    """Route log records through a stderr RichHandler so stdout stays clean for ``--json``."""
    global _configured_level

    if _configured_level == level and not force:
        return

    handler = RichHandler(
        level=level,
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=False,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    logging.basicConfig(
        level=max(level, logging.WARNING),
        format=DEFAULT_LOG_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
        handlers=[handler],
        force=True,
    )
    logging.getLogger("imazingtosbr").setLevel(level)
    _configured_level = level


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _format_debug_value(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)})"
    return str(value)


def debug_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    """Emit one compact ``event=... key=value`` DEBUG line, clipped to a readable width."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    parts = [f"event={event}"]
    parts.extend(f"{key}={_format_debug_value(value)}" for key, value in fields.items() if value is not None)
    text = " ".join(" ".join(parts).split())
    if len(text) > DEFAULT_DEBUG_CLIP:
        text = text[:DEFAULT_DEBUG_CLIP] + "..."
    logger.debug(text)
