"""Persistence of the JSON collection file."""

from imazingtosbr.store.collection import append_calls, append_messages, load_or_default, save

__all__ = ["append_calls", "append_messages", "load_or_default", "save"]
