"""Typed API objects used across internal service boundaries."""

from imazingtosbr.api_objects.types import ConversionSummary

__all__ = ["ConversionSummary"]
