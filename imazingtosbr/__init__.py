"""Convert iMazing call and message CSV exports into SMS Backup & Restore style collections."""

from imazingtosbr.api_objects import ConversionSummary
from imazingtosbr.application import Application
from imazingtosbr.config import AppConfig, load_config
from imazingtosbr.constants import APP_NAME
from imazingtosbr.models import Collection, FileKind

__all__ = [
    "APP_NAME",
    "AppConfig",
    "Application",
    "Collection",
    "ConversionSummary",
    "FileKind",
    "__version__",
    "load_config",
]
__version__ = "0.1.0"
