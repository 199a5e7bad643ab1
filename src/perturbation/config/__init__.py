"""Analysis settings."""

from .loader import load_settings
from .schema import DomainSettings, ExecutionSettings, Settings

__all__ = [
    "DomainSettings",
    "ExecutionSettings",
    "Settings",
    "load_settings",
]
