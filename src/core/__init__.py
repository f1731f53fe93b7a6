"""Core module — config, types, logging."""

from src.core.config import (
    ConstraintsConfig,
    HttpRequestConfig,
    LogConfig,
    Settings,
    load_settings,
)
from src.core.exceptions import SettingsError
from src.core.logging import setup_logging
from src.core.types import CycleResult, ReadingValue, Resource

__all__ = [
    "ConstraintsConfig",
    "CycleResult",
    "HttpRequestConfig",
    "LogConfig",
    "ReadingValue",
    "Resource",
    "Settings",
    "SettingsError",
    "load_settings",
    "setup_logging",
]
