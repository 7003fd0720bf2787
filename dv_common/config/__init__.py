"""Configuration helpers."""

from dv_common.config.settings import (
    LoggingSettings,
    ViewerSettings,
    load_logging_settings,
    load_settings,
)

__all__ = ["LoggingSettings", "ViewerSettings", "load_logging_settings", "load_settings"]
