"""Public API surface for dv_common."""

from dv_common.config.settings import ViewerSettings, load_settings
from dv_common.errors import (
    BytecodeLoadError,
    ConfigurationError,
    DVError,
    NoBytecodeEntry,
    UnknownRenderer,
    UnresolvedReference,
)
from dv_common.logging import configure_logging, log_context

__all__ = [
    "configure_logging",
    "log_context",
    "load_settings",
    "ViewerSettings",
    "DVError",
    "BytecodeLoadError",
    "ConfigurationError",
    "NoBytecodeEntry",
    "UnknownRenderer",
    "UnresolvedReference",
]
