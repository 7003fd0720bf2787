"""Shared helpers for dex-viewer."""

from dv_common.api import ViewerSettings, configure_logging, load_settings

__all__ = ["configure_logging", "load_settings", "ViewerSettings"]
