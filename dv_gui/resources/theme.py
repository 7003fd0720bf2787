"""Theme management for the GUI."""

from __future__ import annotations

import os
from typing import Final

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from dv_gui.resources import resource_path

THEMES: Final[dict[str, str]] = {
    "light": "theme_light.qss",
    "dark": "theme_dark.qss",
}

DEFAULT_THEME: Final[str] = "light"
_THEME_KEY: Final[str] = "ui/theme"


def list_themes() -> list[str]:
    """Return available theme names."""
    return list(THEMES.keys())


def get_preferred_theme(configured: str | None = None) -> str:
    """Resolve theme from env, explicit setting, or saved preference."""
    env_value = os.environ.get("DV_GUI_THEME")
    if env_value in THEMES:
        return env_value
    if configured in THEMES:
        return configured
    saved = _load_theme_preference()
    if saved in THEMES:
        return saved
    return DEFAULT_THEME


def apply_theme(
    app: QApplication,
    name: str | None = None,
    *,
    save: bool = False,
) -> str:
    """Apply a theme stylesheet. Returns the applied theme name."""
    selected = name or get_preferred_theme()
    if selected not in THEMES:
        selected = DEFAULT_THEME

    path = resource_path(THEMES[selected])
    if path.exists():
        app.setStyleSheet(path.read_text(encoding="utf-8"))

    if save:
        _save_theme_preference(selected)

    return selected


def _load_theme_preference() -> str | None:
    settings = QSettings()
    value = settings.value(_THEME_KEY)
    return value if isinstance(value, str) else None


def _save_theme_preference(name: str) -> None:
    settings = QSettings()
    settings.setValue(_THEME_KEY, name)


__all__ = [
    "THEMES",
    "list_themes",
    "get_preferred_theme",
    "apply_theme",
]
