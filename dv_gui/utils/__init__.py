"""Qt utilities and helpers."""

from dv_gui.utils.qt import code_font, foreground_format, set_widget_role, to_qcolor

__all__ = [
    "code_font",
    "foreground_format",
    "set_widget_role",
    "to_qcolor",
]
