"""Qt helper utilities."""

from __future__ import annotations

from PySide6.QtGui import QColor, QFont, QFontDatabase, QTextCharFormat
from PySide6.QtWidgets import QWidget

from dv_core.document import RgbColor


def to_qcolor(color: RgbColor) -> QColor:
    """Convert a renderer color to an opaque QColor."""
    return QColor(color.red, color.green, color.blue)


def foreground_format(color: RgbColor) -> QTextCharFormat:
    """Character format that only changes the text color."""
    fmt = QTextCharFormat()
    fmt.setForeground(to_qcolor(color))
    return fmt


def code_font(family: str, size: int) -> QFont:
    """Requested monospace font, falling back to the system fixed font."""
    font = QFont(family, size)
    if not font.exactMatch():
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
        font.setPointSize(size)
    font.setStyleHint(QFont.StyleHint.Monospace)
    return font


def set_widget_role(widget: QWidget, role: str | None) -> None:
    """Set a role dynamic property and refresh style."""
    widget.setProperty("role", role)
    widget.style().unpolish(widget)
    widget.style().polish(widget)
