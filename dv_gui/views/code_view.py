"""Read-only code view that paints rendered documents."""

from __future__ import annotations

from typing import Callable

from PySide6.QtGui import QFont, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QWidget

from dv_core.document import RenderedDocument
from dv_gui.utils import foreground_format


def qt_offset_mapper(text: str) -> Callable[[int], int]:
    """Map str offsets to QTextDocument positions (UTF-16 code units)."""
    if all(ord(ch) <= 0xFFFF for ch in text):
        return lambda offset: offset
    positions = [0]
    for ch in text:
        positions.append(positions[-1] + (2 if ord(ch) > 0xFFFF else 1))
    return lambda offset: positions[offset]


class CodeView(QPlainTextEdit):
    """Displays a RenderedDocument with its highlight spans."""

    def __init__(self, font: QFont | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("codeView")
        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setUndoRedoEnabled(False)
        if font is not None:
            self.setFont(font)
        self._document = RenderedDocument()

    @property
    def rendered(self) -> RenderedDocument:
        return self._document

    def show_document(self, document: RenderedDocument) -> None:
        """Replace the displayed text; spans are painted in draw order."""
        self._document = document
        self.setPlainText(document.text)
        if not document.spans:
            return
        to_qt = qt_offset_mapper(document.text)
        cursor = QTextCursor(self.document())
        cursor.beginEditBlock()
        for span in document.draw_order():
            cursor.setPosition(to_qt(span.start))
            cursor.setPosition(to_qt(span.end), QTextCursor.MoveMode.KeepAnchor)
            cursor.mergeCharFormat(foreground_format(span.color))
        cursor.endEditBlock()
        self.moveCursor(QTextCursor.MoveOperation.Start)
