"""ViewModel for the code viewer window."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from PySide6.QtCore import QObject, Signal

from dv_common.errors import describe_error
from dv_core.document import EMPTY_DOCUMENT, RenderedDocument
from dv_core.session import APP_TITLE
from dv_core.tree import selection_for_node

if TYPE_CHECKING:
    from dv_core.session import Session
    from dv_gui.services import SessionService

logger = logging.getLogger(__name__)


class ViewerViewModel(QObject):
    """ViewModel for the viewer window.

    Owns the current session and turns language, selection and filter
    changes into document updates.
    """

    # Signals
    title_changed = Signal(str)
    languages_changed = Signal(list, str)  # names, current
    tree_changed = Signal(object)  # tuple of TreeNode
    document_changed = Signal(object)  # RenderedDocument
    error_occurred = Signal(str)

    def __init__(
        self,
        session_service: "SessionService",
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session_service = session_service

        # State
        self._session: "Session | None" = None

    @property
    def session(self) -> "Session | None":
        """Currently open session."""
        return self._session

    @property
    def title(self) -> str:
        return self._session.title if self._session else APP_TITLE

    @property
    def document(self) -> RenderedDocument:
        if self._session is None:
            return EMPTY_DOCUMENT
        return self._session.pipeline.document

    @property
    def languages(self) -> list[str]:
        if self._session is None:
            return []
        return list(self._session.pipeline.registry.names(load_entrypoints=True))

    @property
    def current_language(self) -> str:
        if self._session is None:
            return ""
        return self._session.pipeline.language or ""

    def open_file(self, path: Path) -> bool:
        """Open ``path``; the previous session is kept if opening fails.

        Returns True if successful.
        """
        try:
            session = self._session_service.open(Path(path))
        except Exception as e:
            logger.warning("Failed to open %s: %s", path, e)
            self.error_occurred.emit(f"Failed to open {Path(path).name}: {describe_error(e)}")
            return False

        self.close()
        self._session = session
        self.title_changed.emit(session.title)
        self.languages_changed.emit(self.languages, self.current_language)
        self.tree_changed.emit(session.tree.visible_nodes())
        self.document_changed.emit(session.pipeline.document)
        return True

    def select_language(self, name: str) -> None:
        """Switch the output language."""
        if self._session is None or not name:
            return
        pipeline = self._session.pipeline
        if name == pipeline.language:
            return
        try:
            pipeline.set_language(name)
        except Exception as e:
            self.error_occurred.emit(describe_error(e))
        self.document_changed.emit(pipeline.document)

    def select_node(self, node: Any) -> None:
        """Handle a tree selection; group nodes clear the selection."""
        if self._session is None:
            return
        target = selection_for_node(node)
        pipeline = self._session.pipeline
        if target == pipeline.selection and target is not None:
            return
        try:
            pipeline.set_selection(target)
        except Exception as e:
            self.error_occurred.emit(describe_error(e))
        self.document_changed.emit(pipeline.document)

    def set_filter(self, text: str) -> None:
        """Filter the tree; a selection that disappears is cleared."""
        if self._session is None:
            return
        tree = self._session.tree
        tree.set_filter(text)
        self.tree_changed.emit(tree.visible_nodes())
        if not tree.is_visible(self._session.pipeline.selection):
            self.select_node(None)

    def close(self) -> None:
        """Release the current session (model and temp files)."""
        session, self._session = self._session, None
        if session is None:
            return
        try:
            session.close()
        except Exception:
            logger.exception("Error while closing session for %s", session.source_path)
        self.title_changed.emit(APP_TITLE)
        self.document_changed.emit(EMPTY_DOCUMENT)
