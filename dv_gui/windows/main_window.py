"""Main viewer window: class tree on the left, rendered code on the right."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from dv_core.session import APP_TITLE
from dv_gui.resources.theme import apply_theme, get_preferred_theme, list_themes
from dv_gui.utils import code_font, set_widget_role
from dv_gui.viewmodels import ViewerViewModel
from dv_gui.views import ClassTreeView, CodeView

if TYPE_CHECKING:
    from dv_gui.app import ServiceContainer

FILE_FILTER = "Android packages (*.apk *.zip *.jar);;Dex files (*.dex);;All files (*)"


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, services: "ServiceContainer", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.services = services
        self._vm = ViewerViewModel(services.session_service, self)

        self._setup_ui()
        self._connect_signals()
        self._setup_menu()

    @property
    def viewmodel(self) -> ViewerViewModel:
        return self._vm

    def _setup_ui(self) -> None:
        """Set up the main UI layout."""
        self.setWindowTitle(APP_TITLE)
        self.setMinimumSize(1000, 700)

        central = QWidget()
        central.setObjectName("mainRoot")
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        # Language selector
        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Language:"))
        self._language_combo = QComboBox()
        self._language_combo.setEnabled(False)
        top_bar.addWidget(self._language_combo)
        top_bar.addStretch()
        layout.addLayout(top_bar)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self._tree_view = ClassTreeView()
        splitter.addWidget(self._tree_view)

        settings = self.services.settings
        self._code_view = CodeView(code_font(settings.font_family, settings.font_size))
        splitter.addWidget(self._code_view)
        splitter.setSizes([300, 700])
        layout.addWidget(splitter, 1)

        self._status_label = QLabel("Open an .apk or .dex file to begin")
        set_widget_role(self._status_label, "muted")
        layout.addWidget(self._status_label)

    def _connect_signals(self) -> None:
        """Connect viewmodel and view signals."""
        self._vm.title_changed.connect(self.setWindowTitle)
        self._vm.languages_changed.connect(self._on_languages_changed)
        self._vm.tree_changed.connect(self._on_tree_changed)
        self._vm.document_changed.connect(self._code_view.show_document)
        self._vm.error_occurred.connect(self._on_error)

        self._language_combo.currentTextChanged.connect(self._vm.select_language)
        self._tree_view.filter_changed.connect(self._vm.set_filter)
        self._tree_view.node_selected.connect(self._vm.select_node)

    def _setup_menu(self) -> None:
        """Create the application menu."""
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("File")

        open_action = QAction("Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open)
        file_menu.addAction(open_action)
        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu("View")
        theme_menu = view_menu.addMenu("Theme")
        theme_group = QActionGroup(self)
        theme_group.setExclusive(True)

        current_theme = get_preferred_theme(self.services.settings.theme)
        for name in list_themes():
            action = theme_menu.addAction(name.title())
            action.setCheckable(True)
            action.setData(name)
            if name == current_theme:
                action.setChecked(True)
            theme_group.addAction(action)

        def on_theme_selected(action) -> None:  # type: ignore[no-untyped-def]
            app = QApplication.instance()
            if app is None:
                return
            apply_theme(app, action.data(), save=True)

        theme_group.triggered.connect(on_theme_selected)

    def open_file(self, path: Path) -> bool:
        """Open a file; used by the menu and the command line."""
        if not self._vm.open_file(path):
            return False
        # A new session starts unfiltered; rebuild so nothing stays expanded.
        self._tree_view.reset_search()
        self._on_tree_changed(self._vm.session.tree.visible_nodes())
        self._status_label.setText(str(path))
        return True

    def _on_open(self) -> None:
        filename, _ = QFileDialog.getOpenFileName(self, "Open", "", FILE_FILTER)
        if filename:
            self.open_file(Path(filename))

    def _on_languages_changed(self, names: list[str], current: str) -> None:
        self._language_combo.blockSignals(True)
        try:
            self._language_combo.clear()
            self._language_combo.addItems(names)
            if current:
                self._language_combo.setCurrentText(current)
        finally:
            self._language_combo.blockSignals(False)
        self._language_combo.setEnabled(bool(names))

    def _on_tree_changed(self, nodes: object) -> None:
        self._tree_view.set_nodes(nodes)  # type: ignore[arg-type]
        session = self._vm.session
        if session is not None:
            self._tree_view.set_current(session.tree.find(session.pipeline.selection))

    def _on_error(self, message: str) -> None:
        self._status_label.setText(message)
        QMessageBox.warning(self, "Error", message)

    def closeEvent(self, event: object) -> None:
        """Release the session before the window goes away."""
        self._vm.close()
        event.accept()  # type: ignore
