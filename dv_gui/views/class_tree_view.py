"""Searchable class/method tree."""

from __future__ import annotations

from typing import Iterable

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLineEdit, QTreeWidget, QTreeWidgetItem, QVBoxLayout, QWidget

from dv_core.tree import TreeNode

_NODE_ROLE = Qt.ItemDataRole.UserRole


class ClassTreeView(QWidget):
    """Search field above a tree of packages, classes and methods."""

    filter_changed = Signal(str)
    node_selected = Signal(object)  # TreeNode or None

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the UI layout."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self._search = QLineEdit()
        self._search.setPlaceholderText("Search classes and methods")
        self._search.setClearButtonEnabled(True)
        self._search.textChanged.connect(self.filter_changed.emit)
        layout.addWidget(self._search)

        self._tree = QTreeWidget()
        self._tree.setHeaderHidden(True)
        self._tree.setUniformRowHeights(True)
        self._tree.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self._tree, 1)

    @property
    def filter_text(self) -> str:
        return self._search.text()

    def set_nodes(self, nodes: Iterable[TreeNode]) -> None:
        """Rebuild the tree; filtered trees are shown fully expanded."""
        self._tree.blockSignals(True)
        try:
            self._tree.clear()
            for node in nodes:
                self._tree.addTopLevelItem(self._build_item(node))
            if self._search.text():
                self._tree.expandAll()
        finally:
            self._tree.blockSignals(False)

    def clear(self) -> None:
        self.reset_search()
        self.set_nodes(())

    def reset_search(self) -> None:
        """Empty the search field without emitting filter_changed."""
        self._search.blockSignals(True)
        self._search.clear()
        self._search.blockSignals(False)

    def _build_item(self, node: TreeNode) -> QTreeWidgetItem:
        item = QTreeWidgetItem([node.label])
        item.setData(0, _NODE_ROLE, node)
        for child in node.children:
            item.addChild(self._build_item(child))
        return item

    def _on_selection_changed(self) -> None:
        items = self._tree.selectedItems()
        node = items[0].data(0, _NODE_ROLE) if items else None
        self.node_selected.emit(node)

    def set_current(self, node: TreeNode | None) -> None:
        """Select the item showing ``node`` without emitting node_selected."""
        self._tree.blockSignals(True)
        try:
            self._tree.clearSelection()
            if node is None:
                return
            iterator = [self._tree.topLevelItem(i) for i in range(self._tree.topLevelItemCount())]
            while iterator:
                item = iterator.pop()
                if item.data(0, _NODE_ROLE) == node:
                    item.setSelected(True)
                    self._tree.scrollToItem(item)
                    return
                iterator.extend(item.child(i) for i in range(item.childCount()))
        finally:
            self._tree.blockSignals(False)
