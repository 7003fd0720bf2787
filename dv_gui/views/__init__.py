"""GUI views."""

from dv_gui.views.class_tree_view import ClassTreeView
from dv_gui.views.code_view import CodeView

__all__ = ["ClassTreeView", "CodeView"]
