"""Class/method tree and the filter contract the pipeline relies on."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, Protocol

from dv_core.model import BytecodeModel
from dv_core.selection import ClassTarget, MethodTarget, SelectionTarget

DEFAULT_PACKAGE_LABEL = "(default package)"


class NodeKind(str, enum.Enum):
    PACKAGE = "package"
    CLASS = "class"
    METHOD = "method"


@dataclass(frozen=True)
class TreeNode:
    kind: NodeKind
    label: str
    class_ref: str | None = None
    method_ref: str | None = None
    children: tuple["TreeNode", ...] = ()

    def walk(self) -> Iterator["TreeNode"]:
        yield self
        for child in self.children:
            yield from child.walk()


class FilterableTree(Protocol):
    """What the pipeline's owner needs from a tree component."""

    def set_filter(self, text: str) -> None:
        """Apply ``text`` as filter; the empty string restores the full tree."""
        ...

    def visible_nodes(self) -> tuple[TreeNode, ...]:
        """Top-level nodes currently shown."""
        ...


def selection_for_node(node: Any) -> SelectionTarget:
    """Translate a tree node into a selection target.

    Package/group nodes and anything that is not a tree node select nothing.
    """
    if not isinstance(node, TreeNode) or node.class_ref is None:
        return None
    if node.kind is NodeKind.CLASS:
        return ClassTarget(node.class_ref)
    if node.kind is NodeKind.METHOD and node.method_ref is not None:
        return MethodTarget(node.class_ref, node.method_ref)
    return None


def build_class_tree(model: BytecodeModel) -> tuple[TreeNode, ...]:
    """Group classes by package; methods keep declaration order."""
    packages: dict[str, list[TreeNode]] = {}
    for name in sorted(model.class_names()):
        class_def = model.get_class(name)
        if class_def is None:
            continue
        methods = tuple(
            TreeNode(
                NodeKind.METHOD,
                method.key,
                class_ref=class_def.name,
                method_ref=method.key,
            )
            for method in class_def.methods
        )
        packages.setdefault(class_def.package, []).append(
            TreeNode(
                NodeKind.CLASS,
                class_def.simple_name,
                class_ref=class_def.name,
                children=methods,
            )
        )
    return tuple(
        TreeNode(
            NodeKind.PACKAGE,
            package or DEFAULT_PACKAGE_LABEL,
            children=tuple(classes),
        )
        for package, classes in sorted(packages.items())
    )


def _filter_class(node: TreeNode, needle: str) -> TreeNode | None:
    if needle in (node.class_ref or "").lower():
        return node
    methods = tuple(child for child in node.children if needle in child.label.lower())
    if not methods:
        return None
    return replace(node, children=methods)


def filter_nodes(nodes: Iterable[TreeNode], text: str) -> tuple[TreeNode, ...]:
    """Case-insensitive substring filter over class names and method keys."""
    if not text:
        return tuple(nodes)
    needle = text.lower()
    visible: list[TreeNode] = []
    for package in nodes:
        classes = tuple(
            kept
            for kept in (_filter_class(child, needle) for child in package.children)
            if kept is not None
        )
        if classes:
            visible.append(replace(package, children=classes))
    return tuple(visible)


class ClassTree:
    """Default filterable tree over a loaded model."""

    def __init__(self, roots: Iterable[TreeNode] = ()) -> None:
        self._roots = tuple(roots)
        self._filter = ""
        self._visible = self._roots

    @classmethod
    def from_model(cls, model: BytecodeModel) -> "ClassTree":
        return cls(build_class_tree(model))

    @property
    def filter_text(self) -> str:
        return self._filter

    def set_filter(self, text: str) -> None:
        self._filter = text or ""
        self._visible = filter_nodes(self._roots, self._filter)

    def visible_nodes(self) -> tuple[TreeNode, ...]:
        return self._visible

    def iter_visible(self) -> Iterator[TreeNode]:
        for root in self._visible:
            yield from root.walk()

    def is_visible(self, target: SelectionTarget) -> bool:
        if target is None:
            return True
        return any(selection_for_node(node) == target for node in self.iter_visible())

    def find(self, target: SelectionTarget) -> TreeNode | None:
        if target is None:
            return None
        return next(
            (node for node in self.iter_visible() if selection_for_node(node) == target),
            None,
        )
