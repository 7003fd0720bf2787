"""Renderer interface implemented once per output language."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from dv_common.errors import UnresolvedReference
from dv_core.highlight import HighlightRule
from dv_core.model import BytecodeModel, ClassDef, MethodDef


class ClassDisplayOptions(enum.Flag):
    """Independently togglable sections of a class render."""

    NONE = 0
    ANNOTATIONS = 0x1
    NAME = 0x2
    DETAILS = 0x4
    FIELDS = 0x8
    METHODS = 0x10
    DEFAULT = ANNOTATIONS | NAME | DETAILS | FIELDS
    ALL = DEFAULT | METHODS

    @classmethod
    def from_sections(cls, sections: Iterable[str]) -> "ClassDisplayOptions":
        """Build options from names such as ``["name", "fields"]``."""
        options = cls.NONE
        for section in sections:
            try:
                options |= cls[section.upper()]
            except KeyError:
                raise ValueError(f"Unknown class section: {section}") from None
        return options


class Renderer(ABC):
    """
    Abstract base class for output-language renderers.

    A renderer turns model references into pseudo-source text and declares
    the highlight rules for its own output. It must be bound to a model
    before rendering; rebinding forgets everything about the previous one.
    """

    indent_unit = "    "

    def __init__(self) -> None:
        self._model: BytecodeModel | None = None
        self._classes: dict[str, ClassDef] = {}
        self._rules: tuple[HighlightRule, ...] = tuple(self.declare_highlight_rules())

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the output language (e.g. 'Java')."""
        pass

    @abstractmethod
    def declare_highlight_rules(self) -> Sequence[HighlightRule]:
        """Ordered highlight rules; called once per instance."""
        pass

    @abstractmethod
    def write_class(self, class_def: ClassDef, options: ClassDisplayOptions) -> list[str]:
        """Return the lines of a class render."""
        pass

    @abstractmethod
    def write_method(
        self,
        class_def: ClassDef,
        method: MethodDef,
        indent_level: int,
        standalone: bool,
    ) -> list[str]:
        """Return the lines of a method render."""
        pass

    @property
    def is_bound(self) -> bool:
        return self._model is not None

    def bind(self, model: BytecodeModel | None) -> None:
        """Associate the renderer with ``model`` (None unbinds)."""
        self._model = model
        self._classes.clear()

    def highlight_rules(self) -> tuple[HighlightRule, ...]:
        return self._rules

    def render_class(
        self,
        class_ref: str,
        options: ClassDisplayOptions = ClassDisplayOptions.DEFAULT,
    ) -> str:
        class_def = self.resolve_class(class_ref)
        return self._join(self.write_class(class_def, options))

    def render_method(
        self,
        class_ref: str,
        method_ref: str,
        indent_level: int = 0,
        standalone: bool = True,
    ) -> str:
        class_def, method = self.resolve_method(class_ref, method_ref)
        return self._join(self.write_method(class_def, method, indent_level, standalone))

    def resolve_class(self, class_ref: str) -> ClassDef:
        model = self._require_model()
        cached = self._classes.get(class_ref)
        if cached is not None:
            return cached
        class_def = model.get_class(class_ref)
        if class_def is None:
            raise UnresolvedReference(
                f"Class not found: {class_ref}",
                context={"class": class_ref, "renderer": self.name},
            )
        self._classes[class_ref] = class_def
        return class_def

    def resolve_method(self, class_ref: str, method_ref: str) -> tuple[ClassDef, MethodDef]:
        class_def = self.resolve_class(class_ref)
        method = class_def.find_method(method_ref)
        if method is None:
            raise UnresolvedReference(
                f"Method not found: {class_ref}.{method_ref}",
                context={"class": class_ref, "method": method_ref, "renderer": self.name},
            )
        return class_def, method

    def indent(self, level: int) -> str:
        return self.indent_unit * max(level, 0)

    def _require_model(self) -> BytecodeModel:
        if self._model is None:
            raise RuntimeError(
                f"Renderer '{self.name}' is not bound to a model. Call bind() first."
            )
        return self._model

    @staticmethod
    def _join(lines: list[str]) -> str:
        return "\n".join(lines) + "\n" if lines else ""
