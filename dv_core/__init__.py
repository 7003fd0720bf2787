"""Viewer core: model contract, rendering pipeline, highlighting and sessions."""

from dv_core.document import EMPTY_DOCUMENT, HighlightSpan, RenderedDocument, RgbColor
from dv_core.highlight import HighlightRule, apply_highlights
from dv_core.model import BytecodeModel, BytecodeParser, ClassDef, InMemoryModel, MethodDef
from dv_core.selection import ClassTarget, MethodTarget, SelectionTarget

__all__ = [
    "EMPTY_DOCUMENT",
    "BytecodeModel",
    "BytecodeParser",
    "ClassDef",
    "ClassTarget",
    "HighlightRule",
    "HighlightSpan",
    "InMemoryModel",
    "MethodDef",
    "MethodTarget",
    "RenderedDocument",
    "RgbColor",
    "SelectionTarget",
    "apply_highlights",
]
