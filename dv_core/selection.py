"""Selection targets driving what the pipeline renders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ClassTarget:
    class_ref: str


@dataclass(frozen=True)
class MethodTarget:
    class_ref: str
    method_ref: str


SelectionTarget = Union[ClassTarget, MethodTarget, None]


def describe_selection(target: SelectionTarget) -> str:
    if isinstance(target, MethodTarget):
        return f"{target.class_ref}.{target.method_ref}"
    if isinstance(target, ClassTarget):
        return target.class_ref
    return "<none>"
