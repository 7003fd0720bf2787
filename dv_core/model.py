"""Bytecode model contract consumed by renderers.

Parsers are external collaborators; whatever they read, they hand the viewer
an object satisfying :class:`BytecodeModel` built from the dataclasses below.
Renderers treat the model as read-only.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Protocol, runtime_checkable


class AccessFlags(enum.IntFlag):
    """Access flags using the dex ``access_flags`` bit values."""

    NONE = 0
    PUBLIC = 0x1
    PRIVATE = 0x2
    PROTECTED = 0x4
    STATIC = 0x8
    FINAL = 0x10
    SYNCHRONIZED = 0x20
    VOLATILE = 0x40
    TRANSIENT = 0x80
    NATIVE = 0x100
    INTERFACE = 0x200
    ABSTRACT = 0x400
    STRICT = 0x800
    SYNTHETIC = 0x1000
    ANNOTATION = 0x2000
    ENUM = 0x4000
    CONSTRUCTOR = 0x10000


# Keyword order used by both renderers when spelling out modifiers.
MODIFIER_ORDER: tuple[tuple[AccessFlags, str], ...] = (
    (AccessFlags.PUBLIC, "public"),
    (AccessFlags.PRIVATE, "private"),
    (AccessFlags.PROTECTED, "protected"),
    (AccessFlags.STATIC, "static"),
    (AccessFlags.FINAL, "final"),
    (AccessFlags.SYNCHRONIZED, "synchronized"),
    (AccessFlags.VOLATILE, "volatile"),
    (AccessFlags.TRANSIENT, "transient"),
    (AccessFlags.NATIVE, "native"),
    (AccessFlags.ABSTRACT, "abstract"),
)


@dataclass(frozen=True)
class AnnotationDef:
    type_name: str
    visibility: str = "runtime"
    elements: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ParameterDef:
    type_name: str
    name: str | None = None


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction; operands are already formatted strings."""

    offset: int
    opcode: str
    operands: tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldDef:
    name: str
    type_name: str
    access: AccessFlags = AccessFlags.NONE
    annotations: tuple[AnnotationDef, ...] = ()
    initial_value: str | None = None


@dataclass(frozen=True)
class MethodDef:
    name: str
    return_type: str = "void"
    parameters: tuple[ParameterDef, ...] = ()
    access: AccessFlags = AccessFlags.NONE
    annotations: tuple[AnnotationDef, ...] = ()
    registers: int = 0
    instructions: tuple[Instruction, ...] = ()

    @property
    def key(self) -> str:
        """Reference string identifying this method within its class."""
        params = ",".join(param.type_name for param in self.parameters)
        return f"{self.name}({params})"

    @property
    def is_constructor(self) -> bool:
        return self.name in ("<init>", "<clinit>")


@dataclass(frozen=True)
class ClassDef:
    name: str
    access: AccessFlags = AccessFlags.PUBLIC
    superclass: str | None = "java.lang.Object"
    interfaces: tuple[str, ...] = ()
    source_file: str | None = None
    annotations: tuple[AnnotationDef, ...] = ()
    fields: tuple[FieldDef, ...] = ()
    methods: tuple[MethodDef, ...] = ()

    @property
    def package(self) -> str:
        package, _, _ = self.name.rpartition(".")
        return package

    @property
    def simple_name(self) -> str:
        return self.name.rpartition(".")[2]

    def find_method(self, key: str) -> MethodDef | None:
        return next((method for method in self.methods if method.key == key), None)


@runtime_checkable
class BytecodeModel(Protocol):
    """What a bytecode parser must provide to the viewer."""

    def class_names(self) -> Iterable[str]:
        """Fully-qualified names of every class in the container."""
        ...

    def get_class(self, name: str) -> ClassDef | None:
        """Return the class definition or None when absent."""
        ...

    def dispose(self) -> None:
        """Release any file handles or buffers held by the model."""
        ...


@runtime_checkable
class BytecodeParser(Protocol):
    """Entry-point contract for parsers (``dex_viewer.parsers`` group)."""

    def parse(self, path: os.PathLike[str] | str) -> BytecodeModel:
        ...


class InMemoryModel:
    """Model backed by already-decoded class definitions."""

    def __init__(self, classes: Iterable[ClassDef] = ()) -> None:
        self._classes: dict[str, ClassDef] = {}
        for class_def in classes:
            self._classes[class_def.name] = class_def
        self._disposed = False

    @classmethod
    def from_mapping(cls, classes: Mapping[str, ClassDef]) -> "InMemoryModel":
        return cls(classes.values())

    @property
    def disposed(self) -> bool:
        return self._disposed

    def class_names(self) -> Iterator[str]:
        return iter(self._classes)

    def get_class(self, name: str) -> ClassDef | None:
        if self._disposed:
            raise RuntimeError("Model has been disposed")
        return self._classes.get(name)

    def dispose(self) -> None:
        self._disposed = True
        self._classes = {}

    def __len__(self) -> int:
        return len(self._classes)
