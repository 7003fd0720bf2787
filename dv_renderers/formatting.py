"""Formatting helpers shared by the built-in renderers."""

from __future__ import annotations

from dv_core.model import MODIFIER_ORDER, AccessFlags

_PRIMITIVE_DESCRIPTORS = {
    "void": "V",
    "boolean": "Z",
    "byte": "B",
    "char": "C",
    "short": "S",
    "int": "I",
    "long": "J",
    "float": "F",
    "double": "D",
}

# smali spells out every flag, including the ones Java expresses through
# declaration keywords.
_DEX_FLAG_ORDER: tuple[tuple[AccessFlags, str], ...] = MODIFIER_ORDER + (
    (AccessFlags.INTERFACE, "interface"),
    (AccessFlags.STRICT, "strictfp"),
    (AccessFlags.SYNTHETIC, "synthetic"),
    (AccessFlags.ANNOTATION, "annotation"),
    (AccessFlags.ENUM, "enum"),
    (AccessFlags.CONSTRUCTOR, "constructor"),
)


def java_modifiers(access: AccessFlags, exclude: AccessFlags = AccessFlags.NONE) -> str:
    return " ".join(
        word for flag, word in MODIFIER_ORDER if flag in access and flag not in exclude
    )


def dex_flags(access: AccessFlags) -> str:
    return " ".join(word for flag, word in _DEX_FLAG_ORDER if flag in access)


def type_descriptor(type_name: str) -> str:
    """Convert a Java type name (``int[]``, ``a.b.C``) to a dex descriptor."""
    dimensions = 0
    while type_name.endswith("[]"):
        dimensions += 1
        type_name = type_name[:-2]
    primitive = _PRIMITIVE_DESCRIPTORS.get(type_name)
    base = primitive or f"L{type_name.replace('.', '/')};"
    return "[" * dimensions + base


def simple_type(type_name: str) -> str:
    """Drop the ``java.lang.`` prefix the way decompilers usually do."""
    if type_name.startswith("java.lang.") and type_name.count(".") == 2:
        return type_name[len("java.lang."):]
    return type_name


def join_nonempty(*parts: str) -> str:
    return " ".join(part for part in parts if part)
