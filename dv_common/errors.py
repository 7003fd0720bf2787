"""Shared error taxonomy for dex-viewer."""

from __future__ import annotations

from typing import Any, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a display-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class DVError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class NoBytecodeEntry(DVError):
    """Archive does not contain the expected bytecode entry."""


class BytecodeLoadError(DVError):
    """The bytecode parser failed to produce a model."""


class UnknownRenderer(DVError, LookupError):
    """No renderer is registered under the requested name."""


class UnresolvedReference(DVError, LookupError):
    """A class or method reference is not present in the bound model."""


class ConfigurationError(DVError):
    """Failure due to invalid or missing configuration."""


def describe_error(error: BaseException) -> str:
    """Return a one-line, user-facing description of an error."""
    if isinstance(error, DVError):
        return f"{error.error_type}: {error}"
    return f"{type(error).__name__}: {error}"
