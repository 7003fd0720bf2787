"""Pluggable output-language renderers."""

from dv_renderers.builtin import builtin_renderers, create_registry
from dv_renderers.interface import ClassDisplayOptions, Renderer
from dv_renderers.registry import ENTRYPOINT_GROUP, RendererRegistry

__all__ = [
    "ClassDisplayOptions",
    "ENTRYPOINT_GROUP",
    "Renderer",
    "RendererRegistry",
    "builtin_renderers",
    "create_registry",
]
