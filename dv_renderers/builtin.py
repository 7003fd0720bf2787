"""Built-in renderers shipped with the viewer."""

from __future__ import annotations

from typing import Callable

from .interface import Renderer
from .plugins.dex import DexRenderer
from .plugins.java import JavaRenderer
from .registry import RendererRegistry

BUILTIN_RENDERERS: tuple[Callable[[], Renderer], ...] = (JavaRenderer, DexRenderer)


def builtin_renderers() -> list[Renderer]:
    """Fresh instances of every built-in renderer, in display order."""
    return [factory() for factory in BUILTIN_RENDERERS]


def create_registry(discover: bool = True) -> RendererRegistry:
    """Build a registry holding its own renderer instances.

    Each session gets a separate registry so model bindings never leak
    between windows.
    """
    return RendererRegistry(builtin_renderers(), discover=discover)
