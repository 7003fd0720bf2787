"""
Registry mapping output-language names to renderer instances.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Iterable, KeysView

from dv_common.discovery import discover_entrypoints, load_entrypoint
from dv_common.errors import UnknownRenderer
from .interface import Renderer


logger = logging.getLogger(__name__)
ENTRYPOINT_GROUP = "dex_viewer.renderers"


class RendererRegistry:
    """In-memory registry of renderers, including entry-point renderers loaded on demand."""

    def __init__(
        self,
        renderers: Iterable[Renderer] | None = None,
        *,
        discover: bool = False,
    ) -> None:
        self._renderers: dict[str, Renderer] = {}
        self._pending_entrypoints: dict[str, importlib.metadata.EntryPoint] = {}
        for renderer in renderers or ():
            self.register(renderer.name, renderer)
        if discover:
            self._discover_entrypoint_renderers()

    def register(self, name: str, renderer: Renderer) -> None:
        """Register ``renderer`` under ``name``; an existing name is replaced."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Renderer name must be a non-empty string")
        if not isinstance(renderer, Renderer):
            # Duck typing covers renderers built against a different import path.
            if not all(
                hasattr(renderer, attr)
                for attr in ("bind", "render_class", "render_method", "highlight_rules")
            ):
                raise TypeError(f"Unknown renderer type: {type(renderer)}")
        if name in self._renderers:
            logger.debug("Replacing renderer %s", name)
        self._renderers[name] = renderer
        self._pending_entrypoints.pop(name, None)

    def names(self, load_entrypoints: bool = False) -> KeysView[str]:
        """Registered names in registration order.

        When load_entrypoints is True, pending entry-point renderers are
        resolved first so they appear in the listing.
        """
        if load_entrypoints:
            self._load_pending_entrypoints()
        return self._renderers.keys()

    def resolve(self, name: str) -> Renderer:
        if name not in self._renderers and name in self._pending_entrypoints:
            self._load_entrypoint(name)
        if name not in self._renderers:
            raise UnknownRenderer(
                f"Renderer '{name}' not found",
                context={"name": name, "available": list(self._renderers)},
            )
        return self._renderers[name]

    def __contains__(self, name: object) -> bool:
        return name in self._renderers or name in self._pending_entrypoints

    def __len__(self) -> int:
        return len(self._renderers)

    def _register_loaded(self, name: str, loaded: Any) -> None:
        # Entry points may publish a renderer class or a ready instance. The
        # entry-point name is the key, even if the renderer names itself otherwise.
        renderer = loaded() if isinstance(loaded, type) else loaded
        self.register(name, renderer)

    def _discover_entrypoint_renderers(self) -> None:
        """Collect entry points without importing them. Loaded on demand."""
        for name, entry_point in discover_entrypoints(ENTRYPOINT_GROUP).items():
            if name not in self._renderers:
                self._pending_entrypoints[name] = entry_point

    def _load_pending_entrypoints(self) -> None:
        for name in list(self._pending_entrypoints):
            self._load_entrypoint(name)

    def _load_entrypoint(self, name: str) -> None:
        entry_point = self._pending_entrypoints.pop(name, None)
        if entry_point is None:
            return
        load_entrypoint(entry_point, self._register_loaded, label="renderer entry point")
