"""Entry-point discovery and loading helpers shared across registries."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


def discover_entrypoints(group: str) -> dict[str, importlib.metadata.EntryPoint]:
    """Collect entry points of ``group`` without importing them."""
    pending: dict[str, importlib.metadata.EntryPoint] = {}
    try:
        eps = importlib.metadata.entry_points().select(group=group)
    except Exception as exc:
        logger.debug("Failed to read entry points for group %s: %s", group, exc)
        return pending
    for entry_point in eps:
        pending.setdefault(entry_point.name, entry_point)
    return pending


def load_entrypoint(
    entry_point: importlib.metadata.EntryPoint,
    register: Callable[[str, Any], None],
    *,
    label: str = "entry point",
) -> bool:
    """Load one entry point and hand ``(name, object)`` to ``register``.

    Returns False when loading failed; the failure is logged, never raised.
    """
    try:
        loaded = entry_point.load()
    except ImportError as exc:
        logger.debug(
            "Skipping %s %s due to missing dependency: %s", label, entry_point.name, exc
        )
        return False
    except Exception as exc:
        logger.warning("Failed to load %s %s: %s", label, entry_point.name, exc)
        return False
    try:
        register(entry_point.name, loaded)
    except Exception as exc:
        logger.warning("Failed to register %s %s: %s", label, entry_point.name, exc)
        return False
    return True
