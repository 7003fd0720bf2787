"""Bytecode parser discovery through entry points."""

from __future__ import annotations

import logging
from typing import Any

from dv_common.discovery import discover_entrypoints, load_entrypoint
from dv_common.errors import ConfigurationError
from dv_core.model import BytecodeParser

logger = logging.getLogger(__name__)
PARSER_ENTRYPOINT_GROUP = "dex_viewer.parsers"


def load_parser(name: str | None = None) -> BytecodeParser:
    """Return the parser published under ``name``, or the first that loads.

    Entry points may publish a parser class or a ready instance.
    """
    loaded: list[BytecodeParser] = []

    def register(ep_name: str, obj: Any) -> None:
        parser = obj() if isinstance(obj, type) else obj
        if not isinstance(parser, BytecodeParser):
            raise TypeError(f"Entry point {ep_name} is not a bytecode parser")
        loaded.append(parser)

    pending = discover_entrypoints(PARSER_ENTRYPOINT_GROUP)
    candidates = [name] if name is not None else sorted(pending)
    for candidate in candidates:
        entry_point = pending.get(candidate)
        if entry_point is None:
            continue
        if load_entrypoint(entry_point, register, label="parser entry point"):
            logger.debug("Using bytecode parser %s", candidate)
            return loaded[-1]
    raise ConfigurationError(
        f"Bytecode parser '{name}' not available" if name else "No bytecode parser installed",
        context={"entry_point_group": PARSER_ENTRYPOINT_GROUP, "available": sorted(pending)},
    )
