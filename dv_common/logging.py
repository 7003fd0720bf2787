"""Viewer logging: stdlib loggers rendered through structlog.

Modules log with ``logging.getLogger(__name__)``. Records emitted inside
:func:`log_context` carry the bound keys (the opened file, the output
language, the selection being rendered), so a failing render can be traced
back to what was on screen.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from typing import Any, Iterator

import structlog

from dv_common.config.settings import LoggingSettings, load_logging_settings

_PRE_CHAIN: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
)


@contextlib.contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Bind viewer context for records logged inside the block.

    ``None`` values are skipped so callers can pass optional state as is.
    """
    bound = {key: value for key, value in values.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


def _level_number(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if isinstance(value, int):
        return value
    if not value:
        return logging.INFO
    if value.strip().isdigit():
        return int(value)
    return logging.getLevelNamesMapping().get(value.strip().upper(), logging.INFO)


def _formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=list(_PRE_CHAIN),
    )


def _handlers(options: LoggingSettings) -> list[logging.Handler]:
    formatter = _formatter(options.json_output)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if options.file:
        handlers.append(logging.FileHandler(options.file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _bind_structlog() -> None:
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Install the viewer's handlers on the root logger.

    Arguments win over the ``DV_LOG_*`` environment. An already configured
    root logger is left alone unless ``force`` is set.
    """
    options = load_logging_settings()
    updates: dict[str, Any] = {}
    if level is not None:
        updates["level"] = str(level)
    if log_file is not None:
        updates["file"] = log_file
    if json is not None:
        updates["json_output"] = json
    options = options.model_copy(update=updates)

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        _bind_structlog()
        return

    if force:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
    for handler in _handlers(options):
        root_logger.addHandler(handler)
    root_logger.setLevel(_level_number(options.level, debug))
    _bind_structlog()
