"""Per-window session: loaded model, temp artifacts and the render pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dv_common.errors import BytecodeLoadError, DVError
from dv_common.logging import log_context
from dv_core.archive import extract_bytecode, remove_temp_file
from dv_core.model import BytecodeModel, BytecodeParser
from dv_core.pipeline import SelectionRenderPipeline
from dv_core.tree import ClassTree
from dv_renderers.builtin import create_registry
from dv_renderers.interface import ClassDisplayOptions
from dv_renderers.registry import RendererRegistry

logger = logging.getLogger(__name__)

APP_TITLE = "Dex Viewer"


def pick_language(registry: RendererRegistry, preferred: str | None) -> str | None:
    """Return ``preferred`` when it is registered, else the first registered name."""
    if preferred and preferred in registry:
        return preferred
    fallback = next(iter(registry.names()), None)
    if preferred:
        logger.info("Language %s is not available; using %s", preferred, fallback)
    return fallback


class Session:
    """Owns everything loaded from one file until the window closes."""

    def __init__(
        self,
        source_path: Path,
        model: BytecodeModel,
        pipeline: SelectionRenderPipeline,
        *,
        temp_path: Path | None = None,
    ) -> None:
        self._source_path = source_path
        self._model = model
        self._temp_path = temp_path
        self._pipeline = pipeline
        self._tree = ClassTree.from_model(model)
        self._closed = False
        pipeline.set_model(model)

    @property
    def source_path(self) -> Path:
        return self._source_path

    @property
    def model(self) -> BytecodeModel:
        return self._model

    @property
    def pipeline(self) -> SelectionRenderPipeline:
        return self._pipeline

    @property
    def tree(self) -> ClassTree:
        return self._tree

    @property
    def title(self) -> str:
        return f"{APP_TITLE} - {self._source_path.name}"

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Dispose the model and delete the temp extraction; idempotent."""
        if self._closed:
            return
        self._closed = True
        with log_context(file=self._source_path.name):
            try:
                self._pipeline.set_model(None)
                self._model.dispose()
            finally:
                remove_temp_file(self._temp_path)
                logger.debug("Closed session for %s", self._source_path)

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def open_session(
    path: Path | str,
    parser: BytecodeParser,
    *,
    registry: RendererRegistry | None = None,
    language: str | None = None,
    options: ClassDisplayOptions = ClassDisplayOptions.DEFAULT,
    temp_dir: Path | str | None = None,
) -> Session:
    """Open ``path`` and return a ready session.

    Nothing is left behind when opening fails: the temp copy is deleted and
    a partially built model is disposed before the error propagates.
    """
    source_path = Path(path)
    with log_context(file=source_path.name):
        return _open(source_path, parser, registry, language, options, temp_dir)


def _open(
    source_path: Path,
    parser: BytecodeParser,
    registry: RendererRegistry | None,
    language: str | None,
    options: ClassDisplayOptions,
    temp_dir: Path | str | None,
) -> Session:
    source = extract_bytecode(source_path, temp_dir)
    model: BytecodeModel | None = None
    try:
        try:
            model = parser.parse(source.path)
        except (DVError, OSError):
            raise
        except Exception as exc:
            raise BytecodeLoadError(
                f"Failed to parse {source_path.name}",
                context={"path": source_path},
                cause=exc,
            ) from exc

        registry = registry if registry is not None else create_registry()
        pipeline = SelectionRenderPipeline(registry, options=options)
        if language is None:
            language = pick_language(registry, None)
        if language is not None:
            pipeline.set_language(language)
        session = Session(source_path, model, pipeline, temp_path=source.temp_path)
    except BaseException:
        if model is not None:
            model.dispose()
        remove_temp_file(source.temp_path)
        raise

    logger.info("Opened %s (%s)", source_path, language or "no renderer")
    return session
