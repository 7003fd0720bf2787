"""Selection/render pipeline.

Three inputs change independently: the output language, the selected tree
node, and the loaded model. Every change that affects the display runs one
synchronous render cycle that rebuilds the document from scratch.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from dv_common.logging import log_context
from dv_core.document import EMPTY_DOCUMENT, HighlightSpan, RenderedDocument
from dv_core.highlight import HighlightRule, apply_highlights
from dv_core.model import BytecodeModel
from dv_core.selection import ClassTarget, MethodTarget, SelectionTarget, describe_selection
from dv_renderers.interface import ClassDisplayOptions, Renderer
from dv_renderers.registry import RendererRegistry

logger = logging.getLogger(__name__)

Highlighter = Callable[[str, Iterable[HighlightRule]], list[HighlightSpan]]


class SelectionRenderPipeline:
    """Keeps the rendered document consistent with language, selection and model."""

    def __init__(
        self,
        registry: RendererRegistry,
        *,
        options: ClassDisplayOptions = ClassDisplayOptions.DEFAULT,
        highlighter: Highlighter = apply_highlights,
    ) -> None:
        self._registry = registry
        self._options = options
        self._highlighter = highlighter

        # State
        self._language: str | None = None
        self._renderer: Renderer | None = None
        self._rules: tuple[HighlightRule, ...] = ()
        self._model: BytecodeModel | None = None
        self._selection: SelectionTarget = None
        self._document: RenderedDocument = EMPTY_DOCUMENT

    @property
    def registry(self) -> RendererRegistry:
        return self._registry

    @property
    def language(self) -> str | None:
        return self._language

    @property
    def renderer(self) -> Renderer | None:
        return self._renderer

    @property
    def model(self) -> BytecodeModel | None:
        return self._model

    @property
    def selection(self) -> SelectionTarget:
        return self._selection

    @property
    def options(self) -> ClassDisplayOptions:
        return self._options

    @property
    def document(self) -> RenderedDocument:
        return self._document

    def set_language(self, name: str) -> RenderedDocument:
        """Switch output language and re-render the current selection.

        Unknown names raise before any state changes.
        """
        renderer = self._registry.resolve(name)
        renderer.bind(self._model)
        self._language = name
        self._renderer = renderer
        self._rules = tuple(renderer.highlight_rules())
        logger.debug("Output language set to %s", name)
        return self.render()

    def set_selection(self, target: SelectionTarget) -> RenderedDocument:
        self._selection = target
        return self.render()

    def set_model(self, model: BytecodeModel | None) -> RenderedDocument:
        """Bind a newly loaded model; the selection is cleared."""
        self._model = model
        if self._renderer is not None:
            self._renderer.bind(model)
        self._selection = None
        self._document = EMPTY_DOCUMENT
        return self._document

    def set_options(self, options: ClassDisplayOptions) -> RenderedDocument:
        self._options = options
        return self.render()

    def render(self) -> RenderedDocument:
        """Run one render cycle for the current selection.

        A failing cycle leaves the empty document behind and re-raises; the
        next cycle starts from a clean state.
        """
        target = self._selection
        if target is None or self._renderer is None:
            self._document = EMPTY_DOCUMENT
            return self._document
        selection = describe_selection(target)
        with log_context(language=self._language, selection=selection):
            try:
                text = self._render_text(self._renderer, target)
                spans = self._highlighter(text, self._rules)
            except Exception:
                self._document = EMPTY_DOCUMENT
                logger.warning(
                    "Render failed for %s with %s", selection, self._language, exc_info=True
                )
                raise
            logger.debug("Rendered %d chars with %d spans", len(text), len(spans))
        self._document = RenderedDocument(text, tuple(spans))
        return self._document

    def _render_text(self, renderer: Renderer, target: SelectionTarget) -> str:
        if isinstance(target, ClassTarget):
            return renderer.render_class(target.class_ref, self._options)
        if isinstance(target, MethodTarget):
            return renderer.render_method(target.class_ref, target.method_ref, 0, True)
        raise TypeError(f"Unsupported selection target: {target!r}")
