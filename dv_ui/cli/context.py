"""Shared state for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text

from dv_common.api import ViewerSettings, load_settings
from dv_core.document import RenderedDocument
from dv_core.model import BytecodeParser
from dv_core.parsers import load_parser


@dataclass
class CLIContext:
    """Lazily resolved settings and parser shared by all commands."""

    config_path: Optional[Path] = None
    console: Console = field(default_factory=Console)
    _settings: Optional[ViewerSettings] = None
    _parser: Optional[BytecodeParser] = None

    @property
    def settings(self) -> ViewerSettings:
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    @property
    def parser(self) -> BytecodeParser:
        if self._parser is None:
            self._parser = load_parser(self.settings.parser)
        return self._parser

    def use_parser(self, parser: BytecodeParser) -> None:
        self._parser = parser

    def reset(self, config_path: Optional[Path] = None) -> None:
        self.config_path = config_path
        self._settings = None


def document_to_text(document: RenderedDocument) -> Text:
    """Rich text for a rendered document; later rules are stylized last."""
    text = Text(document.text, no_wrap=True, overflow="ignore")
    for span in document.draw_order():
        text.stylize(span.color.hex, span.start, span.end)
    return text
