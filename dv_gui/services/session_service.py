"""Opens viewer sessions with the configured defaults."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from dv_core.session import Session, open_session, pick_language
from dv_renderers import ClassDisplayOptions, create_registry

if TYPE_CHECKING:
    from dv_common.api import ViewerSettings
    from dv_gui.services.parser_service import ParserService


class SessionService:
    """Service creating one session per opened file."""

    def __init__(self, parser_service: "ParserService", settings: "ViewerSettings") -> None:
        self._parser_service = parser_service
        self._settings = settings

    @property
    def display_options(self) -> ClassDisplayOptions:
        return ClassDisplayOptions.from_sections(self._settings.class_options)

    def open(self, path: Path) -> Session:
        registry = create_registry()
        language = pick_language(registry, self._settings.default_language)
        return open_session(
            path,
            self._parser_service.get_parser(),
            registry=registry,
            language=language,
            options=self.display_options,
        )
