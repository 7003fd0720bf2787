"""Application setup and global services."""

from __future__ import annotations

from dv_common.api import ViewerSettings, load_settings
from dv_gui.services.parser_service import ParserService
from dv_gui.services.session_service import SessionService
from dv_gui.windows.main_window import MainWindow


class ServiceContainer:
    """Container for all GUI services (dependency injection)."""

    def __init__(self, settings: ViewerSettings | None = None) -> None:
        self._settings = settings
        self._parser_service: ParserService | None = None
        self._session_service: SessionService | None = None

    @property
    def settings(self) -> ViewerSettings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    @property
    def parser_service(self) -> ParserService:
        if self._parser_service is None:
            self._parser_service = ParserService(name=self.settings.parser)
        return self._parser_service

    @property
    def session_service(self) -> SessionService:
        if self._session_service is None:
            self._session_service = SessionService(self.parser_service, self.settings)
        return self._session_service


def create_app(settings: ViewerSettings | None = None) -> MainWindow:
    """Create and wire up the main application window."""
    services = ServiceContainer(settings)
    window = MainWindow(services)
    return window
