"""Service layer between the GUI and dv_core."""

from dv_gui.services.parser_service import ParserService
from dv_gui.services.session_service import SessionService

__all__ = ["ParserService", "SessionService"]
