"""Wrapper around bytecode parser discovery."""

from __future__ import annotations

from dv_core.model import BytecodeParser
from dv_core.parsers import load_parser


class ParserService:
    """Service resolving the installed bytecode parser once per process."""

    def __init__(self, parser: BytecodeParser | None = None, name: str | None = None) -> None:
        self._parser = parser
        self._name = name

    def get_parser(self) -> BytecodeParser:
        """Get the parser, loading it from entry points on first use."""
        if self._parser is None:
            self._parser = load_parser(self._name)
        return self._parser

    def set_parser(self, parser: BytecodeParser) -> None:
        """Use ``parser`` instead of the discovered one."""
        self._parser = parser
