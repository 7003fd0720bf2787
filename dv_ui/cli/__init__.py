"""Typer application for the ``dexview`` command."""

from dv_ui.cli.main import app, ctx_store, main

__all__ = ["app", "main", "ctx_store"]
