from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from dv_common.errors import ConfigurationError, describe_error
from dv_ui.cli.context import CLIContext


def register_gui_command(app: typer.Typer, ctx_store: CLIContext) -> None:
    """Attach the ``gui`` command."""

    @app.command("gui")
    def gui(
        file: Optional[Path] = typer.Argument(None, help="File to open on startup."),
    ) -> None:
        """Launch the desktop viewer."""
        try:
            import PySide6.QtWidgets  # noqa: F401
        except ImportError as exc:
            ctx_store.console.print(
                f"[red]GUI dependencies missing ({exc}). Install the 'gui' extra.[/red]",
                highlight=False,
            )
            raise typer.Exit(1) from exc

        try:
            ctx_store.settings
        except ConfigurationError as exc:
            ctx_store.console.print(f"[red]{escape(describe_error(exc))}[/red]", highlight=False)
            raise typer.Exit(1) from exc

        from dv_gui.main import main as gui_main

        argv = ["dexview"] + ([str(file)] if file else [])
        raise typer.Exit(gui_main(argv, config_path=ctx_store.config_path))
