"""
Command-line interface for dex-viewer.

Lists output languages, prints the class tree of an archive and renders
classes or methods to the terminal; ``gui`` launches the desktop viewer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from dv_common.api import configure_logging
from dv_ui.cli.commands.browse import register_browse_commands
from dv_ui.cli.commands.gui import register_gui_command
from dv_ui.cli.commands.languages import register_languages_command
from dv_ui.cli.context import CLIContext

ctx_store = CLIContext()

app = typer.Typer(help="Browse and render Android bytecode as pseudo-source.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Viewer settings file (YAML).",
    ),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug, level="WARNING" if not debug else None, force=True)
    ctx_store.reset(config)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


register_languages_command(app, ctx_store)
register_browse_commands(app, ctx_store)
register_gui_command(app, ctx_store)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
