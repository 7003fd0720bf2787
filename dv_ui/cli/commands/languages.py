from __future__ import annotations

import typer

from dv_core.session import pick_language
from dv_renderers import create_registry
from dv_ui.cli.context import CLIContext


def register_languages_command(app: typer.Typer, ctx_store: CLIContext) -> None:
    """Attach the ``languages`` command."""

    @app.command("languages")
    def languages() -> None:
        """List the available output languages."""
        registry = create_registry()
        names = list(registry.names(load_entrypoints=True))
        default = pick_language(registry, ctx_store.settings.default_language)
        for name in names:
            marker = " (default)" if name == default else ""
            ctx_store.console.print(f"{name}{marker}", highlight=False)
