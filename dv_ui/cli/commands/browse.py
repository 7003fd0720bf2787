"""Headless browsing: class tree listing and rendering to the terminal."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import typer
from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from dv_common.errors import DVError, UnresolvedReference, describe_error
from dv_core.model import BytecodeModel
from dv_core.selection import ClassTarget, MethodTarget, SelectionTarget
from dv_core.session import Session, open_session, pick_language
from dv_core.tree import TreeNode
from dv_renderers import ClassDisplayOptions, create_registry
from dv_ui.cli.context import CLIContext, document_to_text


def _fail(ctx_store: CLIContext, error: BaseException) -> typer.Exit:
    ctx_store.console.print(f"[red]{escape(describe_error(error))}[/red]", highlight=False)
    return typer.Exit(1)


def _open(
    ctx_store: CLIContext,
    file: Path,
    language: Optional[str] = None,
    options: ClassDisplayOptions = ClassDisplayOptions.DEFAULT,
) -> Session:
    """Open ``file``; an explicit ``language`` must exist, the configured default may fall back."""
    try:
        registry = create_registry()
        if language is None:
            language = pick_language(registry, ctx_store.settings.default_language)
        return open_session(
            file,
            ctx_store.parser,
            registry=registry,
            language=language,
            options=options,
        )
    except (DVError, OSError) as exc:
        raise _fail(ctx_store, exc) from exc


def _add_nodes(parent: Tree, nodes: Iterable[TreeNode]) -> None:
    for node in nodes:
        branch = parent.add(Text(node.label))
        _add_nodes(branch, node.children)


def resolve_method_ref(model: BytecodeModel, class_ref: str, method: str) -> str:
    """Accept either a full method key (``bar(int)``) or a bare method name."""
    class_def = model.get_class(class_ref)
    if class_def is None or "(" in method:
        return method
    matches = [candidate.key for candidate in class_def.methods if candidate.name == method]
    if len(matches) > 1:
        raise UnresolvedReference(
            f"Method name '{method}' is ambiguous: {', '.join(matches)}",
            context={"class": class_ref, "candidates": matches},
        )
    return matches[0] if matches else method


def build_options(
    base: ClassDisplayOptions,
    toggles: dict[ClassDisplayOptions, Optional[bool]],
) -> ClassDisplayOptions:
    options = base
    for flag, enabled in toggles.items():
        if enabled is True:
            options |= flag
        elif enabled is False:
            options &= ~flag
    return options


def register_browse_commands(app: typer.Typer, ctx_store: CLIContext) -> None:
    """Attach the ``classes`` and ``render`` commands."""

    @app.command("classes")
    def classes(
        file: Path = typer.Argument(..., help="APK/zip archive or raw .dex file."),
        filter_text: str = typer.Option("", "--filter", "-f", help="Only show matching classes/methods."),
    ) -> None:
        """Print the package/class/method tree."""
        with _open(ctx_store, file) as session:
            session.tree.set_filter(filter_text)
            nodes = session.tree.visible_nodes()
            if not nodes:
                ctx_store.console.print("[yellow]No matching classes.[/yellow]")
                return
            root = Tree(Text(session.source_path.name))
            _add_nodes(root, nodes)
            ctx_store.console.print(root)

    @app.command("render")
    def render(
        file: Path = typer.Argument(..., help="APK/zip archive or raw .dex file."),
        class_ref: str = typer.Option(..., "--class", "-c", help="Fully-qualified class name."),
        method: Optional[str] = typer.Option(None, "--method", "-m", help="Method name or key, e.g. 'bar(int)'."),
        language: Optional[str] = typer.Option(None, "--language", "-l", help="Output language."),
        annotations: Optional[bool] = typer.Option(None, "--annotations/--no-annotations", help="Class annotations."),
        name: Optional[bool] = typer.Option(None, "--name/--no-name", help="Class name and signature."),
        details: Optional[bool] = typer.Option(None, "--details/--no-details", help="Superclass, interfaces, source."),
        fields: Optional[bool] = typer.Option(None, "--fields/--no-fields", help="Field declarations."),
        methods: Optional[bool] = typer.Option(None, "--methods/--no-methods", help="Method bodies."),
    ) -> None:
        """Render a class or method with syntax colors."""
        try:
            base = ClassDisplayOptions.from_sections(ctx_store.settings.class_options)
        except (DVError, ValueError) as exc:
            raise _fail(ctx_store, exc) from exc
        options = build_options(
            base,
            {
                ClassDisplayOptions.ANNOTATIONS: annotations,
                ClassDisplayOptions.NAME: name,
                ClassDisplayOptions.DETAILS: details,
                ClassDisplayOptions.FIELDS: fields,
                ClassDisplayOptions.METHODS: methods,
            },
        )
        with _open(ctx_store, file, language, options) as session:
            try:
                target: SelectionTarget = ClassTarget(class_ref)
                if method:
                    target = MethodTarget(
                        class_ref, resolve_method_ref(session.model, class_ref, method)
                    )
                document = session.pipeline.set_selection(target)
            except DVError as exc:
                raise _fail(ctx_store, exc) from exc
            ctx_store.console.print(document_to_text(document), end="")
