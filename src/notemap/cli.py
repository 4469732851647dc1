"""CLI entrypoints for notemap."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from notemap.config import Settings, load_settings
from notemap.exceptions import SessionNotFoundError
from notemap.layout.connectors import ConnectorParams
from notemap.logging import configure_logging, get_logger, session_context
from notemap.models.diagram import ConnectorStyle, Orientation
from notemap.models.outline import Item
from notemap.parsing.indent import forest_depth, iter_items, parse_outline
from notemap.pipeline import build_diagram
from notemap.render.svg import render_svg
from notemap.sessions import get_session_store

app = typer.Typer(add_completion=False, help="Turn tab-indented notes into tree diagrams")
sessions_app = typer.Typer(add_completion=False, help="Manage stored sessions")
app.add_typer(sessions_app, name="sessions")

logger = get_logger(__name__)
console = Console()


class OutputFormat(str, Enum):
    SVG = "svg"
    JSON = "json"


def _settings() -> Settings:
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings


def _render(
    text: str,
    label: str,
    orientation: Orientation | None,
    style: ConnectorStyle | None,
    fmt: OutputFormat,
    settings: Settings,
) -> str:
    diagram = build_diagram(text, label, orientation=orientation, style=style, settings=settings)
    if fmt == OutputFormat.JSON:
        return json.dumps(diagram.model_dump(mode="json"), ensure_ascii=False, indent=2)
    return render_svg(
        diagram,
        params=ConnectorParams.from_settings(settings),
        label_max_chars=settings.label_max_chars,
    )


def _emit(content: str, output: Path | None) -> None:
    if output is None:
        typer.echo(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    typer.echo(str(output))


@app.command()
def render(
    input_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="UTF-8 text file of tab-indented notes"
    ),
    label: str = typer.Option("", "--label", "-l", help="Root node label (defaults to the file stem)"),
    orientation: Orientation | None = typer.Option(None, "--orientation", help="Depth axis"),
    style: ConnectorStyle | None = typer.Option(None, "--style", help="Connector style"),
    fmt: OutputFormat = typer.Option(OutputFormat.SVG, "--format", "-f", help="Output format"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
) -> None:
    """Render a notes file as SVG or as diagram JSON."""

    settings = _settings()
    text = input_file.read_text(encoding="utf-8")
    logger.info("CLI render requested", extra={"input": str(input_file), "format": fmt.value})
    _emit(_render(text, label or input_file.stem, orientation, style, fmt, settings), output)


def _add_branch(tree: Tree, items: list[Item]) -> None:
    for item in items:
        _add_branch(tree.add(item.text), item.children)


@app.command()
def outline(
    input_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="UTF-8 text file of tab-indented notes"
    ),
    label: str = typer.Option("", "--label", "-l", help="Root label (defaults to the file stem)"),
) -> None:
    """Print the parsed outline as a tree."""

    _settings()
    forest = parse_outline(input_file.read_text(encoding="utf-8"))
    if not forest:
        typer.echo("No diagram to display")
        return
    tree = Tree(label or input_file.stem)
    _add_branch(tree, forest)
    console.print(tree)
    typer.echo(f"{sum(1 for _ in iter_items(forest))} items, {forest_depth(forest)} levels")


@sessions_app.command("create")
def sessions_create(name: str = typer.Argument(..., help="Session name")) -> None:
    """Create a new session and print its id."""

    store = get_session_store(_settings())
    try:
        session = store.create(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(session.id)


@sessions_app.command("list")
def sessions_list() -> None:
    """List sessions."""

    store = get_session_store(_settings())
    sessions = store.list()
    if not sessions:
        typer.echo("No sessions yet")
        return
    table = Table("id", "name", "updated", "preview")
    for s in sessions:
        table.add_row(s.id, s.name, s.updated_at.strftime("%Y-%m-%d %H:%M"), s.preview)
    console.print(table)


@sessions_app.command("show")
def sessions_show(session_id: str = typer.Argument(..., help="Session id")) -> None:
    """Print a session's raw text."""

    store = get_session_store(_settings())
    try:
        typer.echo(store.load_content(session_id))
    except SessionNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


@sessions_app.command("save")
def sessions_save(
    session_id: str = typer.Argument(..., help="Session id"),
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="UTF-8 text file"),
) -> None:
    """Replace a session's text with the contents of a file."""

    store = get_session_store(_settings())
    try:
        with session_context(session_id=session_id, step="save"):
            session = store.save_content(session_id, input_file.read_text(encoding="utf-8"))
    except SessionNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(session.preview)


@sessions_app.command("render")
def sessions_render(
    session_id: str = typer.Argument(..., help="Session id"),
    orientation: Orientation | None = typer.Option(None, "--orientation", help="Depth axis"),
    style: ConnectorStyle | None = typer.Option(None, "--style", help="Connector style"),
    fmt: OutputFormat = typer.Option(OutputFormat.SVG, "--format", "-f", help="Output format"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
) -> None:
    """Render a stored session."""

    settings = _settings()
    store = get_session_store(settings)
    try:
        session = store.get(session_id)
        text = store.load_content(session_id)
    except SessionNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    with session_context(session_id=session_id, step="render"):
        _emit(_render(text, session.name, orientation, style, fmt, settings), output)


@sessions_app.command("delete")
def sessions_delete(session_id: str = typer.Argument(..., help="Session id")) -> None:
    """Delete a session."""

    store = get_session_store(_settings())
    try:
        store.delete(session_id)
    except SessionNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"deleted {session_id}")


if __name__ == "__main__":
    app()
