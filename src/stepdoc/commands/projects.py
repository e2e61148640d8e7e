"""Saved project commands."""

from pathlib import Path

import typer
from rich.markup import escape

from ..config import get_stepdoc_dir, load_config
from ..core import DocumentStore
from ..errors import StepdocError
from ..output import get_output_context
from ..storage import FileProjectStore

projects_app = typer.Typer(help="Saved project commands", no_args_is_help=True)


def _project_store() -> FileProjectStore:
    stepdoc_dir = get_stepdoc_dir()
    return load_config(stepdoc_dir).project_store(stepdoc_dir)


@projects_app.command("list")
def list_projects() -> None:
    """List saved projects, most recently updated first."""
    ctx = get_output_context()
    ctx.records(_project_store().list())


@projects_app.command("show")
def show(project_id: str = typer.Argument(..., help="Project ID")) -> None:
    """Show the outline of a saved project."""
    ctx = get_output_context()
    store = DocumentStore(projects=_project_store())
    result = store.load(project_id)
    if not result.ok:
        ctx.error(str(result.error))
        raise typer.Exit(1)

    document = result.value
    if ctx.json_mode:
        ctx.print_json(document.model_dump(mode="json", by_alias=True, exclude_none=True))
        return

    ctx.console.print(f"\n[bold]Title:[/bold] {escape(document.title or '(untitled)')}")
    if document.description:
        ctx.console.print(f"[bold]Description:[/bold] {escape(document.description)}")
    for group in document.groups:
        state = " (collapsed)" if group.is_collapsed else ""
        ctx.console.print(f"[bold]Group:[/bold] {escape(group.title)}{state}")
        for n, step in enumerate(group.steps, start=1):
            ctx.console.print(f"  {n}. ({step.type}) {escape(step.title or '')}")
    offset = sum(len(group.steps) for group in document.groups)
    if document.steps:
        ctx.console.print("[bold]Ungrouped:[/bold]")
        for n, step in enumerate(document.steps, start=offset + 1):
            ctx.console.print(f"  {n}. ({step.type}) {escape(step.title or '')}")


@projects_app.command("delete")
def delete(project_id: str = typer.Argument(..., help="Project ID")) -> None:
    """Delete a saved project."""
    ctx = get_output_context()
    try:
        _project_store().delete(project_id)
    except StepdocError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None
    ctx.success(f"Deleted project {project_id}", data={"id": project_id})


@projects_app.command("import")
def import_project(
    file: Path = typer.Argument(..., help="JSON export to save as a project"),
) -> None:
    """Import a JSON export into the project store."""
    ctx = get_output_context()
    try:
        text = file.read_text(encoding="utf-8")
    except OSError as e:
        ctx.error(f"Cannot read {file}: {e}")
        raise typer.Exit(1) from None

    store = DocumentStore(projects=_project_store())
    imported = store.import_json(text)
    if not imported.ok:
        ctx.error(str(imported.error))
        raise typer.Exit(1)
    saved = store.save()
    if not saved.ok:
        ctx.error(str(saved.error))
        raise typer.Exit(1)

    record = saved.value
    ctx.success(f"Imported project {record.id}", data={"id": record.id, "title": record.title})
