"""Export command: convert a JSON document or saved project."""

from pathlib import Path

import typer

from ..config import get_stepdoc_dir, load_config
from ..core import DocumentStore
from ..export import ExportFormat, ThemeName, export_filename
from ..output import get_output_context


def export(
    source: Path | None = typer.Argument(
        None,
        help="JSON export file to convert",
    ),
    project: str | None = typer.Option(
        None,
        "--project",
        "-p",
        help="Saved project ID to export instead of a file",
    ),
    fmt: ExportFormat | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (default from config)",
    ),
    theme: ThemeName | None = typer.Option(
        None,
        "--theme",
        "-t",
        help="HTML color theme (default from config)",
    ),
    password: str | None = typer.Option(
        None,
        "--password",
        help="HTML only: hide content behind a plain-text password prompt (not encryption)",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: generated name in export.output_dir)",
    ),
) -> None:
    """Export a document to HTML, Markdown or JSON."""
    ctx = get_output_context()

    if (source is None) == (project is None):
        ctx.error("Provide either a JSON file or --project")
        raise typer.Exit(1)

    stepdoc_dir = get_stepdoc_dir()
    config = load_config(stepdoc_dir)
    store = DocumentStore(
        projects=config.project_store(stepdoc_dir),
        code_language=config.steps.code_language,
    )

    if source is not None:
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as e:
            ctx.error(f"Cannot read {source}: {e}")
            raise typer.Exit(1) from None
        loaded = store.import_json(text)
    else:
        loaded = store.load(project)
    if not loaded.ok:
        ctx.error(str(loaded.error))
        raise typer.Exit(1)

    fmt = fmt or config.export.format
    rendered = store.export(fmt, theme=theme or config.export.theme, password=password)
    if not rendered.ok:
        ctx.error(str(rendered.error))
        raise typer.Exit(1)

    target = output or Path(config.export.output_dir) / export_filename(
        store.document.title, fmt
    )
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered.value, encoding="utf-8")
    except OSError as e:
        ctx.error(f"Cannot write {target}: {e}")
        raise typer.Exit(1) from None

    ctx.success(
        f"Exported {fmt.value} to {target}",
        data={"path": str(target), "format": fmt.value},
    )
