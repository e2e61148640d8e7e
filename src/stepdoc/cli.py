"""stepdoc CLI: export and manage step documents."""

import typer

from stepdoc import __version__

from .commands import export, init, projects_app
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"stepdoc {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="stepdoc",
    help="Build step-by-step documents and export them to HTML, Markdown or JSON",
    no_args_is_help=True,
)

app.command()(init)
app.command()(export)
app.add_typer(projects_app, name="projects")


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """stepdoc - step documents with HTML, Markdown and JSON export."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output))
