"""Init command: create the .stepdoc workspace."""

import typer

from ..config import CONFIG_FILE, get_stepdoc_dir, load_config, write_config_template
from ..output import get_output_context


def init() -> None:
    """Initialize stepdoc in the current directory."""
    ctx = get_output_context()
    stepdoc_dir = get_stepdoc_dir()

    try:
        stepdoc_dir.mkdir(exist_ok=True)
        config_path = stepdoc_dir / CONFIG_FILE
        if config_path.exists():
            ctx.print(f"[yellow]Config already exists:[/yellow] {config_path}")
        else:
            write_config_template(stepdoc_dir)
            ctx.print(f"[green]Created config template:[/green] {config_path}")
        config = load_config(stepdoc_dir)
        config.project_store(stepdoc_dir).projects_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        ctx.error(f"Failed to initialize {stepdoc_dir}: {e}")
        raise typer.Exit(1) from None

    ctx.success("stepdoc initialized", data={"path": str(stepdoc_dir)})
