"""Output formatting for the stepdoc CLI."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table

from .models import ProjectRecord


@dataclass
class OutputContext:
    """Context for output formatting."""

    console: Console
    json_mode: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any] | list[Any]) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {message}[/red]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format."""
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{message}[/green]")

    def records(self, records: list[ProjectRecord]) -> None:
        """Print saved project records as a table or JSON list."""
        if self.json_mode:
            self.print_json([r.model_dump(mode="json", by_alias=True) for r in records])
            return
        if not records:
            self.console.print("[yellow]No saved projects[/yellow]")
            return
        table = Table("ID", "Title", "Created", "Updated")
        for r in records:
            table.add_row(
                r.id,
                r.title or "(untitled)",
                r.created_at.strftime("%Y-%m-%d %H:%M"),
                r.updated_at.strftime("%Y-%m-%d %H:%M"),
            )
        self.console.print(table)


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by CLI.
    """
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    """Set the global output context. Called by CLI main callback."""
    global _ctx
    _ctx = ctx
