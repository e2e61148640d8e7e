"""Format dispatch and export file naming."""

import re
from datetime import datetime
from enum import Enum

from ..errors import DocumentValidationError
from ..models import Document
from .html_export import export_html
from .json_export import export_json
from .markdown_export import export_markdown
from .themes import ThemeName


class ExportFormat(str, Enum):
    """Supported export formats."""

    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"


EXTENSIONS: dict[ExportFormat, str] = {
    ExportFormat.HTML: "html",
    ExportFormat.MARKDOWN: "md",
    ExportFormat.JSON: "json",
}

CONTENT_TYPES: dict[ExportFormat, str] = {
    ExportFormat.HTML: "text/html",
    ExportFormat.MARKDOWN: "text/markdown",
    ExportFormat.JSON: "application/json",
}


def _parse_format(fmt: ExportFormat | str) -> ExportFormat:
    try:
        return ExportFormat(fmt)
    except ValueError:
        raise DocumentValidationError(f"Unknown export format: {fmt}") from None


def render_document(
    document: Document,
    fmt: ExportFormat | str,
    theme: ThemeName | str = ThemeName.DARK,
    password: str | None = None,
    exported_at: datetime | None = None,
) -> str:
    """Render a document snapshot in the requested format.

    ``theme`` and ``password`` only apply to HTML; ``exported_at`` only to
    JSON.

    Raises:
        DocumentValidationError: If the format or theme is unknown
    """
    fmt = _parse_format(fmt)
    if fmt is ExportFormat.HTML:
        return export_html(
            document.title,
            document.description,
            document.steps,
            document.groups,
            theme=theme,
            password=password,
        )
    if fmt is ExportFormat.MARKDOWN:
        return export_markdown(document.title, document.description, document.all_steps())
    return export_json(
        document.title,
        document.description,
        document.steps,
        document.groups,
        exported_at=exported_at,
    )


def export_filename(title: str, fmt: ExportFormat | str, now: datetime | None = None) -> str:
    """Build ``<safe title>_<YYYY-MM-DDTHH-MM-SS>.<ext>``.

    Every character outside ``[A-Za-z0-9]`` in the title becomes ``_``.
    """
    fmt = _parse_format(fmt)
    stamp = (now or datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    safe_title = re.sub(r"[^a-zA-Z0-9]", "_", title)
    return f"{safe_title}_{stamp}.{EXTENSIONS[fmt]}"
