"""Export engine for stepdoc documents.

This package contains pure converters with no I/O:
- numbering: per-group and cumulative step numbers
- themes: the three color presets
- html_export: standalone HTML page with collapse/copy script
- markdown_export: flattened Markdown
- json_export: canonical JSON export and strict import
- render: format dispatch and export file naming
"""

from .html_export import COPY_MARKER, Paragraph, export_html, split_paragraphs
from .json_export import SCHEMA_VERSION, SUPPORTED_VERSIONS, export_json, import_json
from .markdown_export import export_markdown
from .numbering import number_flat, number_group, number_ungrouped
from .render import CONTENT_TYPES, EXTENSIONS, ExportFormat, export_filename, render_document
from .themes import THEMES, ThemeColors, ThemeName, get_theme

__all__ = [
    "CONTENT_TYPES",
    "COPY_MARKER",
    "EXTENSIONS",
    "SCHEMA_VERSION",
    "SUPPORTED_VERSIONS",
    "THEMES",
    "ExportFormat",
    "Paragraph",
    "ThemeColors",
    "ThemeName",
    "export_filename",
    "export_html",
    "export_json",
    "export_markdown",
    "get_theme",
    "import_json",
    "number_flat",
    "number_group",
    "number_ungrouped",
    "render_document",
    "split_paragraphs",
]
