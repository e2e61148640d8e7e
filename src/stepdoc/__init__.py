"""stepdoc: ordered step documents with HTML, Markdown and JSON export."""

__version__ = "0.1.0"
