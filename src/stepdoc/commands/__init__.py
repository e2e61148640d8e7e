"""CLI command implementations for stepdoc.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .export import export
from .init import init
from .projects import projects_app

__all__ = [
    "export",
    "init",
    "projects_app",
]
