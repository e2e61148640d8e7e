"""Shared test fixtures for stepdoc tests."""

import itertools
import logging
import os
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stepdoc.export import export_json
from stepdoc.models import Document, StepGroup, TextStep

EXPORTED_AT = datetime(2026, 1, 4, 12, 0, tzinfo=UTC)


def make_group(group_id: str, title: str, count: int, prefix: str) -> StepGroup:
    """Build a group of ``count`` text steps with ids ``<prefix>1..``."""
    steps = tuple(
        TextStep(
            id=f"{prefix}{i}",
            title=f"{title} step {i}",
            content=f"{prefix}{i} body",
            group_id=group_id,
        )
        for i in range(1, count + 1)
    )
    return StepGroup(id=group_id, title=title, steps=steps)


def consistent(doc: Document) -> Document:
    """Rebuild ``doc`` through the validating constructor."""
    return Document(
        title=doc.title, description=doc.description, groups=doc.groups, steps=doc.steps
    )


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def new_id() -> Callable[[], str]:
    """Deterministic id factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def sample_document() -> Document:
    """G1 with three steps, G2 with two, and one ungrouped step U1."""
    return Document(
        title="Guide",
        description="How to",
        groups=(make_group("g1", "G1", 3, "a"), make_group("g2", "G2", 2, "b")),
        steps=(TextStep(id="u1", title="U1", content="u1 body"),),
    )


@pytest.fixture
def workspace(tmp_path: Path) -> Generator[Path, None, None]:
    """Change cwd to a temporary directory for the duration of the test."""
    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def sample_export(workspace: Path, sample_document: Document) -> Path:
    """Write the sample document as a JSON export in the workspace."""
    path = workspace / "guide.json"
    path.write_text(
        export_json(
            sample_document.title,
            sample_document.description,
            sample_document.steps,
            sample_document.groups,
            exported_at=EXPORTED_AT,
        )
    )
    return path


@pytest.fixture(autouse=True)
def reset_stepdoc_logger() -> Generator[None, None, None]:
    """Undo handler setup done by the CLI callback between tests."""
    yield
    logger = logging.getLogger("stepdoc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
