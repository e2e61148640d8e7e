"""Persistence adapters for whole-document snapshots.

The document store treats persistence as an opaque collaborator with four
operations (save, load, list, delete) plus a single autosave slot.
FileProjectStore keeps one JSON file per project; MemoryProjectStore keeps
everything in a dict.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from .errors import NotFoundError, StorageError
from .ids import IdFactory, generate_id
from .models import Document, ProjectRecord, StoredProject

logger = logging.getLogger(__name__)

PROJECTS_DIR = "projects"
AUTOSAVE_FILE = "autosave.json"

_PROJECT_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class ProjectStore(Protocol):
    """Contract consumed by DocumentStore."""

    def save(self, snapshot: Document, project_id: str | None = None) -> ProjectRecord: ...

    def load(self, project_id: str) -> Document: ...

    def delete(self, project_id: str) -> None: ...

    def save_autosave(self, snapshot: Document) -> None: ...

    def load_autosave(self) -> Document | None: ...

    def clear_autosave(self) -> None: ...

    def list(self) -> list[ProjectRecord]: ...


def _dump(model: Document | StoredProject) -> str:
    return model.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def _make_record(
    project_id: str, snapshot: Document, previous: ProjectRecord | None
) -> ProjectRecord:
    now = datetime.now()
    return ProjectRecord(
        id=project_id,
        title=snapshot.title,
        created_at=previous.created_at if previous else now,
        updated_at=now,
    )


class FileProjectStore:
    """Projects stored as ``<root>/projects/<id>.json``."""

    def __init__(self, root: Path, new_id: IdFactory = generate_id) -> None:
        self.root = root
        self._new_id = new_id

    @property
    def projects_dir(self) -> Path:
        return self.root / PROJECTS_DIR

    def _path(self, project_id: str) -> Path:
        if not _PROJECT_ID.match(project_id):
            raise NotFoundError(f"Project not found: {project_id}")
        return self.projects_dir / f"{project_id}.json"

    def _read(self, path: Path) -> StoredProject:
        try:
            return StoredProject.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e
        except (UnicodeDecodeError, ValidationError) as e:
            raise StorageError(f"Corrupted project file: {path}") from e

    def _write(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def save(self, snapshot: Document, project_id: str | None = None) -> ProjectRecord:
        """Create a project, or update it when ``project_id`` exists.

        Updating keeps the original creation time.
        """
        previous = None
        if project_id is not None:
            path = self._path(project_id)
            if path.exists():
                previous = self._read(path).record
        else:
            project_id = self._new_id()
            path = self._path(project_id)

        record = _make_record(project_id, snapshot, previous)
        self._write(path, _dump(StoredProject(record=record, document=snapshot)))
        logger.debug("Saved project %s to %s", project_id, path)
        return record

    def load(self, project_id: str) -> Document:
        path = self._path(project_id)
        if not path.exists():
            raise NotFoundError(f"Project not found: {project_id}")
        return self._read(path).document

    def get_record(self, project_id: str) -> ProjectRecord:
        path = self._path(project_id)
        if not path.exists():
            raise NotFoundError(f"Project not found: {project_id}")
        return self._read(path).record

    def delete(self, project_id: str) -> None:
        path = self._path(project_id)
        if not path.exists():
            raise NotFoundError(f"Project not found: {project_id}")
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e

    def save_autosave(self, snapshot: Document) -> None:
        self._write(self.root / AUTOSAVE_FILE, _dump(snapshot))

    def load_autosave(self) -> Document | None:
        path = self.root / AUTOSAVE_FILE
        if not path.exists():
            return None
        try:
            return Document.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            # Unreadable autosave is treated as absent
            logger.warning("Ignoring unreadable autosave %s: %s", path, e)
            return None

    def clear_autosave(self) -> None:
        (self.root / AUTOSAVE_FILE).unlink(missing_ok=True)

    def list(self) -> list[ProjectRecord]:
        """Records of all readable projects, most recently updated first."""
        if not self.projects_dir.exists():
            return []
        records = []
        for path in self.projects_dir.glob("*.json"):
            try:
                records.append(self._read(path).record)
            except StorageError as e:
                logger.warning("Skipping %s", e)
        return sorted(records, key=lambda r: r.updated_at, reverse=True)


class MemoryProjectStore:
    """In-process project store."""

    def __init__(self, new_id: IdFactory = generate_id) -> None:
        self._projects: dict[str, StoredProject] = {}
        self._autosave: Document | None = None
        self._new_id = new_id

    def save(self, snapshot: Document, project_id: str | None = None) -> ProjectRecord:
        previous = None
        if project_id is not None and project_id in self._projects:
            previous = self._projects[project_id].record
        project_id = project_id or self._new_id()
        record = _make_record(project_id, snapshot, previous)
        self._projects[project_id] = StoredProject(record=record, document=snapshot)
        return record

    def load(self, project_id: str) -> Document:
        try:
            return self._projects[project_id].document
        except KeyError:
            raise NotFoundError(f"Project not found: {project_id}") from None

    def delete(self, project_id: str) -> None:
        if self._projects.pop(project_id, None) is None:
            raise NotFoundError(f"Project not found: {project_id}")

    def save_autosave(self, snapshot: Document) -> None:
        self._autosave = snapshot

    def load_autosave(self) -> Document | None:
        return self._autosave

    def clear_autosave(self) -> None:
        self._autosave = None

    def list(self) -> list[ProjectRecord]:
        records = [project.record for project in self._projects.values()]
        return sorted(records, key=lambda r: r.updated_at, reverse=True)
