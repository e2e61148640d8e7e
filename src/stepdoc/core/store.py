"""Document store: the stateful facade over the pure commands.

The store holds the current Document snapshot. Every operation runs under
one re-entrant lock, computes the next snapshot with a pure command and
swaps it in only on success. Operations never raise stepdoc errors; they
return a StoreResult whose status is OK, IGNORED or FAILED, and a failed
operation leaves the snapshot untouched.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from ..errors import DocumentValidationError, StepdocError, StorageError
from ..export import ExportFormat, ThemeName, import_json, render_document
from ..ids import IdFactory, generate_id
from ..models import (
    Document,
    FileAttachment,
    GroupPatch,
    Move,
    ProjectRecord,
    Step,
    StepGroup,
    StepStyle,
    StepType,
)
from ..storage import ProjectStore
from . import commands
from .reorder import MoveResult, MoveStatus, move_group, move_step, move_step_to_group

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreStatus(str, Enum):
    """Outcome of a store operation."""

    OK = "ok"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Result of a store operation.

    Attributes:
        status: OK, IGNORED (nothing to do) or FAILED.
        value: Operation-specific payload on success.
        error: The stepdoc error that caused a failure.
    """

    status: StoreStatus
    value: T | None = None
    error: StepdocError | None = None

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.OK


class DocumentStore:
    """Owns the current document and applies commands atomically."""

    def __init__(
        self,
        document: Document | None = None,
        projects: ProjectStore | None = None,
        new_id: IdFactory = generate_id,
        code_language: str = commands.DEFAULT_CODE_LANGUAGE,
    ) -> None:
        self._document = document if document is not None else Document()
        self._projects = projects
        self._new_id = new_id
        self._code_language = code_language
        self._lock = threading.RLock()
        self.project_id: str | None = None

    @property
    def document(self) -> Document:
        """Current snapshot. Snapshots are immutable and safe to share."""
        return self._document

    def _apply(
        self, name: str, command: Callable[[Document], tuple[Document, Any]]
    ) -> StoreResult[Any]:
        with self._lock:
            try:
                next_document, value = command(self._document)
            except StepdocError as e:
                logger.warning("%s failed: %s", name, e)
                return StoreResult(StoreStatus.FAILED, error=e)
            self._document = next_document
            logger.debug("%s applied", name)
            return StoreResult(StoreStatus.OK, value=value)

    def _mutate(self, name: str, command: Callable[[Document], Document]) -> StoreResult[None]:
        return self._apply(name, lambda doc: (command(doc), None))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_step(self, step_id: str) -> Step | None:
        found = self._document.find_step(step_id)
        return found[0] if found else None

    def all_steps(self) -> list[Step]:
        return self._document.all_steps()

    # ------------------------------------------------------------------
    # Document fields
    # ------------------------------------------------------------------

    def set_title(self, title: str) -> StoreResult[None]:
        return self._mutate("set_title", lambda doc: commands.set_title(doc, title))

    def set_description(self, description: str) -> StoreResult[None]:
        return self._mutate(
            "set_description", lambda doc: commands.set_description(doc, description)
        )

    def reset(self) -> StoreResult[None]:
        """Start a new, empty document detached from any saved project."""
        with self._lock:
            self._document = Document()
            self.project_id = None
        return StoreResult(StoreStatus.OK)

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def create_group(self, title: str, style: StepStyle | None = None) -> StoreResult[StepGroup]:
        return self._apply(
            "create_group",
            lambda doc: commands.create_group(doc, title, style=style, new_id=self._new_id),
        )

    def update_group(
        self, group_id: str, patch: GroupPatch | None = None, **changes: Any
    ) -> StoreResult[None]:
        """Merge ``patch`` (or keyword changes) into a group.

        Invalid keyword changes are reported as a failed result.
        """

        def command(doc: Document) -> Document:
            merged = patch if patch is not None else _group_patch(changes)
            return commands.update_group(doc, group_id, merged)

        return self._mutate("update_group", command)

    def delete_group(self, group_id: str) -> StoreResult[None]:
        return self._mutate("delete_group", lambda doc: commands.delete_group(doc, group_id))

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def add_step(
        self,
        step_type: StepType,
        attachment: FileAttachment | None = None,
        image_url: str | None = None,
        group_id: str | None = None,
    ) -> StoreResult[Step]:
        return self._apply(
            "add_step",
            lambda doc: commands.add_step(
                doc,
                step_type,
                attachment=attachment,
                image_url=image_url,
                group_id=group_id,
                language=self._code_language,
                new_id=self._new_id,
            ),
        )

    def update_step(self, step: Step) -> StoreResult[None]:
        return self._mutate("update_step", lambda doc: commands.update_step(doc, step))

    def delete_step(self, step_id: str) -> StoreResult[None]:
        return self._mutate("delete_step", lambda doc: commands.delete_step(doc, step_id))

    def copy_step(self, step: Step) -> StoreResult[Step]:
        return self._apply(
            "copy_step", lambda doc: commands.copy_step(doc, step, new_id=self._new_id)
        )

    # ------------------------------------------------------------------
    # Reordering
    # ------------------------------------------------------------------

    def move(self, move: Move) -> StoreResult[Step]:
        """Apply a drag result. No destination reports IGNORED."""
        with self._lock:
            try:
                result = move_step(self._document, move)
            except StepdocError as e:
                logger.warning("move failed: %s", e)
                return StoreResult(StoreStatus.FAILED, error=e)
            if result.status is MoveStatus.IGNORED:
                logger.debug("move ignored: no destination")
                return StoreResult(StoreStatus.IGNORED)
            self._document = result.document
            return StoreResult(StoreStatus.OK, value=result.step)

    def move_step_to_group(self, step_id: str, group_id: str | None) -> StoreResult[Step]:
        return self._apply(
            "move_step_to_group",
            lambda doc: _unpack(move_step_to_group(doc, step_id, group_id)),
        )

    def move_group(self, from_index: int, to_index: int) -> StoreResult[None]:
        return self._mutate(
            "move_group", lambda doc: move_group(doc, from_index, to_index)
        )

    # ------------------------------------------------------------------
    # Persistence and exchange
    # ------------------------------------------------------------------

    def _require_projects(self) -> ProjectStore:
        if self._projects is None:
            raise StorageError("No project store configured")
        return self._projects

    def save(self) -> StoreResult[ProjectRecord]:
        """Save the current snapshot, updating the bound project if any."""
        with self._lock:
            try:
                record = self._require_projects().save(self._document, self.project_id)
            except StepdocError as e:
                logger.warning("save failed: %s", e)
                return StoreResult(StoreStatus.FAILED, error=e)
            self.project_id = record.id
            logger.info("Saved project %s", record.id)
            return StoreResult(StoreStatus.OK, value=record)

    def load(self, project_id: str) -> StoreResult[Document]:
        """Replace the current document with a saved project."""
        with self._lock:
            try:
                document = self._require_projects().load(project_id)
            except StepdocError as e:
                logger.warning("load failed: %s", e)
                return StoreResult(StoreStatus.FAILED, error=e)
            self._document = document
            self.project_id = project_id
            return StoreResult(StoreStatus.OK, value=document)

    def autosave(self) -> StoreResult[None]:
        with self._lock:
            try:
                self._require_projects().save_autosave(self._document)
            except StepdocError as e:
                logger.warning("autosave failed: %s", e)
                return StoreResult(StoreStatus.FAILED, error=e)
            return StoreResult(StoreStatus.OK)

    def import_json(self, text: str | bytes) -> StoreResult[Document]:
        """Replace the current document with an imported JSON export.

        The new document is detached from any saved project.
        """
        with self._lock:
            try:
                document = import_json(text)
            except StepdocError as e:
                logger.warning("import failed: %s", e)
                return StoreResult(StoreStatus.FAILED, error=e)
            self._document = document
            self.project_id = None
            return StoreResult(StoreStatus.OK, value=document)

    def export(
        self,
        fmt: ExportFormat | str,
        theme: ThemeName | str = ThemeName.DARK,
        password: str | None = None,
        exported_at: datetime | None = None,
    ) -> StoreResult[str]:
        document = self._document
        try:
            output = render_document(
                document, fmt, theme=theme, password=password, exported_at=exported_at
            )
        except StepdocError as e:
            logger.warning("export failed: %s", e)
            return StoreResult(StoreStatus.FAILED, error=e)
        return StoreResult(StoreStatus.OK, value=output)


def _unpack(result: MoveResult) -> tuple[Document, Step | None]:
    return result.document, result.step


def _group_patch(changes: dict[str, Any]) -> GroupPatch:
    try:
        return GroupPatch(**changes)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "patch"
        raise DocumentValidationError(f"Invalid group change {field}: {first['msg']}") from e
