"""Reorder engine for steps and groups.

Moves are described by a source and destination ``Location``. A location
names a container (a group id, or ``None`` for the ungrouped pool) and an
index inside it. Every move is validated in full before the next document
is built, so an invalid move never leaves a partial change behind.

Same-container moves use array-move semantics: the step is removed first
and then inserted at ``destination.index`` in the shortened sequence.
"""

from dataclasses import dataclass
from enum import Enum

from ..errors import NotFoundError
from ..models import Document, Location, Move, Step
from .commands import container_steps, insert_at, replace_container, with_group_id


class MoveStatus(str, Enum):
    """Outcome of a move request."""

    APPLIED = "applied"
    IGNORED = "ignored"


@dataclass(frozen=True)
class MoveResult:
    """Result of resolving a move."""

    document: Document
    status: MoveStatus
    step: Step | None = None


def _check_index(index: int, upper: int, where: Location) -> None:
    if not 0 <= index <= upper:
        container = where.group_id or "ungrouped"
        raise NotFoundError(f"Index {index} out of range for container {container}")


def move_step(doc: Document, move: Move) -> MoveResult:
    """Resolve a move between or within containers.

    Args:
        doc: Current document
        move: Source and optional destination

    Returns:
        MoveResult with status IGNORED (document unchanged) when the move
        has no destination, APPLIED otherwise.

    Raises:
        NotFoundError: If a container or index does not exist
    """
    if move.destination is None:
        return MoveResult(doc, MoveStatus.IGNORED)

    source, destination = move.source, move.destination
    source_steps = container_steps(doc, source.group_id)
    _check_index(source.index, len(source_steps) - 1, source)
    step = source_steps[source.index]
    remaining = (*source_steps[: source.index], *source_steps[source.index + 1 :])

    if source.group_id == destination.group_id:
        _check_index(destination.index, len(remaining), destination)
        reordered = insert_at(remaining, destination.index, step)
        return MoveResult(
            replace_container(doc, source.group_id, reordered), MoveStatus.APPLIED, step
        )

    destination_steps = container_steps(doc, destination.group_id)
    _check_index(destination.index, len(destination_steps), destination)
    moved = with_group_id(step, destination.group_id)
    result = replace_container(doc, source.group_id, remaining)
    result = replace_container(
        result,
        destination.group_id,
        insert_at(destination_steps, destination.index, moved),
    )
    return MoveResult(result, MoveStatus.APPLIED, moved)


def move_step_to_group(doc: Document, step_id: str, group_id: str | None) -> MoveResult:
    """Move a step by id to the end of a group or of the ungrouped pool.

    Raises:
        NotFoundError: If the step or target group does not exist
    """
    found = doc.find_step(step_id)
    if found is None:
        raise NotFoundError(f"Step not found: {step_id}")
    _, current = found
    source_steps = container_steps(doc, current)
    index = next(i for i, s in enumerate(source_steps) if s.id == step_id)
    target_steps = container_steps(doc, group_id)
    end = len(target_steps) - 1 if current == group_id else len(target_steps)
    return move_step(
        doc,
        Move(
            source=Location(group_id=current, index=index),
            destination=Location(group_id=group_id, index=end),
        ),
    )


def move_group(doc: Document, from_index: int, to_index: int) -> Document:
    """Reorder the groups sequence with array-move semantics.

    Raises:
        NotFoundError: If either index is out of range
    """
    count = len(doc.groups)
    if not 0 <= from_index < count or not 0 <= to_index < count:
        raise NotFoundError(f"Group index out of range: {from_index} -> {to_index}")
    group = doc.groups[from_index]
    remaining = (*doc.groups[:from_index], *doc.groups[from_index + 1 :])
    return doc.model_copy(update={"groups": insert_at(remaining, to_index, group)})
