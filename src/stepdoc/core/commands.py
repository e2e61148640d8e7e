"""Document commands.

Each command takes a Document snapshot and returns the next snapshot (and,
for creating commands, the created entity). Inputs are never modified.
Failures raise DocumentValidationError or NotFoundError before any new
state is built, so a failed command leaves nothing half-applied.

Containment changes always restamp ``group_id`` together with the container
that holds the step.
"""

from ..errors import DocumentValidationError, NotFoundError
from ..ids import IdFactory, generate_id, unique_id
from ..models import (
    CodeStep,
    Document,
    FileAttachment,
    FileStep,
    GroupPatch,
    HtmlStep,
    ImageStep,
    Step,
    StepGroup,
    StepStyle,
    StepType,
    TextStep,
)

DEFAULT_CODE_LANGUAGE = "javascript"
CODE_PLACEHOLDER = "// Enter your code here"
HTML_PLACEHOLDER = "<p>Enter HTML here</p>"
COPY_SUFFIX = " (copy)"

DEFAULT_TITLES: dict[str, str] = {
    "text": "Text",
    "image": "New image",
    "code": "Code",
    "html": "HTML block",
}


# ============================================================================
# Container helpers
# ============================================================================


def taken_ids(doc: Document) -> set[str]:
    """All step and group ids currently in use."""
    return doc.step_ids() | {group.id for group in doc.groups}


def with_group_id(step: Step, group_id: str | None) -> Step:
    """Return ``step`` carrying ``group_id``, copying only when it differs."""
    if step.group_id == group_id:
        return step
    return step.model_copy(update={"group_id": group_id})


def container_steps(doc: Document, group_id: str | None) -> tuple[Step, ...]:
    """Steps of the ungrouped pool (``None``) or of a group.

    Raises:
        NotFoundError: If the group does not exist
    """
    if group_id is None:
        return doc.steps
    group = doc.find_group(group_id)
    if group is None:
        raise NotFoundError(f"Group not found: {group_id}")
    return group.steps


def replace_container(doc: Document, group_id: str | None, steps: tuple[Step, ...]) -> Document:
    """Return a new document with one container's steps replaced."""
    if group_id is None:
        return doc.model_copy(update={"steps": steps})
    groups = tuple(
        group.model_copy(update={"steps": steps}) if group.id == group_id else group
        for group in doc.groups
    )
    return doc.model_copy(update={"groups": groups})


def insert_at(items: tuple, index: int, item: object) -> tuple:
    return (*items[:index], item, *items[index:])


def _index_of(steps: tuple[Step, ...], step_id: str) -> int:
    for i, step in enumerate(steps):
        if step.id == step_id:
            return i
    raise NotFoundError(f"Step not found: {step_id}")


def _require_title(title: str) -> str:
    clean = title.strip()
    if not clean:
        raise DocumentValidationError("Group title must not be empty")
    return clean


# ============================================================================
# Document fields
# ============================================================================


def set_title(doc: Document, title: str) -> Document:
    return doc.model_copy(update={"title": title})


def set_description(doc: Document, description: str) -> Document:
    return doc.model_copy(update={"description": description})


# ============================================================================
# Groups
# ============================================================================


def create_group(
    doc: Document,
    title: str,
    style: StepStyle | None = None,
    new_id: IdFactory = generate_id,
) -> tuple[Document, StepGroup]:
    """Append a new empty, expanded group.

    Args:
        doc: Current document
        title: Group title, trimmed before use
        style: Optional display style
        new_id: Id source

    Returns:
        (next document, created group)

    Raises:
        DocumentValidationError: If the title is empty or whitespace only
    """
    group = StepGroup(
        id=unique_id(new_id, taken_ids(doc)),
        title=_require_title(title),
        style=style,
    )
    return doc.model_copy(update={"groups": (*doc.groups, group)}), group


def update_group(doc: Document, group_id: str, patch: GroupPatch) -> Document:
    """Shallow-merge the explicitly set fields of ``patch`` into a group.

    A replacement ``steps`` sequence is restamped with the group's id. Its
    ids must be unique and must not belong to any other container.

    Raises:
        NotFoundError: If the group does not exist
        DocumentValidationError: If the new title is empty or steps clash
    """
    group = doc.find_group(group_id)
    if group is None:
        raise NotFoundError(f"Group not found: {group_id}")

    fields = patch.model_fields_set
    updates: dict[str, object] = {}
    if "title" in fields and patch.title is not None:
        updates["title"] = _require_title(patch.title)
    if "is_collapsed" in fields and patch.is_collapsed is not None:
        updates["is_collapsed"] = patch.is_collapsed
    if "style" in fields:
        updates["style"] = patch.style
    if "steps" in fields and patch.steps is not None:
        ids = [step.id for step in patch.steps]
        if len(set(ids)) != len(ids):
            raise DocumentValidationError("Replacement steps contain duplicate ids")
        elsewhere = doc.step_ids() - {step.id for step in group.steps}
        clash = elsewhere.intersection(ids)
        if clash:
            raise DocumentValidationError(
                f"Steps already placed in another container: {', '.join(sorted(clash))}"
            )
        updates["steps"] = tuple(with_group_id(step, group_id) for step in patch.steps)

    groups = tuple(
        g.model_copy(update=updates) if g.id == group_id else g for g in doc.groups
    )
    return doc.model_copy(update={"groups": groups})


def delete_group(doc: Document, group_id: str) -> Document:
    """Remove a group, moving its steps to the end of the ungrouped pool.

    Raises:
        NotFoundError: If the group does not exist
    """
    group = doc.find_group(group_id)
    if group is None:
        raise NotFoundError(f"Group not found: {group_id}")
    released = tuple(with_group_id(step, None) for step in group.steps)
    return doc.model_copy(
        update={
            "groups": tuple(g for g in doc.groups if g.id != group_id),
            "steps": (*doc.steps, *released),
        }
    )


# ============================================================================
# Steps
# ============================================================================


def build_step(
    step_type: StepType,
    step_id: str,
    attachment: FileAttachment | None = None,
    image_url: str | None = None,
    language: str = DEFAULT_CODE_LANGUAGE,
) -> Step:
    """Construct a step with type-specific defaults.

    Raises:
        DocumentValidationError: For file steps without an attachment or
            an unknown step type
    """
    if step_type == "text":
        return TextStep(id=step_id, content="", title=DEFAULT_TITLES["text"])
    if step_type == "image":
        return ImageStep(
            id=step_id, content="", title=DEFAULT_TITLES["image"], image_url=image_url
        )
    if step_type == "code":
        return CodeStep(
            id=step_id,
            content=CODE_PLACEHOLDER,
            title=DEFAULT_TITLES["code"],
            language=language,
        )
    if step_type == "html":
        return HtmlStep(id=step_id, content=HTML_PLACEHOLDER, title=DEFAULT_TITLES["html"])
    if step_type == "file":
        if attachment is None:
            raise DocumentValidationError("File steps require an attachment")
        return FileStep(
            id=step_id,
            content=f"Attached file: {attachment.name}",
            title=attachment.name,
            file_data=attachment.data,
            file_name=attachment.name,
            file_type=attachment.type,
        )
    raise DocumentValidationError(f"Unknown step type: {step_type}")


def add_step(
    doc: Document,
    step_type: StepType,
    attachment: FileAttachment | None = None,
    image_url: str | None = None,
    group_id: str | None = None,
    language: str = DEFAULT_CODE_LANGUAGE,
    new_id: IdFactory = generate_id,
) -> tuple[Document, Step]:
    """Create a step and append it to the ungrouped pool or a group.

    Raises:
        NotFoundError: If ``group_id`` names no group
        DocumentValidationError: See build_step
    """
    steps = container_steps(doc, group_id)
    step = build_step(
        step_type,
        unique_id(new_id, taken_ids(doc)),
        attachment=attachment,
        image_url=image_url,
        language=language,
    )
    step = with_group_id(step, group_id)
    return replace_container(doc, group_id, (*steps, step)), step


def update_step(doc: Document, step: Step) -> Document:
    """Replace the step with the same id wherever it currently lives.

    The replacement keeps its current containment; ``group_id`` on the
    argument is ignored.

    Raises:
        NotFoundError: If no step has that id
    """
    found = doc.find_step(step.id)
    if found is None:
        raise NotFoundError(f"Step not found: {step.id}")
    _, group_id = found
    steps = container_steps(doc, group_id)
    replacement = with_group_id(step, group_id)
    return replace_container(
        doc, group_id, tuple(replacement if s.id == step.id else s for s in steps)
    )


def delete_step(doc: Document, step_id: str) -> Document:
    """Remove a step from whichever container holds it.

    Raises:
        NotFoundError: If no step has that id
    """
    found = doc.find_step(step_id)
    if found is None:
        raise NotFoundError(f"Step not found: {step_id}")
    _, group_id = found
    steps = container_steps(doc, group_id)
    return replace_container(doc, group_id, tuple(s for s in steps if s.id != step_id))


def copy_step(
    doc: Document, step: Step, new_id: IdFactory = generate_id
) -> tuple[Document, Step]:
    """Clone a step right after the source, in the source's container.

    The clone gets a fresh id and ``"<title> (copy)"`` as title when the
    source has one.

    Raises:
        NotFoundError: If the source step is not in the document
    """
    found = doc.find_step(step.id)
    if found is None:
        raise NotFoundError(f"Step not found: {step.id}")
    _, group_id = found
    steps = container_steps(doc, group_id)
    clone = step.model_copy(
        update={
            "id": unique_id(new_id, taken_ids(doc)),
            "title": f"{step.title}{COPY_SUFFIX}" if step.title else None,
            "group_id": group_id,
        }
    )
    position = _index_of(steps, step.id) + 1
    return replace_container(doc, group_id, insert_at(steps, position, clone)), clone
