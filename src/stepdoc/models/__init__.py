"""Pydantic data models for stepdoc documents.

This package defines the data structures used throughout stepdoc for:
- Content units (Step and its variants, StepStyle, FileAttachment)
- Containers (StepGroup, GroupPatch, Document)
- Reorder requests (Location, Move)
- Saved project metadata (ProjectRecord, StoredProject)

All models are Pydantic BaseModel subclasses, enabling:
- JSON serialization with camelCase wire names
- Field validation and discriminated step variants
- Immutable snapshots (copy-on-write updates via model_copy)

Example:
    >>> from stepdoc.models import Document, TextStep
    >>> doc = Document(title="Setup", steps=(TextStep(id="1", content="Hi"),))
    >>> doc.model_dump_json(by_alias=True, exclude_none=True)
"""

from .document import Document
from .group import GroupPatch, StepGroup
from .move import Location, Move
from .record import ProjectRecord, StoredProject
from .step import (
    GROUP_ICONS,
    STEP_ICONS,
    STEP_TYPES,
    BaseStep,
    CodeStep,
    FileAttachment,
    FileStep,
    HtmlStep,
    ImageStep,
    Step,
    StepStyle,
    StepType,
    StyleVariant,
    TextStep,
)

__all__ = [
    "GROUP_ICONS",
    "STEP_ICONS",
    "STEP_TYPES",
    "BaseStep",
    "CodeStep",
    "Document",
    "FileAttachment",
    "FileStep",
    "GroupPatch",
    "HtmlStep",
    "ImageStep",
    "Location",
    "Move",
    "ProjectRecord",
    "Step",
    "StepGroup",
    "StepStyle",
    "StepType",
    "StoredProject",
    "StyleVariant",
    "TextStep",
]
