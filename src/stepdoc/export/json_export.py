"""JSON export and import.

The JSON document is the canonical round-trip format. Import validates the
schema version, the required fields and the containment invariants before
anything is built; a bad payload is rejected as a whole.
"""

import json
from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import SerializationError
from ..models import Document, Step, StepGroup

SCHEMA_VERSION = "2.0"
SUPPORTED_VERSIONS = frozenset({SCHEMA_VERSION})
REQUIRED_FIELDS = ("title", "description", "steps", "groups", "exportedAt", "version")


class ExportEnvelope(BaseModel):
    """Wire format of a JSON export."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str
    description: str
    steps: tuple[Step, ...]
    groups: tuple[StepGroup, ...]
    exported_at: datetime = Field(alias="exportedAt")
    version: str


def export_json(
    title: str,
    description: str,
    steps: Sequence[Step],
    groups: Sequence[StepGroup],
    exported_at: datetime | None = None,
) -> str:
    """Serialize a document with full fidelity.

    Args:
        title: Document title
        description: Document description
        steps: Ungrouped steps
        groups: Groups with their steps
        exported_at: Timestamp to embed; defaults to now (UTC)

    Returns:
        Indented JSON text
    """
    envelope = ExportEnvelope(
        title=title,
        description=description,
        steps=tuple(steps),
        groups=tuple(groups),
        exported_at=exported_at or datetime.now(UTC),
        version=SCHEMA_VERSION,
    )
    return envelope.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def import_json(text: str | bytes) -> Document:
    """Rebuild a document from a JSON export.

    Raises:
        SerializationError: If the payload is not JSON, has an unsupported
            version, misses required fields or breaks document invariants
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e.msg} (line {e.lineno})") from e
    except UnicodeDecodeError as e:
        raise SerializationError(f"Invalid JSON: not UTF-8 text ({e.reason})") from e

    if not isinstance(raw, dict):
        raise SerializationError("Expected a JSON object at the top level")

    version = raw.get("version")
    if version not in SUPPORTED_VERSIONS:
        raise SerializationError(f"Unsupported schema version: {version!r}")

    missing = [name for name in REQUIRED_FIELDS if name not in raw]
    if missing:
        raise SerializationError(f"Missing required fields: {', '.join(missing)}")

    try:
        envelope = ExportEnvelope.model_validate(raw)
        return Document(
            title=envelope.title,
            description=envelope.description,
            groups=envelope.groups,
            steps=envelope.steps,
        )
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "document"
        raise SerializationError(
            f"Invalid document ({e.error_count()} error(s)); first at {location}: {first['msg']}"
        ) from e
