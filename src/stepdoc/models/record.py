"""Persistence records for saved documents."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .document import Document


class ProjectRecord(BaseModel):
    """Metadata returned by the persistence adapter for a saved document."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")


class StoredProject(BaseModel):
    """On-disk envelope: record plus document snapshot."""

    record: ProjectRecord
    document: Document
