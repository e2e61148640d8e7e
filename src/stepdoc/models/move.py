"""Move descriptions consumed by the reorder engine."""

from pydantic import BaseModel, ConfigDict


class Location(BaseModel):
    """A slot in a container. ``group_id=None`` is the ungrouped pool."""

    model_config = ConfigDict(frozen=True)

    group_id: str | None = None
    index: int


class Move(BaseModel):
    """Drag result: ``destination`` is None when dropped outside a container."""

    model_config = ConfigDict(frozen=True)

    source: Location
    destination: Location | None = None
