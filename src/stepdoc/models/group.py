"""Step group models."""

from pydantic import BaseModel, ConfigDict, Field

from .step import Step, StepStyle


class StepGroup(BaseModel):
    """Named, collapsible container owning an ordered sequence of steps.

    Attributes:
        id: Unique group identifier.
        title: Group heading.
        is_collapsed: Display-only collapse flag.
        style: Optional display style.
        steps: Owned steps in display order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    id: str = Field(min_length=1)
    title: str
    is_collapsed: bool = Field(default=False, alias="isCollapsed")
    style: StepStyle | None = None
    steps: tuple[Step, ...] = ()


class GroupPatch(BaseModel):
    """Partial group update. Only explicitly set fields are applied."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    title: str | None = None
    is_collapsed: bool | None = Field(default=None, alias="isCollapsed")
    style: StepStyle | None = None
    steps: tuple[Step, ...] | None = None
