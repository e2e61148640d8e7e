"""Document model: groups plus the ungrouped step pool."""

from pydantic import BaseModel, ConfigDict, model_validator

from .group import StepGroup
from .step import Step


class Document(BaseModel):
    """Whole-document snapshot.

    ``steps`` is the ungrouped pool. Grouped steps live only inside their
    group. Construction checks that step ids are unique across the whole
    document and that every ``group_id`` matches the actual container.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    title: str = ""
    description: str = ""
    groups: tuple[StepGroup, ...] = ()
    steps: tuple[Step, ...] = ()

    @model_validator(mode="after")
    def _check_containment(self) -> "Document":
        seen_groups: set[str] = set()
        seen_steps: set[str] = set()
        for group in self.groups:
            if group.id in seen_groups:
                raise ValueError(f"Duplicate group id: {group.id}")
            seen_groups.add(group.id)
            for step in group.steps:
                if step.id in seen_steps:
                    raise ValueError(f"Duplicate step id: {step.id}")
                if step.group_id != group.id:
                    raise ValueError(
                        f"Step {step.id} is in group {group.id} but has groupId {step.group_id}"
                    )
                seen_steps.add(step.id)
        for step in self.steps:
            if step.id in seen_steps:
                raise ValueError(f"Duplicate step id: {step.id}")
            if step.group_id is not None:
                raise ValueError(f"Ungrouped step {step.id} has groupId {step.group_id}")
            seen_steps.add(step.id)
        return self

    def all_steps(self) -> list[Step]:
        """Flatten to group order followed by the ungrouped pool."""
        flat: list[Step] = []
        for group in self.groups:
            flat.extend(group.steps)
        flat.extend(self.steps)
        return flat

    def step_ids(self) -> set[str]:
        return {step.id for step in self.all_steps()}

    def find_group(self, group_id: str) -> StepGroup | None:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def find_step(self, step_id: str) -> tuple[Step, str | None] | None:
        """Locate a step, searching the ungrouped pool first.

        Returns:
            (step, containing group id or None) or None when absent.
        """
        for step in self.steps:
            if step.id == step_id:
                return step, None
        for group in self.groups:
            for step in group.steps:
                if step.id == step_id:
                    return step, group.id
        return None
