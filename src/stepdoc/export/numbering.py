"""Step numbering shared by the exporters.

Grouped steps restart at 1 inside every group. Ungrouped steps continue
after the total number of grouped steps, so with groups holding N steps the
first ungrouped step is N + 1. Markdown ignores groups and numbers the flat
list 1..N.
"""

from collections.abc import Sequence

from ..models import Step, StepGroup


def number_group(group: StepGroup) -> list[tuple[int, Step]]:
    return list(enumerate(group.steps, start=1))


def number_ungrouped(
    groups: Sequence[StepGroup], steps: Sequence[Step]
) -> list[tuple[int, Step]]:
    offset = sum(len(group.steps) for group in groups)
    return list(enumerate(steps, start=offset + 1))


def number_flat(steps: Sequence[Step]) -> list[tuple[int, Step]]:
    return list(enumerate(steps, start=1))
