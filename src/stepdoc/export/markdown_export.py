"""Markdown export.

Markdown has no notion of groups: callers pass the flattened step list
(group order, then ungrouped) and steps are numbered 1..N continuously.
HTML steps are emitted verbatim inside an ``html`` fence.
"""

from collections.abc import Sequence

from ..models import Step
from .numbering import number_flat


def _fence(language: str, content: str) -> str:
    return f"```{language}\n{content}\n```"


def _render_body(step: Step) -> list[str]:
    if step.type == "code":
        return [_fence(step.language or "", step.content)]
    if step.type == "image":
        parts = []
        if step.image_url:
            parts.append(f"![{step.title or 'Image'}]({step.image_url})")
        if step.content:
            parts.append(step.content)
        return parts
    if step.type == "html":
        return [_fence("html", step.content)]
    if step.type == "file":
        name = step.file_name or step.title or "file"
        parts = [f"[📎 {name}]({step.file_data or ''})"]
        if step.content:
            parts.append(step.content)
        return parts
    return [step.content] if step.content else []


def render_step(step: Step, number: int) -> str:
    heading = f"## Step {number}" + (f": {step.title}" if step.title else "")
    return "\n\n".join([heading, *_render_body(step)])


def export_markdown(title: str, description: str, steps: Sequence[Step]) -> str:
    """Render a flat step list as Markdown.

    Args:
        title: Document title, emitted as the top-level heading
        description: Optional description, emitted in italics
        steps: Flattened steps in document order

    Returns:
        Markdown text ending with a newline
    """
    parts = [f"# {title}"]
    if description:
        parts.append(f"*{description}*")
    parts.extend(render_step(step, number) for number, step in number_flat(steps))
    return "\n\n".join(parts) + "\n"
