"""Step models for document content units.

A step is a tagged variant keyed on its ``type`` field. Each variant carries
the common fields (id, content, title, style, group back-reference) plus its
own type-specific fields. Wire names are camelCase; attributes are snake_case.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

StepType = Literal["text", "image", "code", "html", "file"]
StyleVariant = Literal["default", "info", "warning", "success", "error"]

STEP_TYPES: tuple[str, ...] = ("text", "image", "code", "html", "file")

STEP_ICONS: dict[str, str] = {
    "default": "📝",
    "info": "ℹ️",
    "warning": "🛑",
    "success": "✅",
    "error": "❌",
}

GROUP_ICONS: dict[str, str] = {
    "default": "📁",
    "info": "ℹ️",
    "warning": "⚠️",
    "success": "✅",
    "error": "❌",
}


class StepStyle(BaseModel):
    """Display style shared by steps and groups.

    Attributes:
        type: Style variant.
        icon: Display icon shown next to the heading.
        background_color: Optional explicit background override.
        border_color: Optional explicit border override.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    type: StyleVariant = "default"
    icon: str | None = None
    background_color: str | None = Field(default=None, alias="backgroundColor")
    border_color: str | None = Field(default=None, alias="borderColor")

    @classmethod
    def preset(cls, variant: StyleVariant, for_group: bool = False) -> "StepStyle":
        """Build a style with the default icon for a variant."""
        icons = GROUP_ICONS if for_group else STEP_ICONS
        return cls(type=variant, icon=icons[variant])


class FileAttachment(BaseModel):
    """Already-read file handed over by the file reading collaborator."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    type: str = "application/octet-stream"
    data: str = Field(description="Self-contained data URI")


class BaseStep(BaseModel):
    """Fields common to every step variant."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    id: str = Field(min_length=1, description="Opaque unique identifier")
    content: str = Field(default="", description="Text, source, markup or caption")
    title: str | None = None
    style: StepStyle | None = None
    group_id: str | None = Field(
        default=None, alias="groupId", description="Id of the containing group"
    )


class TextStep(BaseStep):
    """Plain text; blank lines separate paragraphs."""

    type: Literal["text"] = "text"


class ImageStep(BaseStep):
    """Image with an optional caption in ``content``."""

    type: Literal["image"] = "image"
    image_url: str | None = Field(default=None, alias="imageUrl")


class CodeStep(BaseStep):
    """Source code block."""

    type: Literal["code"] = "code"
    language: str | None = None


class HtmlStep(BaseStep):
    """Raw HTML markup, rendered verbatim by the HTML exporter."""

    type: Literal["html"] = "html"


class FileStep(BaseStep):
    """Attached file embedded as a data URI."""

    type: Literal["file"] = "file"
    file_data: str | None = Field(default=None, alias="fileData")
    file_name: str | None = Field(default=None, alias="fileName")
    file_type: str | None = Field(default=None, alias="fileType")


Step = Annotated[
    TextStep | ImageStep | CodeStep | HtmlStep | FileStep,
    Field(discriminator="type"),
]
