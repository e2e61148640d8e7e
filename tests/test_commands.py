"""Tests for document commands."""

from collections.abc import Callable

import pytest
from conftest import consistent

from stepdoc.core import (
    add_step,
    copy_step,
    create_group,
    delete_group,
    delete_step,
    update_group,
    update_step,
)
from stepdoc.core.commands import CODE_PLACEHOLDER, HTML_PLACEHOLDER
from stepdoc.errors import DocumentValidationError, NotFoundError
from stepdoc.models import (
    CodeStep,
    Document,
    FileAttachment,
    GroupPatch,
    StepStyle,
    TextStep,
)


class TestCreateGroup:
    """Tests for create_group."""

    def test_appends_trimmed_empty_group(self, sample_document: Document, new_id) -> None:
        """New group goes last, with trimmed title and no steps."""
        doc, group = create_group(sample_document, "  Setup  ", new_id=new_id)
        assert doc.groups[-1] == group
        assert group.title == "Setup"
        assert group.steps == ()
        assert group.is_collapsed is False

    @pytest.mark.parametrize("title", ["", "   ", "\n\t"])
    def test_blank_title_rejected(self, sample_document: Document, title: str) -> None:
        """Whitespace-only titles are a validation error."""
        with pytest.raises(DocumentValidationError):
            create_group(sample_document, title)

    def test_input_document_untouched(self, sample_document: Document, new_id) -> None:
        """Commands return new snapshots."""
        create_group(sample_document, "X", new_id=new_id)
        assert len(sample_document.groups) == 2


class TestUpdateGroup:
    """Tests for update_group."""

    def test_merges_only_set_fields(self, sample_document: Document) -> None:
        """Unset patch fields keep their values."""
        style = StepStyle.preset("info", for_group=True)
        doc = update_group(sample_document, "g1", GroupPatch(style=style))
        doc = update_group(doc, "g1", GroupPatch(is_collapsed=True))
        group = doc.find_group("g1")
        assert group.is_collapsed is True
        assert group.style == style
        assert group.title == "G1"
        assert len(group.steps) == 3

    def test_explicit_none_clears_style(self, sample_document: Document) -> None:
        """Setting style to None removes it."""
        doc = update_group(sample_document, "g1", GroupPatch(style=StepStyle()))
        doc = update_group(doc, "g1", GroupPatch(style=None))
        assert doc.find_group("g1").style is None

    def test_blank_title_rejected(self, sample_document: Document) -> None:
        """Renaming to an empty title fails."""
        with pytest.raises(DocumentValidationError):
            update_group(sample_document, "g1", GroupPatch(title="  "))

    def test_unknown_group(self, sample_document: Document) -> None:
        """Missing group raises NotFoundError."""
        with pytest.raises(NotFoundError):
            update_group(sample_document, "nope", GroupPatch(title="X"))

    def test_replacement_steps_restamped(self, sample_document: Document) -> None:
        """Replacement steps carry the group's id."""
        patch = GroupPatch(steps=(TextStep(id="a3"), TextStep(id="a1"), TextStep(id="a2")))
        doc = consistent(update_group(sample_document, "g1", patch))
        group = doc.find_group("g1")
        assert [s.id for s in group.steps] == ["a3", "a1", "a2"]
        assert all(s.group_id == "g1" for s in group.steps)

    def test_replacement_steps_cannot_steal(self, sample_document: Document) -> None:
        """Ids held by another container are rejected."""
        patch = GroupPatch(steps=(TextStep(id="a1"), TextStep(id="u1")))
        with pytest.raises(DocumentValidationError, match="u1"):
            update_group(sample_document, "g1", patch)

    def test_replacement_steps_must_be_unique(self, sample_document: Document) -> None:
        """Duplicate ids in the replacement are rejected."""
        patch = GroupPatch(steps=(TextStep(id="a1"), TextStep(id="a1")))
        with pytest.raises(DocumentValidationError):
            update_group(sample_document, "g1", patch)


class TestDeleteGroup:
    """Tests for delete_group."""

    def test_steps_move_to_end_of_pool(self, sample_document: Document) -> None:
        """Group steps are appended to the ungrouped pool in order."""
        doc = consistent(delete_group(sample_document, "g1"))
        assert [s.id for s in doc.steps] == ["u1", "a1", "a2", "a3"]
        assert all(s.group_id is None for s in doc.steps)
        assert doc.find_group("g1") is None
        assert [g.id for g in doc.groups] == ["g2"]

    def test_unknown_group(self, sample_document: Document) -> None:
        """Missing group raises NotFoundError."""
        with pytest.raises(NotFoundError):
            delete_group(sample_document, "nope")


class TestAddStep:
    """Tests for add_step."""

    def test_type_defaults(self, new_id) -> None:
        """Each type starts with its default content."""
        doc = Document()
        doc, text = add_step(doc, "text", new_id=new_id)
        doc, image = add_step(doc, "image", image_url="shot.png", new_id=new_id)
        doc, code = add_step(doc, "code", new_id=new_id)
        doc, markup = add_step(doc, "html", new_id=new_id)
        assert text.content == ""
        assert image.content == ""
        assert image.image_url == "shot.png"
        assert isinstance(code, CodeStep)
        assert code.content == CODE_PLACEHOLDER
        assert code.language == "javascript"
        assert markup.content == HTML_PLACEHOLDER
        assert [s.id for s in doc.steps] == ["id-1", "id-2", "id-3", "id-4"]

    def test_code_language_override(self, new_id) -> None:
        """Default code language can be changed."""
        _, code = add_step(Document(), "code", language="python", new_id=new_id)
        assert code.language == "python"

    def test_file_step_from_attachment(self, new_id) -> None:
        """File steps embed the attachment and a download caption."""
        attachment = FileAttachment(name="report.pdf", type="application/pdf", data="data:,x")
        _, step = add_step(Document(), "file", attachment=attachment, new_id=new_id)
        assert step.content == "Attached file: report.pdf"
        assert step.title == "report.pdf"
        assert step.file_data == "data:,x"
        assert step.file_name == "report.pdf"
        assert step.file_type == "application/pdf"

    def test_file_step_requires_attachment(self) -> None:
        """A file step without data is a validation error."""
        with pytest.raises(DocumentValidationError):
            add_step(Document(), "file")

    def test_append_to_group(self, sample_document: Document, new_id) -> None:
        """Steps added to a group carry its id."""
        doc, step = add_step(sample_document, "text", group_id="g2", new_id=new_id)
        consistent(doc)
        assert step.group_id == "g2"
        assert doc.find_group("g2").steps[-1] == step

    def test_unknown_group(self, sample_document: Document) -> None:
        """Adding to a missing group raises NotFoundError."""
        with pytest.raises(NotFoundError):
            add_step(sample_document, "text", group_id="nope")

    def test_skips_taken_ids(self, sample_document: Document) -> None:
        """Colliding ids from the factory are skipped."""
        ids = iter(["a1", "g1", "fresh"])
        _, step = add_step(sample_document, "text", new_id=lambda: next(ids))
        assert step.id == "fresh"


class TestUpdateStep:
    """Tests for update_step."""

    def test_replace_in_group_keeps_containment(self, sample_document: Document) -> None:
        """The replacement stays in its group regardless of its groupId."""
        doc = update_step(sample_document, TextStep(id="a2", content="new", title="T"))
        doc = consistent(doc)
        step, group_id = doc.find_step("a2")
        assert step.content == "new"
        assert group_id == "g1"
        assert step.group_id == "g1"
        assert [s.id for s in doc.find_group("g1").steps] == ["a1", "a2", "a3"]

    def test_replace_can_change_type(self, sample_document: Document) -> None:
        """Full replace allows a different variant."""
        doc = update_step(sample_document, CodeStep(id="u1", content="x = 1", language="python"))
        assert isinstance(doc.steps[0], CodeStep)

    def test_unknown_step(self, sample_document: Document) -> None:
        """Updating a missing step raises NotFoundError."""
        with pytest.raises(NotFoundError):
            update_step(sample_document, TextStep(id="zzz"))


class TestDeleteStep:
    """Tests for delete_step."""

    def test_delete_from_group(self, sample_document: Document) -> None:
        """Steps are removed from their group."""
        doc = delete_step(sample_document, "b1")
        assert [s.id for s in doc.find_group("g2").steps] == ["b2"]

    def test_delete_from_pool(self, sample_document: Document) -> None:
        """Steps are removed from the ungrouped pool."""
        assert delete_step(sample_document, "u1").steps == ()

    def test_unknown_step(self, sample_document: Document) -> None:
        """Deleting a missing step raises NotFoundError."""
        with pytest.raises(NotFoundError):
            delete_step(sample_document, "zzz")


class TestCopyStep:
    """Tests for copy_step."""

    def test_copy_inserted_after_source(self, sample_document: Document, new_id) -> None:
        """Copy lands right after the source in the same group."""
        source = sample_document.find_step("a1")[0]
        doc, clone = copy_step(sample_document, source, new_id=new_id)
        consistent(doc)
        assert [s.id for s in doc.find_group("g1").steps] == ["a1", "id-1", "a2", "a3"]
        assert clone.title == "G1 step 1 (copy)"
        assert clone.group_id == "g1"
        assert clone.content == source.content

    def test_untitled_copy_stays_untitled(self, new_id) -> None:
        """No title means no decorated title."""
        doc = Document(steps=(TextStep(id="s", content="x"),))
        _, clone = copy_step(doc, doc.steps[0], new_id=new_id)
        assert clone.title is None

    def test_unknown_step(self, sample_document: Document) -> None:
        """Copying a step not in the document raises NotFoundError."""
        with pytest.raises(NotFoundError):
            copy_step(sample_document, TextStep(id="zzz"))


def test_ids_track_creations_and_deletions(new_id: Callable[[], str]) -> None:
    """Present ids equal created ids minus deleted ids."""
    doc = Document()
    created: set[str] = set()
    deleted: set[str] = set()

    doc, group = create_group(doc, "G", new_id=new_id)
    for _ in range(3):
        doc, step = add_step(doc, "text", group_id=group.id, new_id=new_id)
        created.add(step.id)
    doc, step = add_step(doc, "code", new_id=new_id)
    created.add(step.id)
    doc, clone = copy_step(doc, step, new_id=new_id)
    created.add(clone.id)
    first = doc.find_group(group.id).steps[0]
    doc = delete_step(doc, first.id)
    deleted.add(first.id)
    doc = delete_group(doc, group.id)

    assert doc.step_ids() == created - deleted
    assert len(doc.all_steps()) == len(created - deleted)
