"""Tests for Markdown export."""

from stepdoc.export import export_markdown
from stepdoc.models import CodeStep, Document, FileStep, HtmlStep, ImageStep, TextStep


def test_flattened_numbering(sample_document: Document) -> None:
    """Groups are flattened and numbered 1..N without restarts."""
    md = export_markdown("Guide", "", sample_document.all_steps())
    headings = [line for line in md.splitlines() if line.startswith("## ")]
    assert headings == [
        "## Step 1: G1 step 1",
        "## Step 2: G1 step 2",
        "## Step 3: G1 step 3",
        "## Step 4: G2 step 1",
        "## Step 5: G2 step 2",
        "## Step 6: U1",
    ]
    assert "G1\n" not in md


def test_title_and_description() -> None:
    md = export_markdown("Guide", "How to", [])
    assert md == "# Guide\n\n*How to*\n"


def test_no_description() -> None:
    md = export_markdown("Guide", "", [TextStep(id="1", title="A", content="Body")])
    assert md == "# Guide\n\n## Step 1: A\n\nBody\n"


def test_code_fence_with_language() -> None:
    md = export_markdown("T", "", [CodeStep(id="1", content="print(1)", language="python")])
    assert "```python\nprint(1)\n```" in md


def test_code_fence_without_language() -> None:
    md = export_markdown("T", "", [CodeStep(id="1", content="x")])
    assert "```\nx\n```" in md


def test_html_kept_verbatim_in_fence() -> None:
    md = export_markdown("T", "", [HtmlStep(id="1", content="<b>x</b>")])
    assert "```html\n<b>x</b>\n```" in md


def test_image_and_caption() -> None:
    md = export_markdown(
        "T", "", [ImageStep(id="1", title="Shot", image_url="https://x/a.png", content="Look")]
    )
    assert "![Shot](https://x/a.png)\n\nLook" in md


def test_image_default_alt() -> None:
    md = export_markdown("T", "", [ImageStep(id="1", image_url="a.png")])
    assert "![Image](a.png)" in md


def test_file_link_and_caption() -> None:
    step = FileStep(id="1", content="Notes", file_data="data:,hi", file_name="a.txt")
    md = export_markdown("T", "", [step])
    assert "[📎 a.txt](data:,hi)\n\nNotes" in md


def test_text_is_raw() -> None:
    md = export_markdown("T", "", [TextStep(id="1", content="Hello\n\n[COPY]World")])
    assert "Hello\n\n[COPY]World" in md
