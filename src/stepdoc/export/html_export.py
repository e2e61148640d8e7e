"""Self-contained HTML export.

The page carries its own styles and script: groups collapse and expand,
code blocks and ``[COPY]`` paragraphs get copy buttons, and an optional
password prompt hides the content until the typed value matches. The
expected value is embedded in the page as plain text, so the prompt only
keeps casual readers out and provides no confidentiality.
"""

import html
import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from string import Template

from ..models import Step, StepGroup, StepStyle
from .numbering import number_group, number_ungrouped
from .themes import VARIANT_ACCENTS, ThemeColors, ThemeName, get_theme

COPY_MARKER = "[COPY]"

_PARAGRAPH_SPLIT = re.compile(r"\n[ \t]*\n")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")

_CSS = Template("""
* { box-sizing: border-box; }
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    max-width: 860px;
    margin: 0 auto;
    padding: 24px;
    line-height: 1.6;
    background: $bg;
    color: $text;
}
h1 { border-bottom: 3px solid $border; padding-bottom: 10px; }
.description {
    background: $card_bg;
    color: $secondary;
    padding: 16px 20px;
    border-radius: 8px;
    border: 1px solid $border;
    white-space: pre-wrap;
}
.group { margin: 24px 0; border: 1px solid $border; border-radius: 10px; }
.group-header {
    display: flex;
    align-items: center;
    gap: 8px;
    padding: 12px 16px;
    cursor: pointer;
    background: $card_bg;
    border-radius: 10px;
    user-select: none;
}
.group-header h2 { margin: 0; font-size: 1.2em; flex: 1; }
.group-toggle { color: $secondary; transition: transform 0.2s; }
.group.collapsed .group-toggle { transform: rotate(-90deg); }
.group.collapsed .group-body { display: none; }
.group-body { padding: 0 16px 8px; }
.step {
    margin: 20px 0;
    padding: 16px 20px;
    border-radius: 8px;
    background: $card_bg;
    border: 1px solid $border;
}
.step h3 { margin-top: 0; }
.step-icon { margin-right: 6px; }
.caption { color: $secondary; }
.paragraph {
    white-space: pre-wrap;
    font-family: inherit;
    margin: 0 0 12px;
}
.copy-paragraph {
    display: flex;
    align-items: flex-start;
    gap: 8px;
    padding: 8px 12px;
    margin: 0 0 12px;
    border: 1px dashed $border;
    border-radius: 6px;
}
.copy-paragraph .paragraph { flex: 1; margin: 0; }
.code-block { border: 1px solid $border; border-radius: 6px; overflow: hidden; }
.code-header {
    display: flex;
    justify-content: space-between;
    align-items: center;
    padding: 4px 12px;
    font-size: 0.85em;
    color: $secondary;
    border-bottom: 1px solid $border;
}
.code-block pre { margin: 0; padding: 14px; overflow-x: auto; background: #0f172a; }
.code-block code { color: #22c55e; font-family: 'Monaco', 'Consolas', monospace; }
.copy-btn {
    background: transparent;
    color: $text;
    border: 1px solid $border;
    border-radius: 4px;
    padding: 2px 10px;
    cursor: pointer;
}
.step img { max-width: 100%; height: auto; border-radius: 6px; }
.file-link { color: $text; font-weight: 600; }
.gate {
    position: fixed;
    inset: 0;
    display: flex;
    align-items: center;
    justify-content: center;
    background: $bg;
}
.gate-box {
    background: $card_bg;
    border: 1px solid $border;
    border-radius: 10px;
    padding: 24px;
    min-width: 280px;
}
.gate-error { color: #ef4444; }
@media print {
    body { padding: 0; }
    .step { break-inside: avoid; }
    .copy-btn { display: none; }
}
""")

_SCRIPT = """
function toggleGroup(header) {
    header.parentElement.classList.toggle('collapsed');
}
function copyText(text, button) {
    navigator.clipboard.writeText(text).then(function () {
        var label = button.textContent;
        button.textContent = 'Copied';
        setTimeout(function () { button.textContent = label; }, 1500);
    });
}
function copyCode(button) {
    var code = button.closest('.code-block').querySelector('code');
    copyText(code.textContent, button);
}
function copyParagraph(button) {
    copyText(button.getAttribute('data-copy'), button);
}
"""

_PROMPT_SCRIPT = Template("""
var expectedPassword = $expected;
function unlockDocument() {
    var input = document.getElementById('gate-input');
    if (input.value === expectedPassword) {
        document.getElementById('gate').style.display = 'none';
        document.getElementById('document').style.display = 'block';
    } else {
        document.getElementById('gate-error').hidden = false;
    }
}
document.getElementById('gate-input').addEventListener('keydown', function (event) {
    if (event.key === 'Enter') { unlockDocument(); }
});
""")


@dataclass(frozen=True)
class Paragraph:
    """A text paragraph; ``copyable`` when it carried the copy marker."""

    text: str
    copyable: bool = False


def split_paragraphs(content: str) -> list[Paragraph]:
    """Split text on blank lines and detect ``[COPY]`` paragraphs.

    Plain paragraphs keep their indentation; only surrounding blank lines
    and trailing whitespace go. The marker is removed and the remaining text
    stripped. Empty paragraphs are dropped.
    """
    paragraphs = []
    for chunk in _PARAGRAPH_SPLIT.split(content.replace("\r\n", "\n")):
        stripped = chunk.strip()
        if not stripped:
            continue
        if stripped.startswith(COPY_MARKER):
            text = stripped[len(COPY_MARKER) :].strip()
            if text:
                paragraphs.append(Paragraph(text, copyable=True))
            continue
        paragraphs.append(Paragraph(_LEADING_BLANK_LINES.sub("", chunk).rstrip()))
    return paragraphs


def _esc(value: str) -> str:
    return html.escape(value, quote=True)


def _style_classes(style: StepStyle | None) -> str:
    return f" style-{style.type}" if style else ""


def _inline_style(style: StepStyle | None) -> str:
    if style is None:
        return ""
    rules = []
    accent = style.border_color or VARIANT_ACCENTS.get(style.type, "")
    if accent:
        rules.append(f"border-left: 4px solid {accent}")
    if style.background_color:
        rules.append(f"background: {style.background_color}")
    return f' style="{_esc("; ".join(rules))}"' if rules else ""


def _icon(style: StepStyle | None) -> str:
    if style is None or not style.icon:
        return ""
    return f'<span class="step-icon">{_esc(style.icon)}</span>'


def _render_text(content: str) -> str:
    parts = []
    for paragraph in split_paragraphs(content):
        if paragraph.copyable:
            parts.append(
                '<div class="copy-paragraph">'
                f'<pre class="paragraph">{_esc(paragraph.text)}</pre>'
                f'<button type="button" class="copy-btn" data-copy="{_esc(paragraph.text)}" '
                'onclick="copyParagraph(this)">Copy</button>'
                "</div>"
            )
        else:
            parts.append(f'<pre class="paragraph">{_esc(paragraph.text)}</pre>')
    return "\n".join(parts)


def _render_caption(content: str) -> str:
    return f'<p class="caption">{_esc(content)}</p>' if content else ""


def _render_body(step: Step) -> str:
    if step.type == "code":
        language = step.language or ""
        label = f'<span class="code-lang">{_esc(language)}</span>' if language else "<span></span>"
        code_class = f' class="language-{_esc(language)}"' if language else ""
        return (
            '<div class="code-block">'
            f'<div class="code-header">{label}'
            '<button type="button" class="copy-btn" onclick="copyCode(this)">Copy</button>'
            "</div>"
            f"<pre><code{code_class}>{html.escape(step.content, quote=False)}</code></pre>"
            "</div>"
        )
    if step.type == "image":
        image = ""
        if step.image_url:
            alt = step.title or "Image"
            image = f'<img src="{_esc(step.image_url)}" alt="{_esc(alt)}">'
        return "\n".join(part for part in (image, _render_caption(step.content)) if part)
    if step.type == "html":
        return f'<div class="html-content">{step.content}</div>'
    if step.type == "file":
        name = step.file_name or step.title or "file"
        link = (
            f'<a class="file-link" href="{_esc(step.file_data or "")}" '
            f'download="{_esc(name)}">📎 {_esc(name)}</a>'
        )
        return "\n".join(part for part in (link, _render_caption(step.content)) if part)
    return _render_text(step.content)


def render_step(step: Step, number: int) -> str:
    """Render one numbered step card."""
    heading = f"Step {number}" + (f": {step.title}" if step.title else "")
    return (
        f'<div class="step step-{step.type}{_style_classes(step.style)}"'
        f'{_inline_style(step.style)} data-step-id="{_esc(step.id)}">\n'
        f"<h3>{_icon(step.style)}{_esc(heading)}</h3>\n"
        f"{_render_body(step)}\n"
        "</div>"
    )


def render_group(group: StepGroup) -> str:
    """Render a collapsible group with its own 1-based numbering."""
    collapsed = " collapsed" if group.is_collapsed else ""
    steps = "\n".join(render_step(step, number) for number, step in number_group(group))
    return (
        f'<section class="group{collapsed}{_style_classes(group.style)}"'
        f'{_inline_style(group.style)} data-group-id="{_esc(group.id)}">\n'
        '<div class="group-header" onclick="toggleGroup(this)">'
        '<span class="group-toggle">▼</span>'
        f"{_icon(group.style)}<h2>{_esc(group.title)}</h2>"
        f'<span class="group-count">{len(group.steps)}</span>'
        "</div>\n"
        f'<div class="group-body">\n{steps}\n</div>\n'
        "</section>"
    )


def _render_prompt(password: str) -> tuple[str, str]:
    markup = (
        '<div id="gate" class="gate"><div class="gate-box">\n'
        "<p>Enter the password to view this document</p>\n"
        '<input id="gate-input" type="password" autofocus>\n'
        '<button type="button" class="copy-btn" onclick="unlockDocument()">Open</button>\n'
        '<p id="gate-error" class="gate-error" hidden>Wrong password</p>\n'
        "</div></div>"
    )
    # json.dumps gives a JS string literal; "</" must not end the script element
    expected = json.dumps(password).replace("</", "<\\/")
    return markup, _PROMPT_SCRIPT.substitute(expected=expected)


def export_html(
    title: str,
    description: str,
    steps: Sequence[Step],
    groups: Sequence[StepGroup],
    theme: ThemeName | str = ThemeName.DARK,
    password: str | None = None,
) -> str:
    """Render the document as a standalone HTML page.

    Args:
        title: Document title
        description: Optional description shown under the title
        steps: Ungrouped steps, rendered after all groups
        groups: Groups in display order
        theme: Color preset name
        password: When given, content stays hidden until this value is typed

    Returns:
        Complete HTML document
    """
    colors: ThemeColors = get_theme(theme)
    css = _CSS.substitute(
        bg=colors.bg,
        text=colors.text,
        secondary=colors.secondary,
        card_bg=colors.card_bg,
        border=colors.border,
    )

    body = [f"<h1>{_esc(title)}</h1>"]
    if description:
        body.append(f'<div class="description">{_esc(description)}</div>')
    if groups:
        body.append('<div class="groups">')
        body.extend(render_group(group) for group in groups)
        body.append("</div>")
    if steps:
        body.append('<div class="steps">')
        body.extend(render_step(step, number) for number, step in number_ungrouped(groups, steps))
        body.append("</div>")

    prompt_markup, prompt_script = ("", "")
    hidden = ""
    if password is not None:
        prompt_markup, prompt_script = _render_prompt(password)
        hidden = ' style="display: none"'

    content = "\n".join(body)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="UTF-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"<title>{_esc(title)}</title>\n"
        f"<style>{css}</style>\n"
        "</head>\n"
        "<body>\n"
        f"{prompt_markup}\n"
        f'<main id="document" class="document"{hidden}>\n{content}\n</main>\n'
        f"<script>{_SCRIPT}{prompt_script}</script>\n"
        "</body>\n"
        "</html>\n"
    )
