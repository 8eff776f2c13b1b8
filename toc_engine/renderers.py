"""Rendering of heading forests into the supported TOC formats."""

from __future__ import annotations

import html
import json
import re
from collections.abc import Callable, Iterator

from .config import TocSettings
from .constants import SPACES_INDENT, TABS_INDENT
from .hierarchy import filter_by_depth
from .models import BulletStyle, CaseStyle, Heading, IndentStyle, TocFormat
from .slugify import word_class

Renderer = Callable[[list[Heading], TocSettings], str]

LEADING_NUMBER_PATTERN = re.compile(r"^[0-9]+\.?\s*")

_BULLETS = {
    BulletStyle.DASH: "- ",
    BulletStyle.ASTERISK: "* ",
    BulletStyle.PLUS: "+ ",
}

_INDENTS = {
    IndentStyle.SPACES: SPACES_INDENT,
    IndentStyle.TABS: TABS_INDENT,
    IndentStyle.NONE: "",
}


def _walk(
    headings: list[Heading], depth: int = 1, path: tuple[int, ...] = ()
) -> Iterator[tuple[Heading, int, tuple[int, ...]]]:
    """Yield ``(heading, depth, path)`` in document order.

    `depth` is the nesting depth in the rendered forest (roots are 1) and
    `path` holds the one-based sibling index at every depth down to the
    heading.
    """
    for index, heading in enumerate(headings, start=1):
        heading_path = (*path, index)
        yield heading, depth, heading_path
        yield from _walk(heading.children, depth + 1, heading_path)


def _indent(depth: int, settings: TocSettings) -> str:
    return _INDENTS[settings.indent_style] * (depth - 1)


def _bullet(index: int, settings: TocSettings) -> str:
    if settings.bullet_style is BulletStyle.NUMBER:
        return f"{index}. "
    if settings.bullet_style is BulletStyle.CUSTOM:
        return f"{settings.custom_prefix} "
    return _BULLETS[settings.bullet_style]


def _anchor(heading: Heading, settings: TocSettings) -> str:
    return f"{settings.custom_anchor_prefix}{heading.anchor}"


def _title_case(text: str, word: str) -> str:
    return re.sub(
        rf"[{word}]\S*", lambda match: match[0][:1].upper() + match[0][1:].lower(), text
    )


def format_text(text: str, settings: TocSettings) -> str:
    """Apply number removal, special-character removal, and case to entry text.

    Steps run in that order, so a case transform never sees characters the
    removals dropped. Anchors are never passed through this function.

    Args:
        text: Heading text as scanned.
        settings: Normalized settings supplying the transforms.

    Returns:
        str: Text ready to be rendered.

    Examples:
        format_text("1. getting started", TocSettings(remove_numbers=True, case_style="title"))
        # "Getting Started" (with normalized settings)
    """
    word = word_class(settings.preserve_unicode)
    formatted = text

    if settings.remove_numbers:
        formatted = LEADING_NUMBER_PATTERN.sub("", formatted)

    if settings.remove_special_chars:
        formatted = re.sub(rf"[^{word}\s]", "", formatted)

    if settings.case_style is CaseStyle.LOWERCASE:
        return formatted.lower()
    if settings.case_style is CaseStyle.UPPERCASE:
        return formatted.upper()
    if settings.case_style is CaseStyle.TITLE:
        return _title_case(formatted, word)
    if settings.case_style is CaseStyle.SENTENCE:
        return formatted[:1].upper() + formatted[1:].lower()
    return formatted


def _entry(heading: Heading, settings: TocSettings) -> str:
    text = format_text(heading.text, settings)
    if settings.include_links:
        return f"[{text}](#{_anchor(heading, settings)})"
    return text


def render_markdown(headings: list[Heading], settings: TocSettings) -> str:
    """Render a bulleted Markdown list, one heading per line.

    Numbered bullets restart at 1 within every sibling group.
    """
    return "\n".join(
        f"{_indent(depth, settings)}{_bullet(path[-1], settings)}{_entry(heading, settings)}"
        for heading, depth, path in _walk(headings)
    )


def render_html(headings: list[Heading], settings: TocSettings) -> str:
    """Render nested ``<ul>`` lists on a single line.

    Indentation and bullet settings do not apply. Text and anchors are
    HTML-escaped.
    """

    def render_item(heading: Heading) -> str:
        text = html.escape(heading.text)
        if settings.include_links:
            href = html.escape(_anchor(heading, settings))
            item = f'<li><a href="#{href}">{text}</a>'
        else:
            item = f"<li>{text}"
        if heading.children:
            item += render_list(heading.children)
        return item + "</li>"

    def render_list(items: list[Heading]) -> str:
        return "<ul>" + "".join(render_item(item) for item in items) + "</ul>"

    return render_list(headings)


def _to_json_object(heading: Heading, settings: TocSettings) -> dict[str, object]:
    return {
        "level": heading.level,
        "text": heading.text,
        "anchor": _anchor(heading, settings),
        "line": heading.line,
        "children": [_to_json_object(child, settings) for child in heading.children],
    }


def render_json(headings: list[Heading], settings: TocSettings) -> str:
    """Render a pretty-printed JSON array of heading objects."""
    return json.dumps(
        [_to_json_object(heading, settings) for heading in headings],
        indent=2,
        ensure_ascii=False,
    )


def render_plain(headings: list[Heading], settings: TocSettings) -> str:
    """Render indented entry text without bullets or links."""
    return "\n".join(
        f"{_indent(depth, settings)}{format_text(heading.text, settings)}"
        for heading, depth, _path in _walk(headings)
    )


def render_numbered(headings: list[Heading], settings: TocSettings) -> str:
    """Render a Markdown list numbered by sibling path (``1.``, ``1.1.``, ``1.2.1.``)."""
    return "\n".join(
        f"{_indent(depth, settings)}{'.'.join(map(str, path))}. {_entry(heading, settings)}"
        for heading, depth, path in _walk(headings)
    )


RENDERERS: dict[TocFormat, Renderer] = {
    TocFormat.MARKDOWN: render_markdown,
    TocFormat.HTML: render_html,
    TocFormat.JSON: render_json,
    TocFormat.PLAIN: render_plain,
    TocFormat.NUMBERED: render_numbered,
}


def render_toc(headings: list[Heading], settings: TocSettings) -> str:
    """Filter an unfiltered heading forest by depth and render it.

    The forest is not modified, so the same scan result can be rendered again
    under different settings.

    Args:
        headings: Unfiltered heading forest, e.g. `TocResult.headings`.
        settings: Normalized, validated settings.

    Returns:
        str: Rendered TOC, or ``""`` when no heading falls in the depth window.

    Examples:
        render_toc(result.headings, replace(result.settings, max_depth=2))
    """
    filtered = filter_by_depth(headings, settings.min_depth, settings.max_depth)
    if not filtered:
        return ""
    return RENDERERS[settings.format](filtered, settings)
