"""Markdown heading scanning."""

from __future__ import annotations

from .constants import HEADING_PATTERN, LINE_SPLIT_PATTERN
from .models import Heading
from .slugify import generate_anchor


def split_lines(document: str) -> list[str]:
    """Split a document on ``\\n`` or ``\\r\\n`` line endings.

    Other characters that `str.splitlines` treats as line boundaries (form
    feeds, Unicode separators) stay inside their line, so line numbers match
    what an editor shows.

    Args:
        document: Full document text.

    Returns:
        list[str]: Lines without their terminators.

    Examples:
        split_lines("# A\\r\\n## B")  # ["# A", "## B"]
    """
    return LINE_SPLIT_PATTERN.split(document)


def scan_headings(document: str, preserve_unicode: bool = False) -> list[Heading]:
    """Extract ATX headings from Markdown text as a flat, ordered list.

    A line is a heading when it starts with one to six ``#`` characters
    followed by at least one space or tab and some text. A marker followed
    only by whitespace (``"#   "``) is a heading with empty text. Everything
    else, including ``#NoSpace`` and ``####### Seven``, is skipped. Markers
    inside fenced code blocks are not special-cased.

    Args:
        document: Markdown text to scan.
        preserve_unicode: Forwarded to `generate_anchor`.

    Returns:
        list[Heading]: Headings in document order, each without children.

    Examples:
        scan_headings("# Title\\n\\n## Section")
    """
    headings: list[Heading] = []

    for line_number, line in enumerate(split_lines(document), start=1):
        match = HEADING_PATTERN.match(line)
        if not match:
            continue

        text = match.group(2).strip()
        headings.append(
            Heading(
                level=len(match.group(1)),
                text=text,
                anchor=generate_anchor(text, preserve_unicode=preserve_unicode),
                line=line_number,
            )
        )

    return headings
