"""Heading tree construction, depth filtering, and flattening."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

from .models import Heading


def build_hierarchy(headings: list[Heading]) -> list[Heading]:
    """Nest a flat, document-ordered heading list into a forest.

    Uses an explicit stack of ancestor candidates: candidates at the same or a
    deeper level than the current heading are popped, the heading is attached
    to the remaining top (or becomes a root), then pushed. A level gap such as
    ``#`` followed by ``###`` nests the deeper heading under the shallower one.

    The input records are not modified; the forest is built from copies.

    Args:
        headings: Flat headings in document order.

    Returns:
        list[Heading]: Root headings, each carrying its nested children.

    Examples:
        build_hierarchy(scan_headings("# A\\n## B\\n# C"))  # [A{B}, C]
    """
    roots: list[Heading] = []
    stack: list[Heading] = []

    for heading in headings:
        node = replace(heading, children=[])

        while stack and stack[-1].level >= node.level:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)

        stack.append(node)

    return roots


def filter_by_depth(headings: list[Heading], min_depth: int, max_depth: int) -> list[Heading]:
    """Keep only headings whose level lies in ``[min_depth, max_depth]``.

    Each node is judged on its own level. When a heading is dropped, its
    retained descendants take its place among its siblings, so an in-range
    heading never disappears because an ancestor was out of range. Returns new
    nodes and leaves `headings` untouched.

    Args:
        headings: Heading forest to filter.
        min_depth: Smallest level to keep.
        max_depth: Largest level to keep.

    Returns:
        list[Heading]: Filtered forest in document order.

    Examples:
        filter_by_depth(build_hierarchy(scan_headings("# A\\n## B")), 2, 6)  # [B]
    """
    filtered: list[Heading] = []

    for heading in headings:
        children = filter_by_depth(heading.children, min_depth, max_depth)
        if min_depth <= heading.level <= max_depth:
            filtered.append(replace(heading, children=children))
        else:
            filtered.extend(children)

    return filtered


def iter_headings(headings: list[Heading]) -> Iterator[Heading]:
    """Yield every heading of a forest in pre-order (document order)."""
    stack = list(reversed(headings))
    while stack:
        heading = stack.pop()
        yield heading
        stack.extend(reversed(heading.children))


def flatten_headings(headings: list[Heading]) -> list[Heading]:
    return list(iter_headings(headings))
