"""Structural statistics over a heading forest."""

from __future__ import annotations

from collections import Counter

from .hierarchy import flatten_headings
from .models import Heading, TocStatistics


def calculate_statistics(headings: list[Heading], processing_time: float = 0.0) -> TocStatistics:
    """Compute counts, depth figures, and anchor collisions for a forest.

    Statistics describe the whole document: pass the unfiltered forest so that
    changing the depth window never changes the reported totals. Duplicate
    anchors are detected on the bare anchors, before any configured prefix.

    Args:
        headings: Unfiltered heading forest.
        processing_time: Elapsed generation time in milliseconds.

    Returns:
        TocStatistics: Statistics for the forest; all zero when it is empty.

    Examples:
        calculate_statistics(build_hierarchy(scan_headings("# A\\n## B\\n# C")))
        # total_headings=3, headings_by_level={1: 2, 2: 1}, max_depth=2
    """
    flat = flatten_headings(headings)
    if not flat:
        return TocStatistics(processing_time=processing_time)

    levels = Counter(heading.level for heading in flat)
    anchors = Counter(heading.anchor for heading in flat)

    return TocStatistics(
        total_headings=len(flat),
        headings_by_level=dict(sorted(levels.items())),
        max_depth=max(levels),
        average_depth=sum(heading.level for heading in flat) / len(flat),
        duplicate_anchors=frozenset(anchor for anchor, count in anchors.items() if count > 1),
        processing_time=processing_time,
    )
