"""Data models for toc-engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import TocSettings


class TocFormat(Enum):
    """Output formats supported by the renderer.

    Attributes:
        MARKDOWN: Bulleted Markdown list, optionally linked.
        HTML: Nested ``<ul>`` lists.
        JSON: Pretty-printed array of heading objects.
        PLAIN: Indented text lines without bullets or links.
        NUMBERED: Markdown list with hierarchical dotted numbering.
    """

    MARKDOWN = "markdown"
    HTML = "html"
    JSON = "json"
    PLAIN = "plain"
    NUMBERED = "numbered"


class BulletStyle(Enum):
    DASH = "dash"
    ASTERISK = "asterisk"
    PLUS = "plus"
    NUMBER = "number"
    CUSTOM = "custom"


class IndentStyle(Enum):
    SPACES = "spaces"
    TABS = "tabs"
    NONE = "none"


class CaseStyle(Enum):
    ORIGINAL = "original"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    TITLE = "title"
    SENTENCE = "sentence"


@dataclass
class Heading:
    """A Markdown heading and its nested sub-headings.

    Attributes:
        level: Heading level, from 1 (``#``) to 6 (``######``).
        text: Heading content with surrounding whitespace trimmed.
        anchor: Slug derived from `text`, without any configured prefix.
        line: One-based line number of the heading in the source document.
        children: Sub-headings in document order. Each child has a level
            strictly greater than this heading's level.
    """

    level: int
    text: str
    anchor: str
    line: int
    children: list[Heading] = field(default_factory=list)


@dataclass(frozen=True)
class TocStatistics:
    """Structural statistics computed over the unfiltered heading tree.

    Attributes:
        total_headings: Number of headings in the document.
        headings_by_level: Heading count per level, in ascending level order.
        max_depth: Deepest heading level present, 0 for an empty document.
        average_depth: Mean heading level, 0 for an empty document.
        duplicate_anchors: Anchors shared by more than one heading.
        processing_time: Duration of the generation call in milliseconds.
            Ignored when comparing statistics.
    """

    total_headings: int = 0
    headings_by_level: dict[int, int] = field(default_factory=dict)
    max_depth: int = 0
    average_depth: float = 0.0
    duplicate_anchors: frozenset[str] = frozenset()
    processing_time: float = field(default=0.0, compare=False)

    def __hash__(self) -> int:
        # The generated hash would fail on the headings_by_level dict
        return hash(
            (
                self.total_headings,
                tuple(sorted(self.headings_by_level.items())),
                self.max_depth,
                self.average_depth,
                self.duplicate_anchors,
            )
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "total_headings": self.total_headings,
            "headings_by_level": dict(self.headings_by_level),
            "max_depth": self.max_depth,
            "average_depth": self.average_depth,
            "duplicate_anchors": sorted(self.duplicate_anchors),
            "processing_time": self.processing_time,
        }


@dataclass(frozen=True)
class TocResult:
    """Outcome of a single TOC generation.

    Attributes:
        toc: Rendered table of contents.
        headings: Unfiltered heading forest scanned from the document.
        statistics: Statistics describing the whole document.
        format: Format used to render `toc`.
        settings: Snapshot of the settings used for this result.
    """

    toc: str
    headings: list[Heading]
    statistics: TocStatistics
    format: TocFormat
    settings: TocSettings
