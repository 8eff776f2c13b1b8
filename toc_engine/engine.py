"""Table of contents generation for Markdown documents."""

from __future__ import annotations

import logging
import time
from dataclasses import replace

from .config import TocSettings, normalize_settings, validate_settings
from .hierarchy import build_hierarchy
from .models import TocResult
from .renderers import render_toc
from .scanner import scan_headings
from .statistics import calculate_statistics

logger = logging.getLogger(__name__)


def generate(document: str, settings: TocSettings | None = None) -> TocResult:
    """Generate a table of contents and document statistics.

    Validates the settings before any scanning, scans ATX headings, nests them,
    renders the headings inside the depth window, and computes statistics over
    the whole, unfiltered tree. A document without headings yields an empty
    `toc` and zero statistics.

    Args:
        document: Markdown text.
        settings: Rendering settings. Defaults to a new `TocSettings` when
            omitted.

    Returns:
        TocResult: A fresh result holding the rendered TOC, the unfiltered
            heading tree, the statistics, and a snapshot of the settings.

    Raises:
        InvalidSettingsError: If the settings fail validation.

    Examples:
        generate("# Intro\\n## Setup").toc  # "- [Intro](#intro)\\n  - [Setup](#setup)"
        generate(text, TocSettings(format="numbered", include_links=False))
    """
    start = time.perf_counter()

    settings = normalize_settings(settings or TocSettings())
    validate_settings(settings)

    headings = build_hierarchy(scan_headings(document, preserve_unicode=settings.preserve_unicode))
    toc = render_toc(headings, settings)

    processing_time = (time.perf_counter() - start) * 1000
    statistics = calculate_statistics(headings, processing_time)

    logger.debug(
        "Rendered %s TOC for %d headings in %.2fms",
        settings.format.value,
        statistics.total_headings,
        processing_time,
    )

    return TocResult(
        toc=toc,
        headings=headings,
        statistics=statistics,
        format=settings.format,
        settings=replace(settings),
    )
