"""
toc-engine: Table of Contents engine for Markdown documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    toc-engine README.md --format numbered

Library Usage:
    from pathlib import Path
    from toc_engine import TocSettings, generate

    content = Path("README.md").read_text()
    result = generate(content, TocSettings(max_depth=3))
    print(result.toc)
    print(result.statistics.duplicate_anchors)
"""

from .config import TEMPLATES, TocSettings
from .engine import generate
from .exceptions import InvalidSettingsError
from .hierarchy import build_hierarchy, filter_by_depth, flatten_headings
from .models import (
    BulletStyle,
    CaseStyle,
    Heading,
    IndentStyle,
    TocFormat,
    TocResult,
    TocStatistics,
)
from .renderers import render_toc
from .scanner import scan_headings
from .slugify import generate_anchor
from .statistics import calculate_statistics

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "generate",
    "scan_headings",
    "generate_anchor",
    "build_hierarchy",
    "filter_by_depth",
    "flatten_headings",
    "render_toc",
    "calculate_statistics",
    # Settings
    "TocSettings",
    "TEMPLATES",
    # Data models
    "Heading",
    "TocResult",
    "TocStatistics",
    "TocFormat",
    "BulletStyle",
    "IndentStyle",
    "CaseStyle",
    # Exceptions
    "InvalidSettingsError",
    # Version
    "__version__",
]
