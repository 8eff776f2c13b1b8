"""Constants used across the toc-engine package."""

from __future__ import annotations

import re

# Markdown patterns
HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+)$")
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")

# Rendering
SPACES_INDENT = "  "
TABS_INDENT = "\t"

# Input files
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".txt", ".text")
DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024
