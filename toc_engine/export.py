"""Export helpers for generated tables of contents."""

from __future__ import annotations

import csv
from pathlib import Path

from .models import TocFormat, TocResult

STATISTICS_CSV_HEADER = [
    "Filename",
    "Original Size",
    "Total Headings",
    "Max Depth",
    "Avg Depth",
    "Duplicate Anchors",
    "Processing Time",
    "Format",
    "Status",
]

_EXTENSIONS = {
    TocFormat.HTML: ".html",
    TocFormat.JSON: ".json",
}


def toc_file_extension(toc_format: TocFormat) -> str:
    return _EXTENSIONS.get(toc_format, ".md")


def write_toc_file(output_dir: Path, source: Path, content: str, toc_format: TocFormat) -> Path:
    """Write rendered output to ``<output_dir>/<stem>-toc<extension>``.

    Args:
        output_dir: Existing directory receiving the file.
        source: Path of the document the output was generated from.
        content: Text to write.
        toc_format: Format of the output, selecting the file extension.

    Returns:
        Path: Path of the written file.

    Raises:
        IOError: If the file cannot be written.

    Examples:
        write_toc_file(Path("out"), Path("docs/guide.md"), toc, TocFormat.HTML)
        # Path("out/guide-toc.html")
    """
    target = output_dir / f"{source.stem}-toc{toc_file_extension(toc_format)}"
    try:
        target.write_text(content, encoding="UTF-8")
    except OSError as error:
        error_message = f"Error writing {target}: {error}"
        raise IOError(error_message) from error
    return target


def prepend_toc(document: str, toc: str) -> str:
    """Place a rendered TOC above a document, separated by a blank line.

    Examples:
        prepend_toc("# Title\\n", "- [Title](#title)")  # "- [Title](#title)\\n\\n# Title\\n"
    """
    return f"{toc}\n\n{document}"


def format_file_size(size: int) -> str:
    """Format a byte count for humans.

    Examples:
        format_file_size(0)  # "0 Bytes"
        format_file_size(1536)  # "1.5 KB"
    """
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    for unit in ("Bytes", "KB", "MB"):
        if value < 1024:
            return f"{value:.2f}".rstrip("0").rstrip(".") + f" {unit}"
        value /= 1024
    return f"{value:.2f}".rstrip("0").rstrip(".") + " GB"


def statistics_row(
    filename: str, size: int, result: TocResult | None, status: str = "completed"
) -> list[str]:
    """Build one statistics CSV row for a processed document.

    Args:
        filename: Display name of the document.
        size: Document size in bytes.
        result: Generation result, or None when processing failed.
        status: Processing status, ``"completed"`` or ``"error"``.

    Returns:
        list[str]: Cells matching `STATISTICS_CSV_HEADER`. Result-derived cells
            are empty when `result` is None.
    """
    if result is None:
        return [filename, format_file_size(size), "", "", "", "", "", "", status]

    statistics = result.statistics
    return [
        filename,
        format_file_size(size),
        str(statistics.total_headings),
        str(statistics.max_depth),
        f"{statistics.average_depth:.2f}",
        str(len(statistics.duplicate_anchors)),
        f"{statistics.processing_time:.2f}ms",
        result.format.value,
        status,
    ]


def write_statistics_csv(filepath: Path, rows: list[list[str]]) -> None:
    """Write statistics rows, with a header, as a fully quoted CSV file.

    Raises:
        IOError: If the file cannot be written.
    """
    try:
        with open(filepath, "w", encoding="UTF-8", newline="") as stream:
            writer = csv.writer(stream, quoting=csv.QUOTE_ALL)
            writer.writerow(STATISTICS_CSV_HEADER)
            writer.writerows(rows)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
