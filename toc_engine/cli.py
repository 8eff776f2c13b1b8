"""
Generates a table of contents for one or more Markdown documents.
Prints the TOC (or the document with the TOC prepended) to stdout.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import (
    TEMPLATES,
    TocSettings,
    apply_overrides,
    apply_template,
    build_settings,
    normalize_settings,
    validate_settings,
)
from .engine import generate
from .exceptions import InvalidSettingsError
from .export import prepend_toc, statistics_row, write_statistics_csv, write_toc_file
from .filesystem import enforce_file_size, get_max_file_size, normalize_filepath, read_document
from .models import BulletStyle, CaseStyle, IndentStyle, TocFormat

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def _choices(enum_type) -> click.Choice:
    return click.Choice([member.value for member in enum_type])


@click.command()
@click.version_option()
@click.option("--format", "toc_format", type=_choices(TocFormat), help="Output format")
@click.option("--min-depth", type=int, help="Minimum heading level")
@click.option("--max-depth", type=int, help="Maximum heading level")
@click.option("--links/--no-links", "include_links", default=None, help="Link entries to anchors")
@click.option("--bullet-style", type=_choices(BulletStyle), help="Bullet for markdown output")
@click.option("--indent-style", type=_choices(IndentStyle), help="Indentation for nested entries")
@click.option("--case-style", type=_choices(CaseStyle), help="Case transform for entry text")
@click.option("--custom-prefix", help="Bullet literal used with --bullet-style custom")
@click.option(
    "--remove-numbers/--keep-numbers", default=None, help="Strip leading numbers from entries"
)
@click.option(
    "--remove-special-chars/--keep-special-chars",
    default=None,
    help="Strip non-word characters from entries",
)
@click.option("--anchor-prefix", "custom_anchor_prefix", help="Prefix for every anchor")
@click.option(
    "--preserve-unicode/--ascii-only", default=None, help="Keep Unicode letters in anchors"
)
@click.option("--template", type=click.Choice(list(TEMPLATES)), help="Settings template")
@click.option("--prepend", is_flag=True, help="Print the document with the TOC prepended")
@click.option("--stats", is_flag=True, help="Print statistics as JSON to stderr")
@click.option(
    "--stats-csv",
    type=click.Path(dir_okay=False, writable=True),
    help="Write per-file statistics to a CSV file",
)
@click.option(
    "--output-dir",
    type=click.Path(exists=True, file_okay=False, writable=True),
    help="Write each output to <stem>-toc.<ext> in this directory instead of stdout",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.argument("filepaths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def cli(
    filepaths: tuple[str, ...],
    toc_format: str | None = None,
    min_depth: int | None = None,
    max_depth: int | None = None,
    include_links: bool | None = None,
    bullet_style: str | None = None,
    indent_style: str | None = None,
    case_style: str | None = None,
    custom_prefix: str | None = None,
    remove_numbers: bool | None = None,
    remove_special_chars: bool | None = None,
    custom_anchor_prefix: str | None = None,
    preserve_unicode: bool | None = None,
    template: str | None = None,
    prepend: bool = False,
    stats: bool = False,
    stats_csv: str | None = None,
    output_dir: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for generating Markdown tables of contents.

    Settings are resolved from defaults, the nearest configuration file, the
    selected template, and finally the command-line overrides. The
    configuration file is the one nearest to each document, not to the working
    directory. Each document is processed independently; a failing document is
    reported and the others are still processed.

    Args:
        filepaths: Paths to the Markdown documents to process.
        toc_format: Output format.
        min_depth: Smallest heading level to include.
        max_depth: Largest heading level to include.
        include_links: Whether entries link to their anchors.
        bullet_style: Bullet style for markdown output.
        indent_style: Indentation style for nested entries.
        case_style: Case transform applied to entries.
        custom_prefix: Bullet literal for the custom bullet style.
        remove_numbers: Strip leading numbers from entries.
        remove_special_chars: Strip non-word characters from entries.
        custom_anchor_prefix: Prefix prepended to every anchor.
        preserve_unicode: Keep Unicode letters and digits in anchors.
        template: Name of a settings template.
        prepend: Print each document with its TOC prepended.
        stats: Print statistics as JSON to stderr.
        stats_csv: Path of a CSV file receiving per-document statistics.
        output_dir: Directory receiving one output file per document.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the settings are invalid.
        click.ClickException: If the file size limit is misconfigured, the
            statistics file cannot be written, or any document fails.

    Examples:
        toc-engine README.md --format numbered --max-depth 3
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    overrides = {
        "format": toc_format,
        "min_depth": min_depth,
        "max_depth": max_depth,
        "include_links": include_links,
        "bullet_style": bullet_style,
        "indent_style": indent_style,
        "case_style": case_style,
        "custom_prefix": custom_prefix,
        "remove_numbers": remove_numbers,
        "remove_special_chars": remove_special_chars,
        "custom_anchor_prefix": custom_anchor_prefix,
        "preserve_unicode": preserve_unicode,
    }

    try:
        max_file_size = get_max_file_size()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    # Configuration files are read per document below
    try:
        requested = apply_overrides(apply_template(TocSettings(), template), **overrides)
        validate_settings(normalize_settings(requested))
    except InvalidSettingsError as error:
        raise click.BadParameter(str(error)) from error

    rows: list[list[str]] = []
    failures = 0

    for filepath in filepaths:
        if len(filepaths) > 1:
            click.echo(f"==> {filepath} <==")

        size = 0
        try:
            path = normalize_filepath(filepath)
            size = enforce_file_size(path, max_file_size).st_size
            document = read_document(path)
            settings = build_settings(path.parent, template=template, **overrides)
            result = generate(document, settings)
            output = prepend_toc(document, result.toc) if prepend else result.toc
            if output_dir is not None:
                target = write_toc_file(Path(output_dir), path, output, result.format)
        except (ValueError, IOError) as error:
            failures += 1
            logger.debug("Failed to process %s", filepath, exc_info=True)
            click.echo(f"Error: {error}", err=True)
            rows.append(statistics_row(Path(filepath).name, size, None, status="error"))
            continue

        if output_dir is None:
            click.echo(output, nl=not output.endswith("\n"))
        else:
            click.echo(f"Wrote {target}")
        if stats:
            click.echo(json.dumps(result.statistics.to_dict(), indent=2), err=True)
        rows.append(statistics_row(path.name, size, result))

    if stats_csv is not None:
        try:
            write_statistics_csv(Path(stats_csv), rows)
        except IOError as error:
            raise click.ClickException(str(error)) from error

    if failures:
        raise click.ClickException(f"{failures} of {len(filepaths)} file(s) failed")


if __name__ == "__main__":
    cli()
