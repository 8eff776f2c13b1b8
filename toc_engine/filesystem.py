"""Filesystem helpers for toc-engine."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "TOC_ENGINE_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["TOC_ENGINE_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate the path of a Markdown or text document.

    Args:
        raw_path: User-supplied path (absolute, relative, or ``~``-prefixed).

    Returns:
        Path: Absolute path to the document.

    Raises:
        ValueError: If the path does not exist, is not a regular file, or uses
            an unsupported extension.

    Examples:
        normalize_filepath("docs/README.md")
    """
    path = Path(raw_path).expanduser()

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        error_message = f"{resolved} is not a Markdown file.\n"
        error_message += f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def enforce_file_size(filepath: Path, max_size: int) -> os.stat_result:
    """Guard against documents that exceed the configured maximum size.

    Args:
        filepath: Path to the document being checked.
        max_size: Maximum allowed size in bytes.

    Returns:
        os.stat_result: Stat of the document, for callers reporting its size.

    Raises:
        IOError: If the path cannot be inspected, is not a regular file, or
            is larger than `max_size`.

    Examples:
        enforce_file_size(Path("README.md"), 102400).st_size
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)

    return stat_result


def read_document(filepath: Path) -> str:
    """Read a UTF-8 document with consistent error handling.

    Args:
        filepath: Path to the document.

    Returns:
        str: Document content.

    Raises:
        IOError: If the file is missing, inaccessible, or not valid UTF-8.

    Examples:
        content = read_document(Path("README.md"))
    """
    try:
        with open(filepath, "r", encoding="UTF-8") as file:
            return file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise IOError(error_message) from error
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error
