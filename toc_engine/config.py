"""Settings loading, templates, and validation."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path

from .exceptions import InvalidSettingsError
from .models import BulletStyle, CaseStyle, IndentStyle, TocFormat


@dataclass
class TocSettings:
    """Settings controlling how a table of contents is rendered.

    Attributes:
        format: Output format (``markdown``, ``html``, ``json``, ``plain``, or
            ``numbered``).
        min_depth: Smallest heading level to include.
        max_depth: Largest heading level to include.
        include_links: Whether entries link to their heading anchors.
        bullet_style: Bullet used by the markdown format.
        indent_style: Indentation for nested entries (``spaces``, ``tabs``, or
            ``none``).
        case_style: Case transform applied to entry text.
        custom_prefix: Bullet literal used when `bullet_style` is ``custom``.
        remove_numbers: Strip a leading number such as ``"1. "`` from entries.
        remove_special_chars: Strip non-word characters from entries.
        custom_anchor_prefix: Text prepended to every anchor reference.
        preserve_unicode: Treat Unicode letters and digits as word characters
            in anchors and special-character removal.

    Enum-valued fields also accept their string values, which are converted by
    `normalize_settings`.

    Examples:
        TocSettings(format="numbered", max_depth=3)
    """

    # Output
    format: TocFormat | str = TocFormat.MARKDOWN

    # Depth window
    min_depth: int = 1
    max_depth: int = 6

    # Formatting
    include_links: bool = True
    bullet_style: BulletStyle | str = BulletStyle.DASH
    indent_style: IndentStyle | str = IndentStyle.SPACES
    case_style: CaseStyle | str = CaseStyle.ORIGINAL
    custom_prefix: str = "-"
    remove_numbers: bool = False
    remove_special_chars: bool = False

    # Anchors
    custom_anchor_prefix: str = ""
    preserve_unicode: bool = False


class ConfigFileError(InvalidSettingsError):
    """Raised when a configuration file holds an unusable settings table.

    Examples:
        raise ConfigFileError("Invalid `[tool.toc-engine]` settings in pyproject.toml")
    """


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "format": TocFormat,
    "bullet_style": BulletStyle,
    "indent_style": IndentStyle,
    "case_style": CaseStyle,
}

TEMPLATES: dict[str, dict[str, object]] = {
    "standard": {
        "format": "markdown",
        "max_depth": 6,
        "min_depth": 1,
        "include_links": True,
        "indent_style": "spaces",
        "bullet_style": "dash",
        "case_style": "original",
    },
    "numbered": {
        "format": "numbered",
        "max_depth": 4,
        "min_depth": 1,
        "include_links": True,
        "indent_style": "spaces",
        "bullet_style": "number",
        "case_style": "original",
    },
    "html": {
        "format": "html",
        "max_depth": 6,
        "min_depth": 1,
        "include_links": True,
        "indent_style": "none",
        "bullet_style": "dash",
        "case_style": "original",
    },
    "plain": {
        "format": "plain",
        "max_depth": 6,
        "min_depth": 1,
        "include_links": False,
        "indent_style": "spaces",
        "bullet_style": "dash",
        "case_style": "original",
    },
    "compact": {
        "format": "markdown",
        "max_depth": 3,
        "min_depth": 1,
        "include_links": True,
        "indent_style": "spaces",
        "bullet_style": "asterisk",
        "case_style": "original",
    },
}


def load_settings(search_path: Path) -> TocSettings:
    """Load settings from the nearest configuration file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.toc-engine]`` table from `pyproject.toml` and the
    ``[toc-engine]`` or ``[tool.toc-engine]`` table from `.toc-engine.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for lookup.

    Returns:
        TocSettings: Loaded settings, not yet normalized or validated.

    Raises:
        ConfigFileError: If a settings table is present but is not a mapping or
            contains unsupported keys.

    Examples:
        load_settings(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_settings = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "toc-engine")]
        )
        if pyproject_settings is not None:
            return pyproject_settings

        dotfile_settings = _load_from_file(
            current / ".toc-engine.toml",
            table_paths=[("toc-engine",), ("tool", "toc-engine")],
        )
        if dotfile_settings is not None:
            return dotfile_settings

        parent = current.parent
        if parent == current:
            break
        current = parent

    return TocSettings()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> TocSettings | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_settings = _extract_table(data, table_path)
        if raw_settings is _MISSING:
            continue
        return _build_settings_from_raw(raw_settings, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_settings_from_raw(
    raw_settings: object, config_file: Path, table_path: tuple[str, ...]
) -> TocSettings:
    table_display = ".".join(table_path)

    if raw_settings is None:
        return TocSettings()

    if not isinstance(raw_settings, dict):
        raise ConfigFileError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return TocSettings(**raw_settings)
    except TypeError as error:
        raise ConfigFileError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_settings(settings: TocSettings) -> TocSettings:
    """Convert string values of enum-valued fields into enum members.

    Args:
        settings: Settings that may carry raw strings, e.g. from TOML or a CLI.

    Returns:
        TocSettings: A new instance whose enum-valued fields are enum members.

    Raises:
        InvalidSettingsError: If a string does not name a member of its enum.

    Examples:
        normalize_settings(TocSettings(format="html")).format  # TocFormat.HTML
    """
    changes = {}
    for name, enum_type in _ENUM_FIELDS.items():
        value = getattr(settings, name)
        if isinstance(value, enum_type):
            continue
        try:
            changes[name] = enum_type(value)
        except ValueError as error:
            choices = ", ".join(member.value for member in enum_type)
            raise InvalidSettingsError(
                f"`{name}` must be one of: {choices} (got {value!r})", setting=name
            ) from error
    return replace(settings, **changes)


def validate_settings(settings: TocSettings) -> None:
    """Validate a `TocSettings` instance.

    Args:
        settings: Settings to validate.

    Returns:
        None.

    Raises:
        InvalidSettingsError: If the depth window is outside ``1..6`` or
            inverted, an enum-valued field holds an unknown value, or a flag or
            text field has the wrong type.

    Examples:
        validate_settings(TocSettings(min_depth=2, max_depth=4))
    """
    settings = normalize_settings(settings)

    _ensure_integers({"min_depth": settings.min_depth, "max_depth": settings.max_depth})

    if not 1 <= settings.min_depth <= 6:
        raise InvalidSettingsError("`min_depth` must be between 1 and 6", setting="min_depth")
    if not 1 <= settings.max_depth <= 6:
        raise InvalidSettingsError("`max_depth` must be between 1 and 6", setting="max_depth")
    if settings.min_depth > settings.max_depth:
        raise InvalidSettingsError("`max_depth` must be >= `min_depth`", setting="max_depth")

    _ensure_booleans(
        {
            "include_links": settings.include_links,
            "remove_numbers": settings.remove_numbers,
            "remove_special_chars": settings.remove_special_chars,
            "preserve_unicode": settings.preserve_unicode,
        }
    )
    _ensure_strings(
        {
            "custom_prefix": settings.custom_prefix,
            "custom_anchor_prefix": settings.custom_anchor_prefix,
        }
    )


def apply_template(settings: TocSettings, name: str | None) -> TocSettings:
    """Apply one of the named `TEMPLATES` on top of `settings`.

    Args:
        settings: Base settings to update.
        name: Template name; None leaves `settings` untouched.

    Returns:
        TocSettings: Settings with the template values applied.

    Raises:
        InvalidSettingsError: If `name` is not a known template.

    Examples:
        apply_template(TocSettings(), "compact").bullet_style  # "asterisk"
    """
    if name is None:
        return settings
    try:
        template = TEMPLATES[name]
    except KeyError as error:
        choices = ", ".join(TEMPLATES)
        raise InvalidSettingsError(
            f"Unknown template {name!r} (expected one of: {choices})", setting="template"
        ) from error
    return replace(settings, **template)


def apply_overrides(settings: TocSettings, **overrides: object) -> TocSettings:
    """Apply override values to a `TocSettings`.

    Args:
        settings: Base settings to update.
        overrides: Override values keyed by field name; values set to None are
            ignored.

    Returns:
        TocSettings: New settings with the overrides applied. The original
        instance is returned when no changes are supplied.

    Raises:
        InvalidSettingsError: If an override name is not a `TocSettings` field.

    Examples:
        updated = apply_overrides(settings, format="plain", max_depth=2)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return settings
    known = {item.name for item in fields(TocSettings)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise InvalidSettingsError(f"Unknown settings: {', '.join(unknown)}")
    return replace(settings, **changes)


def build_settings(
    search_path: Path, template: str | None = None, **overrides: object
) -> TocSettings:
    """Load, template, override, and validate settings.

    Args:
        search_path: Directory where configuration files are resolved.
        template: Optional name of a template applied after the config file.
        overrides: Override values keyed by field name; None values are ignored.

    Returns:
        TocSettings: Normalized, validated settings.

    Raises:
        InvalidSettingsError: If loading, templating, or validation fails.

    Examples:
        settings = build_settings(Path.cwd(), template="numbered", max_depth=3)
    """
    settings = load_settings(search_path)
    settings = apply_template(settings, template)
    settings = apply_overrides(settings, **overrides)
    settings = normalize_settings(settings)
    validate_settings(settings)
    return settings


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSettingsError(f"`{key}` must be an integer", setting=key)


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise InvalidSettingsError(f"`{key}` must be a boolean", setting=key)


def _ensure_strings(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, str):
            raise InvalidSettingsError(f"`{key}` must be a string", setting=key)
