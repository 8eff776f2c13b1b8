"""Package-specific exception types."""

from __future__ import annotations


class InvalidSettingsError(ValueError):
    """Raised when TOC settings are rejected before generation starts.

    Covers depth windows outside ``1..6``, an inverted window, unknown format
    or style values, and wrongly typed flags.

    Args:
        message: Human-readable description of the rejected value.
        setting: Name of the offending setting, when a single one is at fault.
    """

    def __init__(self, message: str, setting: str | None = None):
        self.setting = setting
        super().__init__(message)
