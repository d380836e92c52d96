"""Exception hierarchy for chronicle.

All errors raised by chronicle derive from :class:`ChronicleError`,
so callers can catch a single type at the command boundary.
"""

from __future__ import annotations


class ChronicleError(Exception):
    """Base class for all chronicle errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ChronicleError):
    """Configuration could not be loaded or used."""


class ConfigNotFoundError(ConfigError):
    """No configuration file could be located."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation.

    Args:
        message: Human readable summary
        errors: Individual validation messages, one per offending field
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()
        details = "\n".join(f"  - {err}" for err in self.errors)
        return f"{super().__str__()}\n{details}"


# =============================================================================
# Changelog assembly
# =============================================================================


class ChangelogError(ChronicleError):
    """The changelog document could not be assembled."""


class UnsupportedGroupingError(ChangelogError):
    """A grouping strategy was requested that is not implemented."""
