"""Configuration value exceptions.

Raised by the frequency codec and the configuration validator when a
single field is malformed:
- ConfigValueError: Base class, carries the offending field
- FormatError: Numeric input could not be parsed
- RangeError: Value is outside the accepted domain for its field
- UnknownModulationError: Modulation is neither AM nor FM
"""

from typing import Any, Optional

from .base import RadioSharkError


class ConfigValueError(RadioSharkError):
    """A single configuration field failed its check."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None, **kwargs):
        """
        Initialize config value error.

        Args:
            message: Why the value is invalid
            field: Configuration field the value belongs to (if known)
            value: The rejected value
        """
        kwargs.setdefault("recoverable", True)
        kwargs.setdefault(
            "technical_message",
            f"{field or 'value'}={value!r}: {message}",
        )
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class FormatError(ConfigValueError):
    """Numeric input could not be parsed."""


class RangeError(ConfigValueError):
    """Value lies outside the accepted domain for its field."""


class UnknownModulationError(ConfigValueError):
    """Modulation is not one of the supported bands."""

    def __init__(self, modulation: Any):
        super().__init__(
            f"unknown modulation {modulation}",
            field="modulation",
            value=modulation,
            recovery_hint="Use AM or FM",
        )
