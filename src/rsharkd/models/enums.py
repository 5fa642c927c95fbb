"""Enumerations for the radio daemon."""

from enum import Enum
from typing import Optional


class Modulation(str, Enum):
    """Radio band, selects the frequency encoding and packet discriminator."""

    AM = "AM"
    FM = "FM"

    @classmethod
    def parse(cls, value: object) -> Optional["Modulation"]:
        """Resolve a case-insensitive band name, None if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None


class CommitPolicy(str, Enum):
    """When a requested configuration becomes the current one."""

    OPTIMISTIC = "optimistic"  # Held before device writes, kept even if a write fails
    CONFIRMED = "confirmed"    # Held only after every device write succeeded
