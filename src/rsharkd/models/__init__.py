"""Data models for the radio daemon."""

from .config import RadioConfig, ServerSettings
from .enums import CommitPolicy, Modulation

__all__ = [
    "CommitPolicy",
    "Modulation",
    # Models
    "RadioConfig",
    "ServerSettings",
]
