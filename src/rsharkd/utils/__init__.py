"""Utility modules for rsharkd.

- persistence: JSON persistence of Pydantic models and the config store
"""

from .persistence import ConfigStore, JsonConfigStore, PydanticPersistence

__all__ = ["ConfigStore", "JsonConfigStore", "PydanticPersistence"]
