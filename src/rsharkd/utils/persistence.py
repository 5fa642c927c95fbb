"""Persistence of the radio configuration.

This module provides:

- ``PydanticPersistence``: stateless helpers to load and save any Pydantic
  model as JSON, with the safety features below.
- ``ConfigStore``: the protocol the radio service persists through.
- ``JsonConfigStore``: a ConfigStore writing one JSON file.

Safety Features:
    - Automatic .bak backups before overwriting files
    - Atomic writes using temp file + rename
    - Corrupted files are never silently overwritten by a load
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from rsharkd.exceptions import (
    ConfigFileInvalidError,
    ConfigurationError,
    PersistenceError,
    wrap_pydantic_error,
)
from rsharkd.models import RadioConfig

logger = logging.getLogger(__name__)

# Type variable bound to Pydantic BaseModel
T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """
    Utility class providing shared Pydantic persistence operations.

    All methods are static and thread-safe: they operate on their
    arguments only.

    Example Usage:
        ```python
        config = PydanticPersistence.load_json(Path("radio.conf"), RadioConfig)
        PydanticPersistence.save_json(config, Path("radio.conf"))
        ```
    """

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Load and validate a Pydantic model from a JSON file.

        Args:
            path: Path to the JSON file to load
            model_type: The Pydantic model class to validate against

        Returns:
            Validated model instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax or values are invalid
            OSError: If the file exists but cannot be read
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            json_content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ConfigFileInvalidError(str(path), f"File is not UTF-8 text: {e}") from e

        if not json_content or not json_content.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(json_content)
        except ValidationError as e:
            logger.error(f"Validation error loading {model_type.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def save_json(
        data: BaseModel,
        path: Path,
        indent: int = 2,
        create_parents: bool = True,
        backup: bool = True,
    ) -> None:
        """
        Save a Pydantic model to a JSON file with automatic backup and atomic write.

        Fields are written under their aliases.

        Args:
            data: The Pydantic model instance to save
            path: Path where the file should be saved
            indent: JSON indentation level (default: 2 spaces)
            create_parents: Create parent directories if they don't exist (default: True)
            backup: Create .bak backup before overwriting existing file (default: True)

        Raises:
            OSError: If the file cannot be written (permission denied, disk full, etc.)
            ConfigurationError: If serialization fails
        """
        try:
            json_content = data.model_dump_json(indent=indent, by_alias=True)
        except Exception as e:
            logger.error(f"Unexpected error serializing {type(data).__name__}: {e}")
            raise ConfigurationError(
                user_message=f"Failed to save configuration to {path}",
                technical_message=f"Failed to serialize {type(data).__name__}: {e}",
            ) from e

        if create_parents and path.parent:
            path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            backup_path = path.with_suffix(path.suffix + ".bak")
            shutil.copy2(path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        # Atomic write: write to temp file first, then rename
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(json_content + "\n", encoding="utf-8")
            temp_path.replace(path)
            logger.debug(f"Saved {type(data).__name__} to {path}")
        finally:
            if temp_path.exists():
                temp_path.unlink()

    @staticmethod
    def load_json_or_default(
        path: Path, model_type: type[T], default_factory: Optional[Callable[[], T]] = None
    ) -> T:
        """
        Load a model from JSON, or return a default if the file doesn't exist.

        Raises:
            ConfigFileInvalidError: If the file exists but is invalid
            OSError: If the file exists but cannot be read
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"File not found: {path}, using default {model_type.__name__}")
            return default_factory() if default_factory else model_type()

    @staticmethod
    def validate_json(path: Path, model_type: type[T]) -> tuple[bool, Optional[str]]:
        """
        Validate a JSON file against a Pydantic model without keeping it.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            PydanticPersistence.load_json(path, model_type)
            return True, None
        except FileNotFoundError:
            return False, f"File not found: {path}"
        except ConfigurationError as e:
            return False, e.user_message
        except OSError as e:
            return False, f"Error: {e}"


class ConfigStore(Protocol):
    """Durable storage for the applied radio configuration."""

    def load(self) -> RadioConfig:
        """Load the stored configuration (default when none is stored)."""
        ...

    def save(self, config: RadioConfig) -> None:
        """
        Store the configuration.

        Raises:
            PersistenceError: If it could not be written
        """
        ...


class JsonConfigStore:
    """ConfigStore backed by one JSON file."""

    def __init__(self, path: Path, backup: bool = True):
        self.path = Path(path)
        self.backup = backup

    def load(self) -> RadioConfig:
        """
        Load the configuration file.

        A missing file, or one that exists but holds invalid JSON or
        values, yields the default configuration (the broken file is left
        alone; the next save keeps it as .bak).

        Raises:
            ConfigurationError: If the file exists but cannot be read
        """
        try:
            return PydanticPersistence.load_json_or_default(self.path, RadioConfig)
        except ConfigFileInvalidError as e:
            logger.error(f"Failed to load {self.path}: {e.technical_message}")
            logger.warning("Using default radio configuration")
            return RadioConfig()
        except OSError as e:
            raise ConfigurationError(
                user_message=f"Cannot read configuration file {self.path}: {e.strerror or e}",
                technical_message=f"Reading {self.path} failed: {e}",
                recovery_hint="Check the file's permissions or pass a different --config path",
            ) from e

    def save(self, config: RadioConfig) -> None:
        try:
            PydanticPersistence.save_json(config, self.path, backup=self.backup)
        except (OSError, ConfigurationError) as e:
            logger.error(f"Failed to persist configuration to {self.path}: {e}")
            raise PersistenceError(str(self.path), str(e)) from e
        logger.info(f"Configuration saved to {self.path}")
