"""Configuration file exceptions.

This module defines exceptions for the persisted configuration:
- ConfigurationError: Base class for configuration file errors
- ConfigFileInvalidError: Config file has invalid syntax or values
- PersistenceError: Config file could not be written
"""

from .base import RadioSharkError


class ConfigurationError(RadioSharkError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file has invalid JSON syntax or values."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid config file
            parse_error: The parsing or validation error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = "Check for common JSON errors:\n"
        recovery += "  - Trailing commas (remove commas after last item)\n"
        recovery += "  - Missing quotes around strings\n"
        recovery += "  - Unclosed braces or brackets\n"
        recovery += f"  - Edit: {file_path}"

        if "trailing comma" in parse_error.lower():
            user_msg = "Configuration file has a trailing comma"
            recovery = (
                f"Remove the trailing comma from {file_path}\n"
                "JSON doesn't allow commas after the last item in an object or array"
            )
        elif "expecting" in parse_error.lower():
            user_msg = "Configuration file has a syntax error"
        elif "validation error" in parse_error.lower():
            user_msg = "Configuration file has invalid values"
            recovery = f"Fix or remove {file_path}; the default configuration is used otherwise"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.file_path = file_path
        self.parse_error = parse_error


class PersistenceError(ConfigurationError):
    """Applied configuration could not be written to durable storage."""

    def __init__(self, file_path: str, original_error: str):
        """
        Initialize persistence error.

        Args:
            file_path: Path the configuration was being saved to
            original_error: The underlying OS or serialization error
        """
        super().__init__(
            user_message=f"Failed to save configuration to {file_path}: {original_error}",
            technical_message=f"Persisting configuration to {file_path} failed: {original_error}",
            recoverable=True,
            recovery_hint="Check file permissions and disk space. Backup file (.bak) may be available.",
        )
        self.file_path = file_path
        self.original_error = original_error
