"""
Centralized error handling utilities.

This module provides a layered approach to error handling:

1. **Custom Exceptions** - Typed, user-friendly error classes (see base, values, device, config modules)
2. **Error Context** - Preserve technical details for logging, show friendly messages to users
3. **Recovery Hints** - Tell users what to do when things fail
4. **Error Isolation** - One failed device write shouldn't stop the others

## Quick Reference

| Scenario | Use This |
|----------|----------|
| Frequency text not numeric | `FormatError` |
| Frequency / LED value out of range | `RangeError` |
| Modulation not AM/FM | `UnknownModulationError` |
| USB transfer failed | `DeviceIOError` (see `wrap_usb_error`) |
| Write after shutdown | `DeviceClosedError` |
| Config file could not be written | `PersistenceError` |
| Several of the above at once | `AggregateError` |

### Handling Patterns

| Pattern | Code |
|---------|------|
| Try multiple writes, collect errors | `collector = collect_errors("apply"); with collector.try_operation(...): ...` |
| Critical section with auto-logging | `with ErrorContext("open device"): ...` |

## Example: Independent Device Writes

```python
collector = collect_errors("apply configuration")

with collector.try_operation("set blue LED intensity", field="blue-led-intensity"):
    device.send(encode_blue_intensity(64))
with collector.try_operation("set red LED", field="red-led"):
    device.send(encode_red_led(True))

collector.raise_if_errors()  # AggregateError listing every failed write
```

## Architecture

```
┌─────────────────────────────────────────┐
│  USER LAYER (CLI/HTTP)              │
│  - Formats error.user_message       │
│  - Shows error.recovery_hint        │
└─────────────────────────────────────────┘
                  ↑
                  │ RadioSharkError
                  │
┌─────────────────────────────────────────┐
│  APPLICATION LAYER (RadioService)   │
│  - Validates before side effects    │
│  - Aggregates per-write failures    │
└─────────────────────────────────────────┘
                  ↑
                  │ usb.core.USBError, OSError
                  │
┌─────────────────────────────────────────┐
│  LOW LEVEL (USB, file I/O)          │
└─────────────────────────────────────────┘
```
"""

import logging
from typing import Optional

from .aggregate import AggregateError
from .base import RadioSharkError
from .config import ConfigFileInvalidError
from .device import DeviceIOError


logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Use this for critical sections where you want consistent error handling.

    Example:
        ```python
        with ErrorContext("open device", logger_instance=logger):
            handle = open_device(identifier)
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, RadioSharkError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> ConfigFileInvalidError:
    """
    Convert a Pydantic validation error raised while reading a config file.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigFileInvalidError describing the syntax or value problem
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON:" in error_msg:
        parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        error_lines = []
        for err in error.errors():
            field = ".".join(str(loc) for loc in err.get("loc", ("unknown",)))
            msg = err.get("msg", "validation failed")
            error_lines.append(f"{field}: {msg}")
        if error_lines:
            return ConfigFileInvalidError(
                file_path,
                f"{len(error_lines)} validation error(s): " + "; ".join(error_lines),
            )

    return ConfigFileInvalidError(file_path, error_msg)


def wrap_usb_error(
    error: Exception,
    identifier: Optional[str] = None,
    action: str = "write to device",
    field: Optional[str] = None,
) -> DeviceIOError:
    """
    Convert low-level USB errors to a DeviceIOError.

    Maps the common libusb failure modes (unplugged, permission denied,
    timeout) to user-friendly messages.

    Args:
        error: The original exception from pyusb
        identifier: The device identifier involved in the error
        action: What was being attempted
        field: Configuration field whose write failed (if any)

    Returns:
        A DeviceIOError with appropriate message
    """
    error_msg = str(error)
    errno = getattr(error, "errno", None)
    lowered = error_msg.lower()

    if errno == 13 or "access denied" in lowered or "permission" in lowered:
        reason = "permission denied"
    elif errno == 19 or "no such device" in lowered:
        reason = "device unplugged"
    elif errno in (60, 110) or "timed out" in lowered or "timeout" in lowered:
        reason = "timed out"
    else:
        reason = error_msg

    return DeviceIOError(
        user_message=f"failed to {action}: {reason}",
        identifier=identifier,
        original_error=error_msg,
        field=field,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns a tuple of (message, recovery_hint).

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, RadioSharkError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None


def collect_errors(
    operation: str,
    catch: tuple[type[BaseException], ...] = (RadioSharkError,),
) -> "ErrorCollector":
    """
    Create an error collector for batch operations.

    Use this when you want to attempt multiple operations and collect
    all errors before reporting them.

    Args:
        operation: Description of the overall operation
        catch: Exception types that are collected; anything else propagates

    Returns:
        ErrorCollector instance
    """
    return ErrorCollector(operation, catch=catch)


class ErrorCollector:
    """
    Collects multiple errors during batch operations.

    Allows operations to continue even if some fail, then
    report all failures at once.
    """

    def __init__(
        self,
        operation: str,
        catch: tuple[type[BaseException], ...] = (RadioSharkError,),
    ):
        """
        Initialize error collector.

        Args:
            operation: Description of the overall operation
            catch: Exception types that are collected
        """
        self.operation = operation
        self.catch = catch
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        """Get the number of errors collected."""
        return len(self.errors)

    def add(self, sub_operation: str, error: Exception) -> None:
        """Record an error produced outside try_operation."""
        self.errors.append((sub_operation, error))

    def try_operation(self, sub_operation: str, field: Optional[str] = None):
        """
        Context manager for a single operation within the batch.

        Args:
            sub_operation: Description of this specific operation
            field: Configuration field the operation concerns; attached to
                collected errors that don't name one themselves

        Returns:
            Context manager that catches and stores errors
        """
        return self._OperationContext(self, sub_operation, field)

    def get_summary(self) -> str:
        """
        Get a summary of collected errors.

        Returns:
            Multi-line summary string
        """
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        summary = f"Failed {self.error_count} of {self.error_count + self.success_count} operations:\n"
        for sub_op, error in self.errors:
            if isinstance(error, RadioSharkError):
                summary += f"  - {sub_op}: {error.user_message}\n"
            else:
                summary += f"  - {sub_op}: {error}\n"

        return summary.rstrip()

    def to_exception(self) -> AggregateError:
        """Build the AggregateError for the collected errors."""
        return AggregateError((e for _, e in self.errors), operation=self.operation)

    def raise_if_errors(self) -> None:
        """Raise an AggregateError if anything failed."""
        if self.has_errors:
            raise self.to_exception()

    class _OperationContext:
        """Internal context manager for individual operations."""

        def __init__(self, collector: "ErrorCollector", sub_operation: str, field: Optional[str]):
            self.collector = collector
            self.sub_operation = sub_operation
            self.field = field

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_type is None:
                self.collector.success_count += 1
                return False

            if not issubclass(exc_type, self.collector.catch):
                return False

            if self.field and getattr(exc_val, "field", None) is None:
                exc_val.field = self.field

            logger.warning(f"{self.collector.operation}: failed to {self.sub_operation}: {exc_val}")
            self.collector.errors.append((self.sub_operation, exc_val))

            # Suppress the exception (don't re-raise)
            return True
