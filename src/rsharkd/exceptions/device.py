"""Device-related exceptions.

This module defines exceptions for the USB radio device:
- DeviceError: Base class for device errors
- DeviceIOError: Transport failure while talking to the device
- DeviceClosedError: Operation attempted after the handle was closed
- DeviceNotFoundError: No device matches the requested identifier
"""

from typing import Optional

from .base import RadioSharkError


class DeviceError(RadioSharkError):
    """Device initialization or operation failed."""

    def __init__(self, user_message: str, identifier: Optional[str] = None, **kwargs):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            identifier: The device identifier involved (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.identifier = identifier


class DeviceIOError(DeviceError):
    """Writing to (or opening) the device failed at the transport level."""

    def __init__(
        self,
        user_message: str,
        identifier: Optional[str] = None,
        original_error: Optional[str] = None,
        field: Optional[str] = None,
    ):
        """
        Initialize device I/O error.

        Args:
            user_message: User-friendly error message
            identifier: The device identifier
            original_error: The message reported by the USB library
            field: Configuration field whose write failed (if any)
        """
        tech_msg = user_message
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_message,
            technical_message=tech_msg,
            identifier=identifier,
            recoverable=True,
            recovery_hint=(
                "Check that the radio is plugged in and that this user may "
                "access it. Run 'rsharkd devices list' to see attached radios."
            ),
        )
        self.original_error = original_error
        self.field = field


class DeviceClosedError(DeviceError):
    """The device handle was already closed."""

    def __init__(self, identifier: Optional[str] = None):
        super().__init__(
            user_message="Device handle is closed",
            identifier=identifier,
        )


class DeviceNotFoundError(DeviceError):
    """Requested radio was not found."""

    def __init__(self, identifier: str):
        """
        Initialize device-not-found error.

        Args:
            identifier: The device identifier that wasn't found
        """
        super().__init__(
            user_message=f"RadioSHARK {identifier} not found.",
            identifier=identifier,
            recoverable=True,
            recovery_hint="Run 'rsharkd devices list' to see attached radios.",
        )
