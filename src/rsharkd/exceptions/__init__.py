"""
Custom exception hierarchy for rsharkd.

This module defines application-specific exceptions that provide:
- Clear error categories (value, device, configuration file)
- User-friendly messages
- Context preservation
- Recovery hints

## Exception Hierarchy

```
RadioSharkError (base)
├── ConfigValueError
│   ├── FormatError
│   ├── RangeError
│   └── UnknownModulationError
├── DeviceError
│   ├── DeviceIOError
│   ├── DeviceClosedError
│   └── DeviceNotFoundError
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── PersistenceError
└── AggregateError
```

## Usage

All custom exceptions inherit from `RadioSharkError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Frequency out of range

```python
from rsharkd.exceptions import RangeError

raise RangeError(
    "FM frequency must be between 88.0 and 108.0",
    field="frequency",
    value="120.0",
)
```

### Example: Several problems at once

```python
from rsharkd.exceptions import AggregateError

try:
    service.validate(candidate)
except AggregateError as e:
    for error in e.errors:
        print(error.field, error)
```

See `rsharkd.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .aggregate import AggregateError
from .base import RadioSharkError
from .config import ConfigFileInvalidError, ConfigurationError, PersistenceError
from .device import DeviceClosedError, DeviceError, DeviceIOError, DeviceNotFoundError
from .handlers import (
    ErrorCollector,
    ErrorContext,
    collect_errors,
    format_error_for_display,
    wrap_pydantic_error,
    wrap_usb_error,
)
from .values import ConfigValueError, FormatError, RangeError, UnknownModulationError

__all__ = [
    # Aggregate
    "AggregateError",
    # Config file
    "ConfigFileInvalidError",
    # Values
    "ConfigValueError",
    "ConfigurationError",
    # Device
    "DeviceClosedError",
    "DeviceError",
    "DeviceIOError",
    "DeviceNotFoundError",
    "ErrorCollector",
    "ErrorContext",
    "FormatError",
    "PersistenceError",
    # Base
    "RadioSharkError",
    "RangeError",
    "UnknownModulationError",
    # Handlers
    "collect_errors",
    "format_error_for_display",
    "wrap_pydantic_error",
    "wrap_usb_error",
]
