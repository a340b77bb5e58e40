"""
Centralized error handling utilities.

Each layer translates errors to be more useful at the next level up:

```
┌─────────────────────────────────────┐
│  USER LAYER (CLI)                   │
│  - Formats error.user_message       │
│  - Shows error.recovery_hint        │
└─────────────────────────────────────┘
                  ↑ MacroDeckError
┌─────────────────────────────────────┐
│  APPLICATION LAYER                  │
│  - Registry, bindings, dispatcher   │
│  - Converts to MacroDeckError       │
└─────────────────────────────────────┘
                  ↑ Exception, OSError, etc.
┌─────────────────────────────────────┐
│  LOW LEVEL (HID, Pillow, plugins)   │
└─────────────────────────────────────┘
```

### Converting low-level errors

```python
try:
    decks = DeviceManager().enumerate()
except Exception as e:
    raise wrap_device_error(e, device_index=0) from e
```

### Critical sections

```python
with ErrorContext("open device", logger_instance=logger):
    bridge.open()
```
"""

import logging
from typing import Optional

from .base import MacroDeckError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import DeviceError, DeviceNotFoundError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("discover plugins", re_raise=False) as ctx:
            registry.discover(path)

        if ctx.error:
            print(f"Failed: {ctx.error}")
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
        self.error: Optional[Exception] = None

    def __enter__(self):
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

        if isinstance(exc_val, MacroDeckError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def _field_path(error: dict) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "unknown"


def wrap_pydantic_error(error: Exception, file_path: str) -> MacroDeckError:
    """
    Translate a pydantic ValidationError raised while reading ``file_path``.

    JSON syntax problems become ConfigFileInvalidError; bad values become
    ConfigValidationError naming the offending field (or "multiple fields").
    """
    from pydantic import ValidationError

    if not isinstance(error, ValidationError):
        return ConfigValidationError(field="unknown", value=None, error_msg=str(error), file_path=file_path)

    errors = error.errors()
    syntax = [e for e in errors if e.get("type") == "json_invalid"]
    if syntax:
        # msg reads "Invalid JSON: <parser message>"
        parse_error = syntax[0].get("msg", "").removeprefix("Invalid JSON:").strip()
        return ConfigFileInvalidError(file_path, parse_error or str(error))

    if len(errors) == 1:
        (only,) = errors
        return ConfigValidationError(
            field=_field_path(only),
            value=only.get("input"),
            error_msg=only.get("msg", "validation failed"),
            file_path=file_path,
        )

    details = "\n".join(f"  - {_field_path(e)}: {e.get('msg', 'validation failed')}" for e in errors)
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n{details}",
        file_path=file_path,
    )


def wrap_device_error(error: Exception, device_index: int = 0) -> MacroDeckError:
    """
    Convert low-level HID/transport errors to MacroDeck exceptions.

    Args:
        error: The original exception from the device library
        device_index: Index of the device involved

    Returns:
        A DeviceError with appropriate type and message
    """
    if isinstance(error, MacroDeckError):
        return error

    error_msg = str(error)

    # The HID backend raises a ProbeError when libhidapi is missing
    if type(error).__name__ == "ProbeError" or "hidapi" in error_msg.lower():
        return DeviceNotFoundError(device_index=device_index, original_error=error_msg)

    return DeviceError(
        user_message=f"Stream Deck error: {error_msg}",
        technical_message=f"Stream Deck #{device_index} error: {type(error).__name__}: {error_msg}",
        recoverable=True,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, MacroDeckError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
