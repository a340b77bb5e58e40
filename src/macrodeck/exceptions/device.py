"""Device-related exceptions.

This module defines exceptions for the keypad hardware layer:
- DeviceError: Base class for device errors
- DeviceNotFoundError: No supported device is attached
"""

from typing import Optional

from .base import MacroDeckError


class DeviceError(MacroDeckError):
    """Base class for device errors."""
    pass


class DeviceNotFoundError(DeviceError):
    """No Stream Deck device could be found."""

    def __init__(self, device_index: int = 0, found: int = 0, original_error: Optional[str] = None):
        """
        Initialize device not found error.

        Args:
            device_index: Index of the requested device
            found: Number of devices that were enumerated
            original_error: Error reported by the HID layer, if any
        """
        if found == 0:
            user_msg = "No Stream Deck device found"
        else:
            user_msg = f"Stream Deck #{device_index} not found ({found} device(s) attached)"

        technical = user_msg
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=technical,
            recoverable=True,
            recovery_hint=(
                "Check that the device is plugged in and that you have permission to access it.\n"
                "Run 'macrodeck devices list' to see attached devices, "
                "or use 'macrodeck run --virtual' to run without hardware"
            ),
        )
        self.device_index = device_index
        self.found = found
