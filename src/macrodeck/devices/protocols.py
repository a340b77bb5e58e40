"""Deck transport protocol and device events."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from PIL import Image

#: Callback installed on a transport: (key_index, pressed)
KeyCallback = Callable[[int, bool], None]


class DeckEvent:
    """Generic deck event (input from hardware)."""

    pass


class KeyPressEvent(DeckEvent):
    """Key went down."""

    def __init__(self, key_index: int):
        self.key_index = key_index


class KeyReleaseEvent(DeckEvent):
    """Key came back up."""

    def __init__(self, key_index: int):
        self.key_index = key_index


def parse_key_change(key_index: int, pressed: bool) -> DeckEvent:
    """Turn a raw key state change into a deck event."""
    if pressed:
        return KeyPressEvent(key_index)
    return KeyReleaseEvent(key_index)


class DeckTransport(Protocol):
    """
    Protocol for a keypad with per-key displays.

    Implemented by StreamDeckTransport (hardware) and VirtualDeck (in memory).
    """

    @property
    def name(self) -> str:
        """Human-readable device name."""
        ...

    @property
    def key_count(self) -> int:
        """Number of keys on the device."""
        ...

    @property
    def key_image_size(self) -> tuple[int, int]:
        """Pixel size (width, height) of one key image."""
        ...

    def open(self) -> None:
        """
        Open the device for exclusive use.

        Raises:
            DeviceNotFoundError: If the device is not available
        """
        ...

    def close(self) -> None:
        """Release the device."""
        ...

    def set_brightness(self, percent: int) -> None:
        """Set display brightness (0-100)."""
        ...

    def encode_key_image(self, image: Image.Image) -> Any:
        """
        Convert a rendered key image to the device's native format.

        Args:
            image: RGB image of ``key_image_size``
        """
        ...

    def set_key_image(self, key_index: int, native_image: Any) -> None:
        """Push an encoded image to one key."""
        ...

    def set_key_callback(self, callback: KeyCallback | None) -> None:
        """
        Install the key state callback, or remove it with None.

        Note:
            The callback runs on the transport's own read thread.
        """
        ...
