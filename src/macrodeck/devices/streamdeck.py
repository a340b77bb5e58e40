"""
Elgato Stream Deck transport.

Wraps a python-elgato-streamdeck device behind the DeckTransport protocol.

::

    HID read thread
          ↓  deck callback (deck, key, state)
    StreamDeckTransport._on_key_change
          ↓  (key_index, pressed)
    DeviceEventBridge
"""

import logging
from typing import Any

from PIL import Image
from StreamDeck.DeviceManager import DeviceManager
from StreamDeck.ImageHelpers import PILHelper

from macrodeck.exceptions import DeviceError, DeviceNotFoundError, ErrorContext, wrap_device_error

from .protocols import KeyCallback

logger = logging.getLogger(__name__)


def enumerate_decks() -> list[Any]:
    """
    List attached Stream Decks that have key displays.

    Raises:
        DeviceNotFoundError: If the HID backend is unavailable
    """
    try:
        decks = DeviceManager().enumerate()
    except Exception as e:
        raise wrap_device_error(e) from e
    return [deck for deck in decks if deck.is_visual()]


def list_devices() -> list[dict[str, Any]]:
    """
    Describe attached Stream Decks without opening them.

    Returns:
        One dict per device with index, type, id and key_count
    """
    return [
        {
            "index": index,
            "type": deck.deck_type(),
            "id": deck.id(),
            "key_count": deck.key_count(),
        }
        for index, deck in enumerate(enumerate_decks())
    ]


class StreamDeckTransport:
    """DeckTransport backed by a physical Stream Deck."""

    def __init__(self, device_index: int = 0, deck: Any | None = None):
        """
        Initialize the transport.

        Args:
            device_index: Which attached deck to use (0 = first)
            deck: Already-enumerated StreamDeck object; enumerated on open() if None
        """
        self._device_index = device_index
        self._deck = deck
        self._callback: KeyCallback | None = None

    def _require_deck(self) -> Any:
        if self._deck is None:
            raise DeviceError(user_message="Stream Deck is not open")
        return self._deck

    @property
    def name(self) -> str:
        if self._deck is None:
            return f"Stream Deck #{self._device_index}"
        return self._deck.deck_type()

    @property
    def key_count(self) -> int:
        return self._require_deck().key_count()

    @property
    def key_image_size(self) -> tuple[int, int]:
        width, height = self._require_deck().key_image_format()["size"]
        return (width, height)

    # =================================================================
    # Lifecycle
    # =================================================================

    def open(self) -> None:
        """
        Enumerate (if needed), open and reset the deck.

        Raises:
            DeviceNotFoundError: If no deck exists at device_index
            DeviceError: If the deck cannot be opened
        """
        if self._deck is None:
            decks = enumerate_decks()
            if self._device_index >= len(decks):
                raise DeviceNotFoundError(device_index=self._device_index, found=len(decks))
            self._deck = decks[self._device_index]

        try:
            self._deck.open()
            self._deck.reset()
        except Exception as e:
            raise wrap_device_error(e, self._device_index) from e

        logger.info(f"Connected to {self._deck.deck_type()} with {self._deck.key_count()} keys")

    def close(self) -> None:
        if self._deck is None:
            return

        deck = self._deck
        with ErrorContext("close Stream Deck", logger_instance=logger, re_raise=False):
            with deck:
                deck.set_key_callback(None)
                deck.reset()
            deck.close()
            logger.info(f"Closed {deck.deck_type()}")

    # =================================================================
    # Output
    # =================================================================

    def set_brightness(self, percent: int) -> None:
        deck = self._require_deck()
        with deck:
            deck.set_brightness(percent)

    def encode_key_image(self, image: Image.Image) -> Any:
        """Convert to the deck's native key format (size, rotation, JPEG/BMP)."""
        return PILHelper.to_native_key_format(self._require_deck(), image)

    def set_key_image(self, key_index: int, native_image: Any) -> None:
        deck = self._require_deck()
        with deck:
            deck.set_key_image(key_index, native_image)

    # =================================================================
    # Input
    # =================================================================

    def set_key_callback(self, callback: KeyCallback | None) -> None:
        deck = self._require_deck()
        self._callback = callback
        deck.set_key_callback(self._on_key_change if callback is not None else None)

    def _on_key_change(self, deck: Any, key: int, state: bool) -> None:
        """Called on the library's HID read thread."""
        callback = self._callback
        if callback is not None:
            callback(key, bool(state))
