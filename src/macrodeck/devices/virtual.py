"""In-memory deck for running without hardware and for tests."""

import io
import logging
from threading import Lock
from typing import TYPE_CHECKING

from macrodeck.exceptions import DeviceError

from .protocols import KeyCallback

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_KEY_COUNT = 6
DEFAULT_KEY_IMAGE_SIZE = (72, 72)


class VirtualDeck:
    """
    A DeckTransport that keeps key images in memory.

    Key images are stored PNG-encoded. ``press()`` and ``release()`` drive the
    installed callback the way the hardware read thread would.
    """

    def __init__(
        self,
        key_count: int = DEFAULT_KEY_COUNT,
        key_image_size: tuple[int, int] = DEFAULT_KEY_IMAGE_SIZE,
        name: str = "Virtual Deck",
    ):
        if key_count < 1:
            raise ValueError(f"key_count must be positive, got {key_count}")

        self._key_count = key_count
        self._key_image_size = key_image_size
        self._name = name
        self._lock = Lock()
        self._callback: KeyCallback | None = None
        self._is_open = False

        self.brightness: int | None = None
        self.images: dict[int, bytes] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def key_count(self) -> int:
        return self._key_count

    @property
    def key_image_size(self) -> tuple[int, int]:
        return self._key_image_size

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        self._is_open = True
        logger.info(f"Opened {self._name} with {self._key_count} keys")

    def close(self) -> None:
        with self._lock:
            self._callback = None
        self._is_open = False
        logger.info(f"Closed {self._name}")

    def set_brightness(self, percent: int) -> None:
        self.brightness = percent

    def encode_key_image(self, image: "Image.Image") -> bytes:
        """Encode a key image as PNG bytes."""
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def set_key_image(self, key_index: int, native_image: bytes) -> None:
        self._check_key(key_index)
        with self._lock:
            self.images[key_index] = native_image

    def set_key_callback(self, callback: KeyCallback | None) -> None:
        with self._lock:
            self._callback = callback

    # =================================================================
    # Simulated input
    # =================================================================

    def press(self, key_index: int) -> None:
        """Simulate a key going down."""
        self._emit(key_index, True)

    def release(self, key_index: int) -> None:
        """Simulate a key coming back up."""
        self._emit(key_index, False)

    def tap(self, key_index: int) -> None:
        """Press and release a key."""
        self.press(key_index)
        self.release(key_index)

    def _emit(self, key_index: int, pressed: bool) -> None:
        self._check_key(key_index)
        with self._lock:
            callback = self._callback
        if callback is not None:
            callback(key_index, pressed)

    def _check_key(self, key_index: int) -> None:
        if not self._is_open:
            raise DeviceError(user_message=f"{self._name} is not open")
        if not 0 <= key_index < self._key_count:
            raise DeviceError(
                user_message=f"{self._name} has no key {key_index} (0-{self._key_count - 1})"
            )
