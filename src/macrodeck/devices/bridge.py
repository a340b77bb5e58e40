"""
Device event bridge: connects a deck transport to the rest of the app.

::

    transport read thread            dispatch pool
    ─────────────────────            ─────────────
    (key_index, pressed)
          ↓ parse_key_change()
    KeyPressEvent ──── submit ───→  KeyObservers.on_key_event(KEY_DOWN, key)
    KeyReleaseEvent   (dropped)

The transport's read thread only parses and queues; it never runs observer
code, so a slow plugin cannot stall input from other keys.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from threading import Lock

from macrodeck.exceptions import DeviceError
from macrodeck.model_manager import ObserverManager
from macrodeck.protocols import KeyEvent, KeyObserver

from .protocols import DeckTransport, KeyPressEvent, parse_key_change

logger = logging.getLogger(__name__)


def clamp_brightness(percent: int) -> int:
    """Clamp a brightness value to 0-100."""
    return max(0, min(100, int(percent)))


class DeviceEventBridge:
    """
    Owns the transport lifecycle and delivers key presses to observers.

    Usage:
        ```python
        with DeviceEventBridge(VirtualDeck()) as bridge:
            bridge.register_observer(dispatcher)
            bridge.start()
        ```
    """

    def __init__(self, transport: DeckTransport, brightness: int = 100, max_workers: int = 4):
        """
        Initialize the bridge.

        Args:
            transport: Deck transport to drive
            brightness: Display brightness applied on open (clamped to 0-100)
            max_workers: Threads delivering key presses to observers
        """
        self._transport = transport
        self._brightness = clamp_brightness(brightness)
        self._max_workers = max_workers
        self._observers = ObserverManager[KeyObserver](observer_type_name="key")

        self._lock = Lock()
        self._executor: ThreadPoolExecutor | None = None
        self._is_open = False
        self._started = False

    @property
    def transport(self) -> DeckTransport:
        return self._transport

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def is_running(self) -> bool:
        return self._started

    @property
    def key_count(self) -> int:
        return self._transport.key_count

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: KeyObserver) -> None:
        """Register an observer for key presses."""
        self._observers.register(observer)

    def unregister_observer(self, observer: KeyObserver) -> None:
        """Unregister a key observer."""
        self._observers.unregister(observer)

    # =================================================================
    # Lifecycle
    # =================================================================

    def open(self) -> None:
        """
        Open the transport and apply brightness.

        Raises:
            DeviceNotFoundError: If the device is not available
        """
        if self._is_open:
            return

        self._transport.open()
        self._is_open = True
        self._transport.set_brightness(self._brightness)
        logger.info(f"Opened {self._transport.name} at {self._brightness}% brightness")

    def start(self) -> None:
        """
        Subscribe to key events. May only be called once per open device.

        Raises:
            DeviceError: If the device is not open or already started
        """
        with self._lock:
            if not self._is_open:
                raise DeviceError(user_message="Cannot start: device is not open")
            if self._started:
                raise DeviceError(user_message="Key events are already subscribed")

            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="macrodeck-dispatch"
            )
            self._started = True

        self._transport.set_key_callback(self._on_key_change)
        logger.info(f"Listening for key presses on {self._transport.name}")

    def stop(self) -> None:
        """Unsubscribe from key events and wait for in-flight presses."""
        with self._lock:
            if not self._started:
                return
            self._started = False
            executor = self._executor
            self._executor = None

        try:
            self._transport.set_key_callback(None)
        except Exception as e:
            logger.error(f"Error removing key callback: {e}")

        if executor is not None:
            executor.shutdown(wait=True)
        logger.info("Stopped listening for key presses")

    def close(self) -> None:
        """Stop event delivery and release the device."""
        self.stop()
        if self._is_open:
            self._transport.close()
            self._is_open = False

    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    # =================================================================
    # Event handling
    # =================================================================

    def _on_key_change(self, key_index: int, pressed: bool) -> None:
        """
        Handle a raw key state change.

        Called from the transport's read thread.
        """
        event = parse_key_change(key_index, pressed)
        if not isinstance(event, KeyPressEvent):
            return

        with self._lock:
            executor = self._executor
            if executor is None:
                logger.debug(f"Ignoring key {key_index} press after stop")
                return
            executor.submit(self._deliver, event.key_index)

    def _deliver(self, key_index: int) -> None:
        logger.debug(f"Key pressed: {key_index}")
        self._observers.notify("on_key_event", KeyEvent.KEY_DOWN, key_index)
