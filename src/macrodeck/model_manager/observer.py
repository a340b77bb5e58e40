"""Thread-safe observer lists.

Both event streams in macrodeck fan out through ObserverManager:

- key events, raised on dispatch worker threads by the device bridge
- binding events, raised by KeyBindingTable whenever a slot changes
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Ordered list of observers of protocol ``T``.

    Observers are called in registration order. The internal lock only guards
    the list itself: ``notify`` snapshots the list and calls observers with the
    lock released, so an observer may register or unregister from inside its
    callback.

    Example:
        ```python
        observers = ObserverManager[KeyObserver](observer_type_name="key")
        observers.register(dispatcher)
        observers.notify("on_key_event", KeyEvent.KEY_DOWN, 2)
        ```
    """

    def __init__(self, lock: Lock | None = None, observer_type_name: str = "observer"):
        """
        Args:
            lock: Lock guarding the list (a private one is created if omitted)
            observer_type_name: Label used in log lines, e.g. "key" or "binding"
        """
        self._lock = lock or Lock()
        self._kind = observer_type_name
        self._observers: list[T] = []

    def register(self, observer: T) -> None:
        """Add an observer. Registering the same observer twice is a no-op."""
        with self._lock:
            if observer in self._observers:
                logger.debug(f"{self._kind} observer already registered: {observer}")
                return
            self._observers.append(observer)
        logger.debug(f"Registered {self._kind} observer: {observer}")

    def unregister(self, observer: T) -> None:
        """Remove an observer. Unknown observers are logged and ignored."""
        with self._lock:
            if observer not in self._observers:
                logger.warning(f"Cannot unregister unknown {self._kind} observer: {observer}")
                return
            self._observers.remove(observer)
        logger.debug(f"Unregistered {self._kind} observer: {observer}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Call ``callback_name`` on every observer.

        A failing observer is logged and skipped; the remaining observers
        are still called.
        """
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            callback = getattr(observer, callback_name, None)
            if callback is None:
                logger.error(f"{self._kind} observer {observer} has no method '{callback_name}'")
                continue
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{self._kind} observer {observer} failed in {callback_name}: {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Drop every observer."""
        with self._lock:
            dropped = len(self._observers)
            self._observers.clear()
        if dropped:
            logger.debug(f"Cleared {dropped} {self._kind} observer(s)")

    def __contains__(self, observer: object) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)

    def __bool__(self) -> bool:
        return len(self) > 0
