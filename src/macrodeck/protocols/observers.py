"""Observer protocol definitions for domain-specific events.

- Key observers: React to key presses delivered by the device bridge
- Binding observers: React to changes in the key binding table
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from macrodeck.models import KeyBinding

from .events import BindingEvent, KeyEvent


@runtime_checkable
class KeyObserver(Protocol):
    """Observer that receives key events from the device bridge."""

    def on_key_event(self, event: KeyEvent, key_index: int) -> None:
        """
        Handle a key event.

        Args:
            event: The type of key event
            key_index: Physical key index (0-based)

        Note:
            This is called from a dispatch worker thread, never from the
            main thread, so implementations must be thread-safe.
        """
        ...


@runtime_checkable
class BindingObserver(Protocol):
    """Observer that receives key binding table changes."""

    def on_binding_event(self, event: BindingEvent, key_index: int, binding: "KeyBinding") -> None:
        """
        Handle a binding change.

        Args:
            event: The type of binding event
            key_index: Key whose binding changed
            binding: The new binding (a copy)

        Note:
            Called synchronously from the assignment path, before assign() returns.
        """
        ...
