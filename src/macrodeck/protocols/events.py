"""Domain events for observer pattern.

This module defines events that can occur within the application:
- Key events: Hardware key state changes
- Binding events: Key binding table mutations
"""

from enum import Enum


class KeyEvent(Enum):
    """Events from the keypad hardware."""

    KEY_DOWN = "key_down"  # Key pressed
    KEY_UP = "key_up"      # Key released


class BindingEvent(Enum):
    """Events from the key binding table."""

    KEY_ASSIGNED = "key_assigned"      # New action assigned to a key
    KEY_CONFIGURED = "key_configured"  # Built-in payload edited in place
