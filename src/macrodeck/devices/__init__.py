"""Deck transports and the device event bridge."""

from .bridge import DeviceEventBridge, clamp_brightness
from .protocols import DeckEvent, DeckTransport, KeyPressEvent, KeyReleaseEvent, parse_key_change
from .virtual import VirtualDeck

__all__ = [
    "DeckEvent",
    "DeckTransport",
    "DeviceEventBridge",
    "KeyPressEvent",
    "KeyReleaseEvent",
    "VirtualDeck",
    "clamp_brightness",
    "parse_key_change",
]
