"""Enumerations for MacroDeck."""

from enum import Enum


class ActionType(str, Enum):
    """Kinds of bindable actions."""

    MESSAGE = "message"  # Built-in: show/print a message
    COMMAND = "command"  # Built-in: launch a command line
    PLUGIN = "plugin"    # Supplied by a dynamically loaded plugin
