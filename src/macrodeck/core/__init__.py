"""Core engine: key bindings and press dispatch."""

from .bindings import KeyBindingTable
from .builtins import default_builtin_handlers, print_message, run_command
from .dispatcher import ExecutionDispatcher

__all__ = [
    "ExecutionDispatcher",
    "KeyBindingTable",
    "default_builtin_handlers",
    "print_message",
    "run_command",
]
