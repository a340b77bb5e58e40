"""Data models for MacroDeck."""

from .action import ActionDescriptor
from .binding import KeyBinding
from .color import Color
from .config import AppConfig
from .enums import ActionType
from .result import ExecutionResult

__all__ = [
    # Models
    "ActionDescriptor",
    "AppConfig",
    "Color",
    "ExecutionResult",
    "KeyBinding",
    # Enums
    "ActionType",
]
