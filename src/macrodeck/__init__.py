"""MacroDeck: plugin-driven macro keys for Stream Deck keypads."""

__version__ = "0.1.0"

# Application orchestrator
from .app import MacroDeckApp

# Plugin authoring
from .plugins import ActionDescriptor, ExecutionResult, PluginAction

__all__ = [
    "ActionDescriptor",
    "ExecutionResult",
    "MacroDeckApp",
    "PluginAction",
]
