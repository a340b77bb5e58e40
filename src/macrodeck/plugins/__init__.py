"""Plugin system: the action base class, module loading and the registry."""

from macrodeck.models import ActionDescriptor, ActionType, ExecutionResult

from .base import PluginAction
from .loader import ModuleLoadResult, find_plugin_modules, load_plugins_from_file
from .registry import PluginRegistry

__all__ = [
    # Plugin authoring
    "ActionDescriptor",
    "ActionType",
    "ExecutionResult",
    "PluginAction",
    # Loading
    "ModuleLoadResult",
    "PluginRegistry",
    "find_plugin_modules",
    "load_plugins_from_file",
]
