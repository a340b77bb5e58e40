"""Base class every plugin action implements."""

from abc import ABC, abstractmethod
from typing import Any

from macrodeck.models import ActionDescriptor, ExecutionResult


class PluginAction(ABC):
    """
    Abstract base class for plugin-supplied actions.

    Plugin modules placed in the plugin directory define one or more concrete
    subclasses. Each is constructed once, with no arguments, during discovery.

    Example:
        ```python
        from macrodeck.plugins import ExecutionResult, PluginAction


        class Ping(PluginAction):
            name = "Ping"
            action_id = "ping-1"

            def execute(self):
                return ExecutionResult.ok()
        ```

    ``execute()`` runs on a dispatch worker thread. It may return None, a bool,
    a ``(success, error)`` tuple or an ExecutionResult. Exceptions are caught and
    logged by the dispatcher.
    """

    #: Human-readable plugin name; subclasses set it as a class attribute or property
    name: str
    #: Stable identifier joining key bindings to this plugin
    action_id: str

    def get_action_details(self) -> ActionDescriptor:
        """Describe the action this plugin offers for the catalog."""
        return ActionDescriptor.plugin(action_id=self.action_id, name=self.name)

    def get_configuration_control(self) -> Any | None:
        """Opaque configuration handle for an editor UI, or None."""
        return None

    @abstractmethod
    def execute(self) -> ExecutionResult | bool | tuple[bool, str | None] | None:
        """Run the action."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({getattr(self, 'name', '?')!r})"
