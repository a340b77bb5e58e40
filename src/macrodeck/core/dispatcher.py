"""Execution dispatcher: turns key presses into action invocations."""

import logging
from collections.abc import Callable, Mapping
from threading import Lock
from typing import Any

from macrodeck.exceptions import PluginExecutionError
from macrodeck.models import ActionType, ExecutionResult, KeyBinding
from macrodeck.plugins import PluginRegistry
from macrodeck.protocols import KeyEvent

from .bindings import KeyBindingTable
from .builtins import BuiltinHandler

logger = logging.getLogger(__name__)


class ExecutionDispatcher:
    """
    Executes the action bound to a key when it is pressed.

    Implements the KeyObserver protocol. Each press produces exactly one log
    line describing its outcome; nothing raised by an action escapes.

    Thread Safety:
        Presses arrive on dispatch worker threads. A per-key lock serialises
        presses of the same key; different keys run concurrently.
    """

    def __init__(
        self,
        table: KeyBindingTable,
        registry: PluginRegistry,
        builtin_handlers: Mapping[ActionType, BuiltinHandler] | None = None,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            table: Key binding table to read bindings from
            registry: Registry used to resolve plugin action ids
            builtin_handlers: Sinks for built-in kinds. Kinds without a
                handler are logged and not executed.
        """
        self._table = table
        self._registry = registry
        self._builtin_handlers = dict(builtin_handlers or {})
        self._key_locks = [Lock() for _ in range(table.key_count)]

    @property
    def builtins_enabled(self) -> bool:
        """True if any built-in kind has an output sink."""
        return bool(self._builtin_handlers)

    # =================================================================
    # KeyObserver Protocol
    # =================================================================

    def on_key_event(self, event: KeyEvent, key_index: int) -> None:
        """Handle key events from the device bridge (only presses execute)."""
        if event == KeyEvent.KEY_DOWN:
            self.on_key_pressed(key_index)

    # =================================================================
    # Dispatch
    # =================================================================

    def on_key_pressed(self, key_index: int) -> ExecutionResult | None:
        """
        Execute whatever is bound to a key.

        Args:
            key_index: Physical key index (0-based)

        Returns:
            The execution outcome, or None if nothing was executed
        """
        if not 0 <= key_index < len(self._key_locks):
            logger.warning(f"Ignoring press of unknown key index {key_index}")
            return None

        with self._key_locks[key_index]:
            binding = self._table.get(key_index)

            if not binding.is_assigned:
                logger.info(f"No action assigned to Key {binding.key_number}")
                return None

            if binding.action.is_plugin:
                return self._execute_plugin(binding)
            return self._execute_builtin(binding)

    def _execute_plugin(self, binding: KeyBinding) -> ExecutionResult | None:
        plugin = self._registry.resolve(binding.action.action_id)
        if plugin is None:
            logger.warning(
                f"No plugin provides action '{binding.action.action_id}' "
                f"bound to Key {binding.key_number}"
            )
            return None

        result, error = _invoke(plugin.execute, plugin.name)
        if result.success:
            logger.info(f"Executed plugin action: {plugin.name}")
        else:
            failure = PluginExecutionError(plugin.name, result.error or "")
            logger.error(failure.user_message, exc_info=error)
        return result

    def _execute_builtin(self, binding: KeyBinding) -> ExecutionResult | None:
        action = binding.action
        kind = action.action_type.value
        handler = self._builtin_handlers.get(action.action_type)

        if handler is None:
            logger.info(
                f"No action executed for Key {binding.key_number}: "
                f"{kind} action '{action.action_name}' has no output sink"
            )
            return None

        result, error = _invoke(lambda: handler(action), action.action_name)
        if result.success:
            logger.info(f"Executed {kind} action: {action.action_name}")
        else:
            logger.error(
                f"{kind.capitalize()} action {action.action_name} failed: {result.error}",
                exc_info=error,
            )
        return result


def _invoke(
    call: Callable[[], Any], action_name: str
) -> tuple[ExecutionResult, BaseException | None]:
    """Run an action, turning its return value or exception into a result."""
    # SystemExit included: an action calling sys.exit() is just a failed action
    try:
        return ExecutionResult.coerce(call(), action_name), None
    except (Exception, SystemExit) as e:
        return ExecutionResult.failed(str(e) or type(e).__name__, action_name), e
