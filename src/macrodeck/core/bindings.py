"""Key binding table: the action currently bound to each physical key."""

import logging
from threading import Lock
from typing import Any

from macrodeck.exceptions import BindingConfigurationError, KeyIndexOutOfRangeError
from macrodeck.model_manager import ObserverManager
from macrodeck.models import ActionDescriptor, ActionType, KeyBinding
from macrodeck.plugins import PluginRegistry
from macrodeck.protocols import BindingEvent, BindingObserver

logger = logging.getLogger(__name__)


class KeyBindingTable:
    """
    Fixed-size table mapping key indexes to bindings.

    Slots are swapped whole under ``_lock``; readers always get a copy.
    Writers are serialised by ``_write_lock``, which is held while observers
    run so the renderer sees assignments in order, but ``_lock`` is not, so
    the dispatcher can keep reading slots while a key is being redrawn.
    """

    def __init__(self, key_count: int, registry: PluginRegistry | None = None) -> None:
        """
        Initialize the table with every slot unassigned.

        Args:
            key_count: Number of physical keys
            registry: Used to look up plugin configuration controls on assign
        """
        if key_count < 1:
            raise ValueError(f"key_count must be positive, got {key_count}")

        self._key_count = key_count
        self._registry = registry
        self._slots: list[KeyBinding] = [KeyBinding.empty(i) for i in range(key_count)]
        self._lock = Lock()
        self._write_lock = Lock()
        self._observers = ObserverManager[BindingObserver](observer_type_name="binding")

    @property
    def key_count(self) -> int:
        """Number of slots."""
        return self._key_count

    def register_observer(self, observer: BindingObserver) -> None:
        """Register an observer to receive binding changes."""
        self._observers.register(observer)

    def unregister_observer(self, observer: BindingObserver) -> None:
        """Unregister a binding observer."""
        self._observers.unregister(observer)

    # =================================================================
    # Reads
    # =================================================================

    def get(self, key_index: int) -> KeyBinding:
        """
        Get a copy of the binding for one key.

        Raises:
            KeyIndexOutOfRangeError: If key_index is outside the table
        """
        self._check_index(key_index)
        with self._lock:
            binding = self._slots[key_index]
        return binding.snapshot()

    def bindings(self) -> list[KeyBinding]:
        """Copies of every binding, in key order."""
        with self._lock:
            slots = list(self._slots)
        return [binding.snapshot() for binding in slots]

    def configuration_control(self, key_index: int) -> Any | None:
        """Cached configuration handle of the plugin bound to a key, if any."""
        self._check_index(key_index)
        with self._lock:
            return self._slots[key_index].configuration_control

    # =================================================================
    # Writes
    # =================================================================

    def assign(self, key_index: int, descriptor: ActionDescriptor) -> KeyBinding:
        """
        Bind an action to a key.

        The descriptor is copied, so later changes to the caller's object do
        not reach the table.

        Args:
            key_index: Physical key index (0-based)
            descriptor: Action to bind

        Returns:
            A copy of the new binding

        Raises:
            KeyIndexOutOfRangeError: If key_index is outside the table (table unchanged)
            TypeError: If descriptor is None or not an ActionDescriptor
        """
        self._check_index(key_index)
        if descriptor is None or not isinstance(descriptor, ActionDescriptor):
            raise TypeError(
                f"descriptor must be an ActionDescriptor, got {type(descriptor).__name__}"
            )

        action = descriptor.model_copy(deep=True)
        binding = KeyBinding(
            key_index=key_index,
            action=action,
            configuration_control=self._lookup_configuration_control(action),
        )

        with self._write_lock:
            with self._lock:
                self._slots[key_index] = binding
            logger.info(f"Assigned {action.action_name} to Key {binding.key_number}")
            self._observers.notify(
                "on_binding_event", BindingEvent.KEY_ASSIGNED, key_index, binding.snapshot()
            )

        return binding.snapshot()

    def configure(
        self,
        key_index: int,
        message_to_print: str | None = None,
        command_to_run: str | None = None,
    ) -> KeyBinding:
        """
        Edit the payload of a built-in binding in place.

        Only the payload matching the binding's kind is applied, and it must
        be given.

        Raises:
            KeyIndexOutOfRangeError: If key_index is outside the table
            BindingConfigurationError: If the key holds a plugin action or nothing,
                or the payload for its kind is missing
        """
        self._check_index(key_index)

        with self._write_lock:
            with self._lock:
                current = self._slots[key_index]

            action = current.action
            if not action.is_assigned:
                raise BindingConfigurationError(key_index, "no action assigned")
            if action.is_plugin:
                raise BindingConfigurationError(
                    key_index, "plugin actions are configured by their plugin"
                )

            if action.action_type == ActionType.MESSAGE:
                field, value = "message_to_print", message_to_print
            else:
                field, value = "command_to_run", command_to_run
            if value is None:
                raise BindingConfigurationError(
                    key_index, f"{action.action_type.value} actions need {field}"
                )
            update = {field: value}

            binding = KeyBinding(
                key_index=key_index,
                action=action.model_copy(update=update, deep=True),
                configuration_control=current.configuration_control,
            )
            with self._lock:
                self._slots[key_index] = binding

            logger.info(f"Updated Key {binding.key_number} to {binding.action.payload}")
            self._observers.notify(
                "on_binding_event", BindingEvent.KEY_CONFIGURED, key_index, binding.snapshot()
            )

        return binding.snapshot()

    def clear(self, key_index: int) -> KeyBinding:
        """Reset a key to the unassigned action."""
        return self.assign(key_index, ActionDescriptor.unassigned())

    # =================================================================
    # Helpers
    # =================================================================

    def _check_index(self, key_index: int) -> None:
        if (
            not isinstance(key_index, int)
            or isinstance(key_index, bool)
            or not 0 <= key_index < self._key_count
        ):
            raise KeyIndexOutOfRangeError(key_index, self._key_count)

    def _lookup_configuration_control(self, action: ActionDescriptor) -> Any | None:
        if not action.is_plugin or self._registry is None:
            return None

        plugin = self._registry.resolve(action.action_id)
        if plugin is None:
            return None

        try:
            return plugin.get_configuration_control()
        except Exception as e:
            logger.error(f"Failed to get configuration control from plugin {plugin.name}: {e}")
            return None
