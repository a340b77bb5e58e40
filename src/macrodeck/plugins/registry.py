"""
Plugin registry: discovery, the action catalog, and action-id resolution.

The registry is built once at startup by ``discover()`` and is read-only
afterwards. Calling ``discover()`` again is an explicit re-scan that replaces
the plugin list as a whole.

Failure policy: a bad module or plugin type is recorded on ``failures`` and
logged, and discovery moves on. A missing plugin directory yields an empty
registry. None of these conditions raise.
"""

import logging
from pathlib import Path
from threading import Lock

from macrodeck.exceptions import PluginDirectoryMissingError, PluginError
from macrodeck.models import ActionDescriptor, ActionType

from .base import PluginAction
from .loader import find_plugin_modules, load_plugins_from_file

logger = logging.getLogger(__name__)


class PluginRegistry:
    """
    Owns the loaded plugin instances and the list of discovery failures.

    Action ids are not required to be unique. ``resolve()`` returns the first
    plugin (in load order) with a matching id, and the catalog keeps
    duplicates.
    """

    def __init__(self) -> None:
        self._plugins: list[PluginAction] = []
        self._failures: list[PluginError] = []
        self._discovery_lock = Lock()
        self._ready = False

    # =================================================================
    # Discovery
    # =================================================================

    def discover(self, directory: Path) -> list[PluginAction]:
        """
        Scan a directory recursively and load every plugin found.

        Args:
            directory: Plugin root directory

        Returns:
            The loaded plugins, in load order (empty if the directory is missing)
        """
        directory = Path(directory)

        with self._discovery_lock:
            plugins: list[PluginAction] = []
            failures: list[PluginError] = []

            logger.info(f"Checking for plugins in: {directory}")

            if not directory.is_dir():
                failure = PluginDirectoryMissingError(directory)
                logger.warning(failure.user_message)
                failures.append(failure)
            else:
                modules = find_plugin_modules(directory)
                logger.info(f"Found {len(modules)} plugin module(s) in plugin directory.")

                for path in modules:
                    logger.info(f"Loading plugin from {path}")
                    result = load_plugins_from_file(path)

                    for outcome in result.outcomes:
                        if isinstance(outcome, PluginAction):
                            plugins.append(outcome)
                            logger.info(f"Loaded plugin: {outcome.name}")
                        else:
                            failures.append(outcome)
                            logger.error(outcome.user_message)

                    if result.module_loaded and not result.outcomes:
                        logger.info(f"No valid plugins found in {path}.")

            # Swap in the new state as a whole
            self._plugins = plugins
            self._failures = failures
            self._ready = True

            logger.info(f"Discovery finished: {len(plugins)} plugin(s), {len(failures)} failure(s)")
            return list(plugins)

    @property
    def is_ready(self) -> bool:
        """True once a discovery pass has completed."""
        return self._ready

    @property
    def plugins(self) -> list[PluginAction]:
        """Loaded plugins in load order."""
        return list(self._plugins)

    @property
    def failures(self) -> list[PluginError]:
        """Errors captured during the last discovery pass."""
        return list(self._failures)

    def __len__(self) -> int:
        return len(self._plugins)

    # =================================================================
    # Catalog and resolution
    # =================================================================

    def available_actions(self) -> list[ActionDescriptor]:
        """
        Build the action catalog from every loaded plugin.

        Order follows plugin load order. Plugins whose get_action_details()
        fails are logged and left out.
        """
        actions: list[ActionDescriptor] = []

        for plugin in self._plugins:
            try:
                details = plugin.get_action_details()
                if not isinstance(details, ActionDescriptor):
                    raise TypeError(
                        f"get_action_details() returned {type(details).__name__}, "
                        "expected ActionDescriptor"
                    )
            except Exception as e:
                logger.error(f"Failed to get action details from plugin {plugin.name}: {e}")
                continue

            # Catalog entries always point back at their plugin
            if details.action_type != ActionType.PLUGIN or not details.action_id:
                details = details.model_copy(
                    update={
                        "action_type": ActionType.PLUGIN,
                        "action_id": details.action_id or plugin.action_id,
                    }
                )

            logger.info(f"Adding plugin action: {details.action_name}")
            actions.append(details)

        return actions

    def resolve(self, action_id: str | None) -> PluginAction | None:
        """
        Find the plugin that owns an action id.

        Returns:
            The first plugin with a matching id, or None (built-in or unknown action)
        """
        if not action_id:
            return None

        for plugin in self._plugins:
            if plugin.action_id == action_id:
                return plugin
        return None
