"""Example plugin: logs a pong every time its key is pressed.

Copy this file into your plugin directory (~/.macrodeck/plugins by default)
and bind it with ``macrodeck run --bind 1=ping-1``.
"""

import logging

from macrodeck.plugins import ExecutionResult, PluginAction

logger = logging.getLogger(__name__)


class Ping(PluginAction):
    """Smallest useful plugin."""

    name = "Ping"
    action_id = "ping-1"

    def __init__(self):
        self.count = 0

    def execute(self):
        self.count += 1
        logger.info(f"pong #{self.count}")
        return ExecutionResult.ok(self.name)
