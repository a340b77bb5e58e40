"""
Top-level MacroDeck application orchestrator.

Wires the plugin registry, key binding table, dispatcher, renderer and device
bridge together and owns their lifecycle. The CLI is one front end; tests and
embedding code drive the same object directly.
"""

import logging

from macrodeck.core import ExecutionDispatcher, KeyBindingTable, default_builtin_handlers
from macrodeck.devices import DeckTransport, DeviceEventBridge
from macrodeck.diagnostics import DiagnosticsLog
from macrodeck.models import ActionDescriptor, AppConfig, KeyBinding
from macrodeck.plugins import PluginRegistry
from macrodeck.rendering import AppearanceRenderer

logger = logging.getLogger(__name__)


class MacroDeckApp:
    """
    Top-level orchestrator.

    Architecture:
        MacroDeckApp (this class)
        ├── registry: plugins discovered from config.plugin_dir
        ├── bridge: transport lifecycle, key presses → dispatch pool
        ├── table: key index → binding (observed by renderer)
        ├── renderer: binding changes → key images
        └── dispatcher: key presses → action execution

    Startup order: discover plugins, open the device, build the table sized to
    the device, draw every key, then subscribe to key presses.
    """

    def __init__(
        self,
        config: AppConfig,
        transport: DeckTransport,
        diagnostics: DiagnosticsLog | None = None,
    ):
        """
        Initialize the orchestrator. Nothing is opened until initialize().

        Args:
            config: Application configuration
            transport: Deck transport (hardware or virtual)
            diagnostics: Optional diagnostics log attached for the app's lifetime
        """
        self.config = config
        self.diagnostics = diagnostics

        self.registry = PluginRegistry()
        self.bridge = DeviceEventBridge(
            transport,
            brightness=config.brightness,
            max_workers=config.dispatch_workers,
        )

        # Created in initialize(), once the key count is known
        self.table: KeyBindingTable | None = None
        self.renderer: AppearanceRenderer | None = None
        self.dispatcher: ExecutionDispatcher | None = None

        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Discover plugins, open the device and start listening for presses.

        Raises:
            DeviceNotFoundError: If the device cannot be opened
        """
        if self._initialized:
            return

        if self.diagnostics is not None:
            self.diagnostics.attach()

        self.registry.discover(self.config.plugin_dir)

        self.bridge.open()
        transport = self.bridge.transport

        self.table = KeyBindingTable(transport.key_count, registry=self.registry)

        self.renderer = AppearanceRenderer.from_config(transport, self.config)
        self.table.register_observer(self.renderer)
        self.renderer.render_all(self.table)

        builtin_handlers = (
            default_builtin_handlers() if self.config.enable_builtin_actions else None
        )
        self.dispatcher = ExecutionDispatcher(self.table, self.registry, builtin_handlers)
        self.bridge.register_observer(self.dispatcher)
        self.bridge.start()

        self._initialized = True
        logger.info(
            f"MacroDeckApp initialized: {len(self.registry)} plugin(s), {transport.key_count} keys"
        )

    def shutdown(self) -> None:
        """Stop key delivery, release the device and detach diagnostics."""
        logger.info("Shutting down MacroDeckApp")
        try:
            self.bridge.close()
        finally:
            if self.diagnostics is not None:
                self.diagnostics.detach()
            self._initialized = False

    def __enter__(self):
        """Context manager entry."""
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.shutdown()

    # =================================================================
    # Catalog and bindings
    # =================================================================

    def available_actions(self) -> list[ActionDescriptor]:
        """Actions offered by the loaded plugins."""
        return self.registry.available_actions()

    def find_action(self, action_id: str) -> ActionDescriptor | None:
        """First catalog entry with the given action id."""
        for action in self.available_actions():
            if action.action_id == action_id:
                return action
        return None

    def assign(self, key_index: int, descriptor: ActionDescriptor) -> KeyBinding:
        """Bind an action to a key (see KeyBindingTable.assign)."""
        return self._require_table().assign(key_index, descriptor)

    def configure(
        self,
        key_index: int,
        message_to_print: str | None = None,
        command_to_run: str | None = None,
    ) -> KeyBinding:
        """Edit a built-in binding's payload (see KeyBindingTable.configure)."""
        return self._require_table().configure(key_index, message_to_print, command_to_run)

    def _require_table(self) -> KeyBindingTable:
        if self.table is None:
            raise RuntimeError("MacroDeckApp is not initialized")
        return self.table
