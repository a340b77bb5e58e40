"""Plugin-related exceptions.

Discovery errors are never raised past the registry. They are captured as
values on the registry's ``failures`` list and logged once:

- PluginLoadError: a plugin module could not be imported
- PluginInstantiationError: a plugin class could not be constructed
- PluginDirectoryMissingError: the configured plugin root does not exist
- PluginExecutionError: a plugin's execute() raised or reported failure
"""

from pathlib import Path

from .base import MacroDeckError


class PluginError(MacroDeckError):
    """Base class for plugin errors."""
    pass


class PluginDiscoveryError(PluginError):
    """A plugin module or plugin type failed during discovery."""

    def __init__(self, module_path: Path, error_msg: str, **kwargs):
        self.module_path = Path(module_path)
        self.error_msg = error_msg
        super().__init__(**kwargs)


class PluginLoadError(PluginDiscoveryError):
    """A plugin module could not be imported."""

    def __init__(self, module_path: Path, error_msg: str):
        """
        Initialize plugin load error.

        Args:
            module_path: Path to the module that failed to load
            error_msg: The underlying error message
        """
        super().__init__(
            module_path,
            error_msg,
            user_message=f"Failed to load plugin from {module_path}: {error_msg}",
            technical_message=f"Import of plugin module {module_path} failed: {error_msg}",
            recoverable=True,
            recovery_hint=(
                "Fix the error in the plugin module or remove it from the plugin directory"
            ),
        )


class PluginInstantiationError(PluginDiscoveryError):
    """A plugin type could not be instantiated."""

    def __init__(self, module_path: Path, type_name: str, error_msg: str):
        """
        Initialize plugin instantiation error.

        Args:
            module_path: Path to the module that defines the type
            type_name: Name of the plugin class
            error_msg: The underlying error message
        """
        super().__init__(
            module_path,
            error_msg,
            user_message=f"Failed to instantiate plugin {type_name} from {module_path}: {error_msg}",
            technical_message=f"Constructing {type_name} ({module_path}) raised: {error_msg}",
            recoverable=True,
            recovery_hint="Plugin classes must have a constructor that takes no arguments",
        )
        self.type_name = type_name


class PluginDirectoryMissingError(PluginError):
    """The configured plugin directory does not exist."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        super().__init__(
            user_message=f"Plugin directory does not exist: {directory}",
            recoverable=True,
            recovery_hint=(
                f"Create {directory} and place plugin modules in it, "
                "or set 'plugin_dir' in your configuration"
            ),
        )


class PluginExecutionError(PluginError):
    """A plugin's execute() raised or reported failure."""

    def __init__(self, plugin_name: str, error_msg: str):
        self.plugin_name = plugin_name
        self.error_msg = error_msg
        super().__init__(
            user_message=f"Plugin action {plugin_name} failed: {error_msg}",
            recoverable=True,
        )
