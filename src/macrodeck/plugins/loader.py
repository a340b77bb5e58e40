"""
Plugin module loading.

Turns plugin source files into plugin instances. Every step returns an
explicit result; nothing raised by plugin code escapes this module.

Load Flow
---------

::

    plugins/ping.py
          ↓  load_module()          importlib, unique module name
    <module macrodeck_plugin_ping_...>
          ↓  find_plugin_types()    concrete PluginAction subclasses defined there
    [Ping]
          ↓  instantiate()          zero-argument constructor
    [Ping()]  or  PluginInstantiationError
"""

import hashlib
import importlib.util
import inspect
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from macrodeck.exceptions import PluginDiscoveryError, PluginInstantiationError, PluginLoadError

from .base import PluginAction

logger = logging.getLogger(__name__)

MODULE_SUFFIX = ".py"
MODULE_PREFIX = "macrodeck_plugin_"


@dataclass
class ModuleLoadResult:
    """Outcome of loading one plugin module, in discovery order."""

    path: Path
    outcomes: list[PluginAction | PluginDiscoveryError] = field(default_factory=list)

    @property
    def plugins(self) -> list[PluginAction]:
        """Successfully instantiated plugins."""
        return [o for o in self.outcomes if isinstance(o, PluginAction)]

    @property
    def errors(self) -> list[PluginDiscoveryError]:
        """Failures captured while loading this module."""
        return [o for o in self.outcomes if isinstance(o, PluginDiscoveryError)]

    @property
    def module_loaded(self) -> bool:
        """False if the module itself could not be imported."""
        return not any(isinstance(o, PluginLoadError) for o in self.outcomes)


def find_plugin_modules(directory: Path) -> list[Path]:
    """
    List plugin module files under a directory, recursively.

    Files whose name starts with an underscore (``__init__.py``, private
    helpers) are skipped. The result is sorted so load order is stable.
    """
    return sorted(
        path
        for path in directory.rglob(f"*{MODULE_SUFFIX}")
        if path.is_file() and not path.name.startswith("_")
    )


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:10]
    return f"{MODULE_PREFIX}{path.stem}_{digest}"


def load_module(path: Path) -> ModuleType:
    """
    Import a plugin module from a file.

    Raises:
        PluginLoadError: If the module cannot be imported for any reason
    """
    name = _module_name(path)
    try:
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"cannot create import spec for {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        return module
    except (Exception, SystemExit) as e:
        # SystemExit included: a module calling sys.exit() at import is just a bad plugin
        sys.modules.pop(name, None)
        raise PluginLoadError(path, _describe(e)) from e


def find_plugin_types(module: ModuleType) -> list[type[PluginAction]]:
    """
    Concrete PluginAction subclasses defined in a module, in definition order.

    Classes imported into the module from elsewhere are ignored so a plugin
    re-exported by several modules is only loaded once.
    """
    return [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj)
        and issubclass(obj, PluginAction)
        and obj.__module__ == module.__name__
        and not inspect.isabstract(obj)
    ]


def instantiate(plugin_type: type[PluginAction], path: Path) -> PluginAction:
    """
    Construct a plugin and check its identity attributes.

    Raises:
        PluginInstantiationError: If construction fails or name/action_id are not strings
    """
    try:
        plugin = plugin_type()
        for attr in ("name", "action_id"):
            value = getattr(plugin, attr)
            if not isinstance(value, str):
                raise TypeError(f"{attr} must be a string, got {type(value).__name__}")
        return plugin
    except Exception as e:
        raise PluginInstantiationError(path, plugin_type.__name__, _describe(e)) from e


def load_plugins_from_file(path: Path) -> ModuleLoadResult:
    """
    Load a module and instantiate every plugin type it defines.

    Returns:
        ModuleLoadResult with plugins and captured errors in the order they occurred
    """
    result = ModuleLoadResult(path=path)

    try:
        module = load_module(path)
    except PluginLoadError as e:
        result.outcomes.append(e)
        return result

    for plugin_type in find_plugin_types(module):
        try:
            result.outcomes.append(instantiate(plugin_type, path))
        except PluginInstantiationError as e:
            result.outcomes.append(e)

    return result


def _describe(error: BaseException) -> str:
    message = str(error)
    if not message:
        return type(error).__name__
    return message
