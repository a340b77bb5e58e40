"""Pytest fixtures for tests."""

import logging
import textwrap
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from macrodeck.devices import VirtualDeck
from macrodeck.models import AppConfig, Color
from macrodeck.plugins import PluginRegistry

PING_PLUGIN = """
    from macrodeck.plugins import PluginAction


    class Ping(PluginAction):
        name = "Ping"
        action_id = "ping-1"

        def __init__(self):
            self.calls = 0

        def execute(self):
            self.calls += 1
"""

FAILING_PLUGIN = """
    from macrodeck.plugins import PluginAction


    class Boom(PluginAction):
        name = "Boom"
        action_id = "boom-1"

        def execute(self):
            raise RuntimeError("kaboom")
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def plugin_dir(temp_dir):
    """Empty plugin directory."""
    path = temp_dir / "plugins"
    path.mkdir()
    return path


@pytest.fixture
def write_plugin(plugin_dir):
    """Write a plugin module into the plugin directory."""

    def _write(filename: str, source: str) -> Path:
        path = plugin_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def ping_plugin_dir(plugin_dir, write_plugin):
    """Plugin directory containing only the Ping plugin."""
    write_plugin("ping.py", PING_PLUGIN)
    return plugin_dir


@pytest.fixture
def ping_registry(ping_plugin_dir):
    """Registry that has discovered the Ping plugin."""
    registry = PluginRegistry()
    registry.discover(ping_plugin_dir)
    return registry


@pytest.fixture
def virtual_deck():
    """Open six-key virtual deck."""
    deck = VirtualDeck(key_count=6)
    deck.open()
    yield deck
    deck.close()


@pytest.fixture
def app_config(ping_plugin_dir):
    """Config pointing at the Ping plugin directory."""
    return AppConfig(
        plugin_dir=ping_plugin_dir,
        key_count=6,
        brightness=80,
        background_color=Color.key_background(),
    )


@pytest.fixture
def log_messages(caplog):
    """Messages a logger (and its children) emitted at or above a level."""
    caplog.set_level(logging.DEBUG, logger="macrodeck")

    def _messages(logger_name: str, level: int = logging.INFO) -> list[str]:
        return [
            record.getMessage()
            for record in caplog.records
            if (record.name == logger_name or record.name.startswith(logger_name + "."))
            and record.levelno >= level
        ]

    return _messages
