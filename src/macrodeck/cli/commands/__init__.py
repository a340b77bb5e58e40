"""CLI commands for macrodeck."""

from .devices import devices_group
from .plugins import plugins_group
from .run import run

__all__ = ["devices_group", "plugins_group", "run"]
