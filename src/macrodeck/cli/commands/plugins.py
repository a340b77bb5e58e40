"""Plugin command implementations."""

import logging
from pathlib import Path
from typing import Optional

import click

from macrodeck.models import AppConfig
from macrodeck.plugins import PluginRegistry

logger = logging.getLogger(__name__)


@click.group(name="plugins")
def plugins_group():
    """Plugin commands."""
    pass


@plugins_group.command(name="list")
@click.option(
    '--plugin-dir', '-p',
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help='Plugin directory (default: from config)'
)
@click.option(
    '--config', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.macrodeck/config.json)'
)
def list_plugins(plugin_dir: Optional[Path], config_path: Optional[Path]):
    """List plugins and the actions they provide."""
    if plugin_dir is None:
        plugin_dir = AppConfig.load_or_default(config_path).plugin_dir

    registry = PluginRegistry()
    registry.discover(plugin_dir)

    click.echo(f"Plugins in {plugin_dir}:\n")
    actions = registry.available_actions()
    if not actions:
        click.echo("  No plugin actions found.")
    else:
        for action in actions:
            click.echo(f"  {action.action_id:<20} {action.action_name}")

    failures = registry.failures
    if failures:
        click.echo(f"\nProblems ({len(failures)}):\n")
        for failure in failures:
            click.echo(f"  {failure.user_message}")
