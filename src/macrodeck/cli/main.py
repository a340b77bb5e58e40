"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from macrodeck import __version__

from .commands import devices_group, plugins_group, run

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".macrodeck" / "logs"
DEBUG_LOG_NAME = "macrodeck-debug.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5
LOG_HANDLER_NAME = "macrodeck-file"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where setup_logging() writes for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / DEBUG_LOG_NAME
    return DEFAULT_LOG_DIR / "macrodeck.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Send log records to a rotating file and return its path.

    Level: ``--log-level`` when ``--log-file`` is given, otherwise DEBUG for
    ``--debug`` or ``-vv``, INFO for ``-v`` and WARNING by default.
    """
    if log_file:
        level = logging.getLevelName(log_level.upper())
    elif debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.set_name(LOG_HANDLER_NAME)

    root_logger = logging.getLogger()
    # One file handler per process, even when the CLI is invoked repeatedly
    for existing in list(root_logger.handlers):
        if existing.get_name() == LOG_HANDLER_NAME:
            root_logger.removeHandler(existing)
            existing.close()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    logger.info(f"Logging to {log_path} at {logging.getLevelName(level)}")
    return log_path


@click.group()
@click.version_option(version=__version__, prog_name="macrodeck")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help=f'Enable debug mode (DEBUG level, logs to ./{DEBUG_LOG_NAME})'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
@click.pass_context
def cli(ctx, verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    MacroDeck - plugin-driven macro keys for Stream Deck keypads.

    Plugins are Python modules in the plugin directory (~/.macrodeck/plugins
    by default). Each plugin action can be bound to a key; pressing the key
    runs it.

    \b
    Examples:
      # Run with the first attached Stream Deck
      macrodeck run --bind 1=ping-1

      # Run without hardware
      macrodeck run --virtual --bind "2=message:Hello"

      # Show the actions your plugins provide
      macrodeck plugins list

      # List attached Stream Decks
      macrodeck devices list
    """
    ctx.ensure_object(dict)
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


# Register commands
cli.add_command(run)
cli.add_command(plugins_group)
cli.add_command(devices_group)

if __name__ == "__main__":
    cli()
