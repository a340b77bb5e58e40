"""Run command - opens the deck and executes key bindings until interrupted."""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

import click

from macrodeck.app import MacroDeckApp
from macrodeck.diagnostics import DiagnosticsLog
from macrodeck.exceptions import format_error_for_display
from macrodeck.models import ActionDescriptor, AppConfig

logger = logging.getLogger(__name__)

MESSAGE_PREFIX = "message:"
COMMAND_PREFIX = "command:"


def parse_binding(value: str) -> tuple[int, str]:
    """
    Split a ``KEY=SPEC`` option into a 0-based key index and the spec.

    KEY is the 1-based key number shown on the deck and in the log.

    Raises:
        click.BadParameter: If the value is malformed
    """
    key, sep, spec = value.partition("=")
    if not sep or not spec:
        raise click.BadParameter(f"expected KEY=SPEC, got '{value}'", param_hint="--bind")
    try:
        key_number = int(key)
    except ValueError:
        raise click.BadParameter(f"key must be a number, got '{key}'", param_hint="--bind") from None
    if key_number < 1:
        raise click.BadParameter(f"key numbers start at 1, got {key_number}", param_hint="--bind")
    return key_number - 1, spec


def descriptor_from_spec(app: MacroDeckApp, spec: str) -> ActionDescriptor:
    """
    Build the action for a binding spec.

    ``message:TEXT`` and ``command:CMD`` create built-in actions; anything else
    is looked up as a plugin action id.

    Raises:
        click.BadParameter: If no plugin provides the action id
    """
    if spec.startswith(MESSAGE_PREFIX):
        text = spec[len(MESSAGE_PREFIX):]
        return ActionDescriptor.message(name=text, text=text)
    if spec.startswith(COMMAND_PREFIX):
        command = spec[len(COMMAND_PREFIX):]
        return ActionDescriptor.command(name=command, command=command)

    action = app.find_action(spec)
    if action is None:
        known = ", ".join(a.action_id for a in app.available_actions() if a.action_id) or "none"
        raise click.BadParameter(
            f"no plugin provides action '{spec}' (available: {known})", param_hint="--bind"
        )
    return action


def build_transport(config: AppConfig, virtual: bool):
    """Create the deck transport for the run."""
    if virtual:
        from macrodeck.devices import VirtualDeck

        return VirtualDeck(key_count=config.key_count)

    # Imported lazily so --virtual works without the HID backend
    from macrodeck.devices.streamdeck import StreamDeckTransport

    return StreamDeckTransport(device_index=config.device_index)


@click.command()
@click.option(
    '--config', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.macrodeck/config.json)'
)
@click.option(
    '--plugin-dir', '-p',
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help='Plugin directory (overrides config)'
)
@click.option(
    '--virtual',
    is_flag=True,
    help='Use an in-memory deck instead of hardware'
)
@click.option(
    '--bind', '-b', 'bindings',
    multiple=True,
    metavar='KEY=SPEC',
    help='Bind a key: KEY=ACTION_ID, KEY=message:TEXT or KEY=command:CMD (repeatable)'
)
@click.option(
    '--press', 'presses',
    type=click.IntRange(min=1),
    multiple=True,
    metavar='KEY',
    help='With --virtual: press these keys in order, then exit (repeatable)'
)
@click.option(
    '--enable-builtins/--no-enable-builtins',
    default=None,
    help='Execute message/command actions (overrides config)'
)
@click.option(
    '--quiet', '-q',
    is_flag=True,
    help='Do not echo the diagnostics log to stderr'
)
@click.pass_context
def run(
    ctx,
    config_path: Optional[Path],
    plugin_dir: Optional[Path],
    virtual: bool,
    bindings: tuple[str, ...],
    presses: tuple[int, ...],
    enable_builtins: Optional[bool],
    quiet: bool,
):
    """
    Open the deck, apply bindings and run until Ctrl+C.

    \b
    Examples:
      macrodeck run --bind 1=ping-1 --bind "2=message:Hello"
      macrodeck run --virtual --bind 1=ping-1 --press 1
    """
    if presses and not virtual:
        raise click.UsageError("--press requires --virtual")

    parsed = [parse_binding(value) for value in bindings]
    log_path = (ctx.obj or {}).get("log_path")

    try:
        config = AppConfig.load_or_default(config_path)
        overrides = {}
        if plugin_dir is not None:
            overrides["plugin_dir"] = plugin_dir
        if enable_builtins is not None:
            overrides["enable_builtin_actions"] = enable_builtins
        if overrides:
            config = config.model_copy(update=overrides)

        echo = None if quiet else (lambda line: click.echo(line, err=True))
        app = MacroDeckApp(
            config=config,
            transport=build_transport(config, virtual),
            diagnostics=DiagnosticsLog(echo=echo),
        )
        app.initialize()

        for key_index, spec in parsed:
            app.assign(key_index, descriptor_from_spec(app, spec))

        if presses:
            for key_number in presses:
                app.bridge.transport.press(key_number - 1)
                app.bridge.transport.release(key_number - 1)
            return

        click.echo("Listening for key presses. Press Ctrl+C to stop.", err=True)
        threading.Event().wait()

    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.ClickException:
        raise
    except Exception as e:
        logger.exception("Error running application")

        user_message, recovery_hint = format_error_for_display(e)

        click.echo("\n" + "="*70, err=True)
        click.echo(f"ERROR: {user_message}", err=True)
        click.echo("="*70, err=True)

        if recovery_hint:
            click.echo(f"\n{recovery_hint}", err=True)

        if log_path:
            click.echo(f"\nFor details, check the log file: {log_path}", err=True)

        sys.exit(1)
    finally:
        if 'app' in locals():
            app.shutdown()
