"""Output sinks for the built-in message and command actions.

Built-in actions have no effect unless these handlers are wired into the
dispatcher (``AppConfig.enable_builtin_actions``).
"""

import logging
import shlex
import subprocess
from collections.abc import Callable, Mapping
from typing import Any

import click

from macrodeck.models import ActionDescriptor, ActionType, ExecutionResult

logger = logging.getLogger(__name__)

BuiltinHandler = Callable[[ActionDescriptor], Any]


def print_message(action: ActionDescriptor) -> ExecutionResult:
    """Echo a MESSAGE action's text to stdout."""
    if action.message_to_print is None:
        return ExecutionResult.failed("no message to print", action.action_name)

    click.echo(action.message_to_print)
    return ExecutionResult.ok(action.action_name)


def run_command(action: ActionDescriptor) -> ExecutionResult:
    """
    Launch a COMMAND action's command line without waiting for it.

    The command is split with shlex and run without a shell.

    Raises:
        OSError: If the program cannot be started
    """
    if not action.command_to_run or not action.command_to_run.strip():
        return ExecutionResult.failed("no command to run", action.action_name)

    args = shlex.split(action.command_to_run)
    process = subprocess.Popen(args)
    logger.debug(f"Started '{action.command_to_run}' (pid {process.pid})")
    return ExecutionResult.ok(action.action_name)


def default_builtin_handlers() -> Mapping[ActionType, BuiltinHandler]:
    """Handlers for every built-in action kind."""
    return {
        ActionType.MESSAGE: print_message,
        ActionType.COMMAND: run_command,
    }
