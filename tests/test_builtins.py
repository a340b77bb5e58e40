"""Tests for the built-in message and command sinks."""

from unittest.mock import patch

import pytest

from macrodeck.core import default_builtin_handlers, print_message, run_command
from macrodeck.models import ActionDescriptor, ActionType


@pytest.mark.unit
class TestPrintMessage:

    def test_echoes_text(self, capsys):
        result = print_message(ActionDescriptor.message(name="Greet", text="Hello"))

        assert result.success
        assert result.action_name == "Greet"
        assert capsys.readouterr().out == "Hello\n"

    def test_no_text(self):
        action = ActionDescriptor(action_name="Empty", action_type=ActionType.MESSAGE)

        assert not print_message(action).success


@pytest.mark.unit
class TestRunCommand:

    def test_launches_without_waiting(self):
        with patch("macrodeck.core.builtins.subprocess.Popen") as popen:
            popen.return_value.pid = 1234
            result = run_command(ActionDescriptor.command(name="Open", command='xdg-open "My File.txt"'))

        assert result.success
        popen.assert_called_once_with(["xdg-open", "My File.txt"])
        popen.return_value.wait.assert_not_called()

    def test_blank_command(self):
        with patch("macrodeck.core.builtins.subprocess.Popen") as popen:
            result = run_command(ActionDescriptor.command(name="Nothing", command="   "))

        assert not result.success
        popen.assert_not_called()

    def test_missing_program_raises(self):
        with patch("macrodeck.core.builtins.subprocess.Popen", side_effect=FileNotFoundError("nope")):
            with pytest.raises(FileNotFoundError):
                run_command(ActionDescriptor.command(name="Missing", command="missing-program"))


@pytest.mark.unit
def test_default_handlers_cover_builtin_kinds():
    handlers = default_builtin_handlers()

    assert set(handlers) == {ActionType.MESSAGE, ActionType.COMMAND}
    assert ActionType.PLUGIN not in handlers
