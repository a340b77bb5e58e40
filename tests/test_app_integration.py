"""End-to-end tests: plugins → bindings → key presses on a virtual deck."""

import pytest

from conftest import FAILING_PLUGIN
from macrodeck.app import MacroDeckApp
from macrodeck.devices import VirtualDeck
from macrodeck.diagnostics import DiagnosticsLog
from macrodeck.exceptions import DeviceError
from macrodeck.models import ActionDescriptor


@pytest.fixture
def deck():
    return VirtualDeck(key_count=6)


@pytest.fixture
def app(app_config, deck):
    app = MacroDeckApp(app_config, deck, diagnostics=DiagnosticsLog())
    app.initialize()
    yield app
    app.shutdown()


def press_and_wait(app: MacroDeckApp, key_index: int) -> None:
    """Press a key and wait until the press has been fully dispatched."""
    transport = app.bridge.transport
    transport.press(key_index)
    transport.release(key_index)
    # stop() drains the pool; restart for the next press
    app.bridge.stop()
    app.bridge.start()


@pytest.mark.integration
class TestStartup:

    def test_initialize_wires_everything(self, app, deck):
        assert app.is_initialized
        assert deck.is_open
        assert deck.brightness == 80
        assert app.table.key_count == 6
        assert app.bridge.is_running
        # Every key drawn blank at startup
        assert sorted(deck.images) == list(range(6))

    def test_catalog(self, app):
        actions = app.available_actions()

        assert [(a.action_id, a.action_name) for a in actions] == [("ping-1", "Ping")]
        assert app.find_action("ping-1").action_name == "Ping"
        assert app.find_action("nope") is None

    def test_missing_plugin_dir(self, app_config, deck, temp_dir):
        config = app_config.model_copy(update={"plugin_dir": temp_dir / "missing"})

        with MacroDeckApp(config, deck) as app:
            assert app.available_actions() == []
            assert app.table.key_count == 6

    def test_assign_before_initialize(self, app_config, deck):
        app = MacroDeckApp(app_config, deck)

        with pytest.raises(RuntimeError):
            app.assign(0, ActionDescriptor.message(name="Hi", text="hi"))

    def test_device_failure_leaves_nothing_running(self, app_config):
        class Unplugged(VirtualDeck):
            def open(self):
                raise DeviceError(user_message="unplugged")

        app = MacroDeckApp(app_config, Unplugged())

        with pytest.raises(DeviceError):
            app.initialize()

        assert not app.is_initialized
        app.shutdown()


@pytest.mark.integration
class TestPingScenario:

    def test_press_executes_plugin_and_logs_once(self, app):
        app.assign(0, app.find_action("ping-1"))

        press_and_wait(app, 0)

        ping = app.registry.resolve("ping-1")
        assert ping.calls == 1
        messages = app.diagnostics.messages()
        assert messages.count("Executed plugin action: Ping") == 1
        assert "Assigned Ping to Key 1" in messages

    def test_assign_redraws_key(self, app, deck):
        blank = deck.images[0]

        app.assign(0, app.find_action("ping-1"))

        assert deck.images[0] != blank
        assert deck.images[1] == blank

    def test_unassigned_press(self, app):
        press_and_wait(app, 5)

        assert "No action assigned to Key 6" in app.diagnostics.messages()

    def test_diagnostics_lines_are_timestamped(self, app):
        press_and_wait(app, 5)

        (line,) = [l for l in app.diagnostics.lines if l.endswith("No action assigned to Key 6")]
        timestamp, message = line.split(": ", 1)
        assert message == "No action assigned to Key 6"
        assert len(timestamp) == len("2024-01-01 00:00:00")


@pytest.mark.integration
class TestFaultContainment:

    def test_failing_plugin_does_not_stop_others(self, app_config, deck, write_plugin):
        write_plugin("boom.py", FAILING_PLUGIN)

        with MacroDeckApp(app_config, deck, diagnostics=DiagnosticsLog()) as app:
            app.assign(0, app.find_action("boom-1"))
            app.assign(1, app.find_action("ping-1"))

            press_and_wait(app, 0)
            press_and_wait(app, 1)

            messages = app.diagnostics.messages()
            assert "Plugin action Boom failed: kaboom" in messages
            assert "Executed plugin action: Ping" in messages
            assert app.registry.resolve("ping-1").calls == 1


@pytest.mark.integration
class TestBuiltins:

    def test_builtins_inert_by_default(self, app):
        app.assign(2, ActionDescriptor.message(name="Hello", text="Hello"))

        press_and_wait(app, 2)

        assert (
            "No action executed for Key 3: message action 'Hello' has no output sink"
            in app.diagnostics.messages()
        )

    def test_builtins_enabled(self, app_config, deck, capsys):
        config = app_config.model_copy(update={"enable_builtin_actions": True})

        with MacroDeckApp(config, deck, diagnostics=DiagnosticsLog()) as app:
            app.assign(2, ActionDescriptor.message(name="Hello", text="Hello from the deck"))
            press_and_wait(app, 2)

            assert "Executed message action: Hello" in app.diagnostics.messages()

        assert "Hello from the deck" in capsys.readouterr().out

    def test_configure_updates_key(self, app, deck):
        app.assign(0, ActionDescriptor.message(name="Greet", text="Hello"))
        before = deck.images[0]

        app.configure(0, message_to_print="Goodbye")

        assert app.table.get(0).action.message_to_print == "Goodbye"
        assert "Updated Key 1 to Goodbye" in app.diagnostics.messages()
        # Label unchanged, so the redrawn image is identical
        assert deck.images[0] == before
