"""Tests for the Stream Deck transport (hardware library mocked)."""

from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from macrodeck.devices.streamdeck import StreamDeckTransport, enumerate_decks, list_devices
from macrodeck.exceptions import DeviceError, DeviceNotFoundError


def make_deck(deck_type="Stream Deck Mini", key_count=6, size=(80, 80), visual=True):
    """MagicMock standing in for a StreamDeck device object."""
    deck = MagicMock()
    deck.deck_type.return_value = deck_type
    deck.key_count.return_value = key_count
    deck.key_image_format.return_value = {"size": size, "format": "BMP"}
    deck.is_visual.return_value = visual
    deck.id.return_value = "/dev/hidraw0"
    return deck


@pytest.fixture
def mock_manager():
    with patch("macrodeck.devices.streamdeck.DeviceManager") as manager_cls:
        yield manager_cls.return_value


@pytest.mark.unit
class TestEnumeration:

    def test_non_visual_decks_skipped(self, mock_manager):
        pedal = make_deck("Stream Deck Pedal", visual=False)
        mini = make_deck()
        mock_manager.enumerate.return_value = [pedal, mini]

        assert enumerate_decks() == [mini]

    def test_list_devices(self, mock_manager):
        mock_manager.enumerate.return_value = [make_deck(), make_deck("Stream Deck XL", 32)]

        devices = list_devices()

        assert [d["type"] for d in devices] == ["Stream Deck Mini", "Stream Deck XL"]
        assert devices[1]["key_count"] == 32
        assert devices[1]["index"] == 1

    def test_missing_hid_backend(self, mock_manager):
        mock_manager.enumerate.side_effect = OSError("Could not find the hidapi library")

        with pytest.raises(DeviceNotFoundError):
            enumerate_decks()


@pytest.mark.unit
class TestTransport:

    def test_open_first_deck(self, mock_manager):
        deck = make_deck()
        mock_manager.enumerate.return_value = [deck]
        transport = StreamDeckTransport()

        transport.open()

        deck.open.assert_called_once()
        deck.reset.assert_called_once()
        assert transport.key_count == 6
        assert transport.key_image_size == (80, 80)
        assert transport.name == "Stream Deck Mini"

    def test_no_device(self, mock_manager):
        mock_manager.enumerate.return_value = []

        with pytest.raises(DeviceNotFoundError) as exc_info:
            StreamDeckTransport().open()

        assert exc_info.value.recovery_hint

    def test_device_index_out_of_range(self, mock_manager):
        mock_manager.enumerate.return_value = [make_deck()]

        with pytest.raises(DeviceNotFoundError) as exc_info:
            StreamDeckTransport(device_index=1).open()

        assert exc_info.value.found == 1

    def test_open_failure_wrapped(self):
        deck = make_deck()
        deck.open.side_effect = OSError("permission denied")

        with pytest.raises(DeviceError) as exc_info:
            StreamDeckTransport(deck=deck).open()

        assert "permission denied" in exc_info.value.user_message

    def test_not_open(self):
        with pytest.raises(DeviceError):
            StreamDeckTransport().key_count

    def test_brightness_and_images(self):
        deck = make_deck()
        transport = StreamDeckTransport(deck=deck)
        transport.open()

        transport.set_brightness(40)
        transport.set_key_image(3, b"native")

        deck.set_brightness.assert_called_once_with(40)
        deck.set_key_image.assert_called_once_with(3, b"native")

    def test_encode_uses_pil_helper(self):
        deck = make_deck()
        transport = StreamDeckTransport(deck=deck)
        image = Image.new("RGB", (80, 80))

        with patch("macrodeck.devices.streamdeck.PILHelper") as helper:
            helper.to_native_key_format.return_value = b"jpeg"
            assert transport.encode_key_image(image) == b"jpeg"

        helper.to_native_key_format.assert_called_once_with(deck, image)

    def test_key_callback_translation(self):
        deck = make_deck()
        transport = StreamDeckTransport(deck=deck)
        calls = []

        transport.set_key_callback(lambda key, pressed: calls.append((key, pressed)))
        library_callback = deck.set_key_callback.call_args.args[0]
        library_callback(deck, 5, True)
        library_callback(deck, 5, False)

        assert calls == [(5, True), (5, False)]

    def test_unsubscribe(self):
        deck = make_deck()
        transport = StreamDeckTransport(deck=deck)

        transport.set_key_callback(lambda key, pressed: None)
        transport.set_key_callback(None)

        deck.set_key_callback.assert_called_with(None)

    def test_close(self):
        deck = make_deck()
        transport = StreamDeckTransport(deck=deck)
        transport.open()

        transport.close()

        deck.set_key_callback.assert_called_with(None)
        deck.close.assert_called_once()

    def test_close_failure_is_logged(self, caplog):
        deck = make_deck()
        transport = StreamDeckTransport(deck=deck)
        transport.open()
        deck.reset.side_effect = OSError("unplugged")

        transport.close()

        assert "Failed to close Stream Deck: unplugged" in caplog.text
        deck.close.assert_not_called()
