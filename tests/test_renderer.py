"""Tests for key image rendering."""

import io
from unittest.mock import Mock, patch

import pytest
from PIL import Image, ImageChops

from macrodeck.core import KeyBindingTable
from macrodeck.models import ActionDescriptor, AppConfig, Color
from macrodeck.rendering import AppearanceRenderer, KeyImageRenderer, load_font

BACKGROUND = (50, 50, 50)


@pytest.fixture
def image_renderer():
    return KeyImageRenderer(size=(72, 72))


def label_box(image: Image.Image) -> tuple[int, int, int, int] | None:
    """Bounding box of everything that differs from the background."""
    background = Image.new("RGB", image.size, BACKGROUND)
    return ImageChops.difference(image, background).getbbox()


@pytest.mark.unit
class TestKeyImageRenderer:

    def test_blank_label_is_plain_background(self, image_renderer):
        image = image_renderer.render("")

        assert image.size == (72, 72)
        assert image.mode == "RGB"
        assert image.getcolors() == [(72 * 72, BACKGROUND)]

    def test_label_is_drawn(self, image_renderer):
        image = image_renderer.render("Ping")

        colors = {color for _, color in image.getcolors(72 * 72)}
        assert BACKGROUND in colors
        assert len(colors) > 1
        assert image.getpixel((0, 0)) == BACKGROUND

    def test_render_is_pure(self, image_renderer):
        assert image_renderer.render("Ping").tobytes() == image_renderer.render("Ping").tobytes()

    def test_label_is_centred(self):
        renderer = KeyImageRenderer(size=(100, 100), font_size=20)

        left, top, right, bottom = label_box(renderer.render("HH"))

        assert abs((left + right) / 2 - 50) <= 4
        assert abs((top + bottom) / 2 - 50) <= 4

    def test_multiline_label(self, image_renderer):
        single = label_box(image_renderer.render("Open"))
        double = label_box(image_renderer.render("Open\nDocs"))

        assert double[3] - double[1] > single[3] - single[1]

    def test_custom_colors(self):
        renderer = KeyImageRenderer(
            size=(20, 20), background=Color(r=255, g=0, b=0), text_color=Color.white()
        )

        assert renderer.render("").getpixel((10, 10)) == (255, 0, 0)


@pytest.mark.unit
class TestFontLoading:

    def test_missing_font_falls_back(self, caplog):
        font = load_font("definitely-not-a-font.ttf", 14)

        assert font is not None
        assert any("Failed to load font" in r.getMessage() for r in caplog.records)

    def test_fallback_still_renders(self):
        renderer = KeyImageRenderer(size=(72, 72), font_path="definitely-not-a-font.ttf")

        assert len(renderer.render("Ping").getcolors(72 * 72)) > 1


@pytest.mark.unit
class TestAppearanceRenderer:

    def test_update_encodes_and_pushes(self, virtual_deck, image_renderer):
        renderer = AppearanceRenderer(virtual_deck, image_renderer)

        renderer.update(2, "Ping")

        png = virtual_deck.images[2]
        image = Image.open(io.BytesIO(png))
        assert image.size == (72, 72)
        assert image.convert("RGB").tobytes() == image_renderer.render("Ping").tobytes()

    def test_update_uses_transport_encoding(self, image_renderer):
        transport = Mock()
        transport.encode_key_image.return_value = b"native"
        renderer = AppearanceRenderer(transport, image_renderer)

        renderer.update(0, "Ping")

        transport.encode_key_image.assert_called_once()
        transport.set_key_image.assert_called_once_with(0, b"native")

    def test_render_all(self, virtual_deck, image_renderer):
        table = KeyBindingTable(virtual_deck.key_count)
        table.assign(0, ActionDescriptor.message(name="Hi", text="hi"))
        renderer = AppearanceRenderer(virtual_deck, image_renderer)

        renderer.render_all(table)

        assert sorted(virtual_deck.images) == list(range(6))
        assert virtual_deck.images[0] != virtual_deck.images[1]
        assert virtual_deck.images[1] == virtual_deck.images[5]

    def test_redraws_on_assign(self, virtual_deck, image_renderer):
        table = KeyBindingTable(virtual_deck.key_count)
        renderer = AppearanceRenderer(virtual_deck, image_renderer)
        table.register_observer(renderer)

        table.assign(3, ActionDescriptor.message(name="Hi", text="hi"))

        expected = virtual_deck.encode_key_image(image_renderer.render("Hi"))
        assert virtual_deck.images[3] == expected

    def test_from_config(self, virtual_deck):
        config = AppConfig(font_size=20, background_color=Color.off())

        renderer = AppearanceRenderer.from_config(virtual_deck, config)

        assert renderer.image_renderer.size == virtual_deck.key_image_size
        assert renderer.image_renderer.render("").getpixel((0, 0)) == (0, 0, 0)

    def test_font_size_from_config(self, virtual_deck):
        with patch("macrodeck.rendering.renderer.load_font") as mock_load:
            AppearanceRenderer.from_config(virtual_deck, AppConfig(font_path="x.ttf", font_size=30))

        mock_load.assert_called_once_with("x.ttf", 30)
