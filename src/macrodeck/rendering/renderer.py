"""Key appearance rendering: label images pushed to the deck's key displays."""

import logging
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

from macrodeck.models import AppConfig, Color, KeyBinding
from macrodeck.protocols import BindingEvent

if TYPE_CHECKING:
    from macrodeck.core import KeyBindingTable
    from macrodeck.devices import DeckTransport

logger = logging.getLogger(__name__)

DEFAULT_FONT = "DejaVuSans-Bold.ttf"
DEFAULT_FONT_SIZE = 14


def load_font(font_path: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Load a TrueType font, falling back to Pillow's built-in font.

    Args:
        font_path: Font file name (searched on the system font path) or full path
        size: Font size in pixels
    """
    try:
        return ImageFont.truetype(font_path, size)
    except OSError as e:
        logger.warning(f"Failed to load font '{font_path}', using default: {e}")
        return ImageFont.load_default()


class KeyImageRenderer:
    """
    Draws a key label onto a solid background.

    Rendering is pure: the same label always yields the same pixels, and no
    device is touched.
    """

    def __init__(
        self,
        size: tuple[int, int],
        font_path: str = DEFAULT_FONT,
        font_size: int = DEFAULT_FONT_SIZE,
        background: Color | None = None,
        text_color: Color | None = None,
    ):
        self.size = size
        self.background = background or Color.key_background()
        self.text_color = text_color or Color.white()
        self._font = load_font(font_path, font_size)

    def render(self, label: str) -> Image.Image:
        """
        Render a label centred horizontally and vertically.

        Multi-line labels are centred line by line.
        """
        image = Image.new("RGB", self.size, color=self.background.to_rgb_tuple())
        if not label:
            return image

        draw = ImageDraw.Draw(image)
        left, top, right, bottom = draw.multiline_textbbox(
            (0, 0), label, font=self._font, align="center"
        )
        x = (self.size[0] - (right - left)) / 2 - left
        y = (self.size[1] - (bottom - top)) / 2 - top
        draw.multiline_text(
            (x, y), label, font=self._font, fill=self.text_color.to_rgb_tuple(), align="center"
        )
        return image


class AppearanceRenderer:
    """
    Keeps key displays in sync with the binding table.

    Implements the BindingObserver protocol: every assignment or payload edit
    redraws the affected key before the table call returns.
    """

    def __init__(self, transport: "DeckTransport", image_renderer: KeyImageRenderer):
        self._transport = transport
        self._image_renderer = image_renderer

    @classmethod
    def from_config(cls, transport: "DeckTransport", config: AppConfig) -> "AppearanceRenderer":
        """Build a renderer sized for the transport and styled by the config."""
        image_renderer = KeyImageRenderer(
            size=transport.key_image_size,
            font_path=config.font_path,
            font_size=config.font_size,
            background=config.background_color,
            text_color=config.text_color,
        )
        return cls(transport, image_renderer)

    @property
    def image_renderer(self) -> KeyImageRenderer:
        return self._image_renderer

    def update(self, key_index: int, label: str) -> None:
        """Render a label and push it to one key."""
        image = self._image_renderer.render(label)
        native = self._transport.encode_key_image(image)
        self._transport.set_key_image(key_index, native)
        logger.debug(f"Rendered Key {key_index + 1}: {label!r}")

    def render_all(self, table: "KeyBindingTable") -> None:
        """Draw every key from the table's current bindings."""
        for binding in table.bindings():
            self.update(binding.key_index, binding.label)

    # =================================================================
    # BindingObserver Protocol
    # =================================================================

    def on_binding_event(self, event: BindingEvent, key_index: int, binding: KeyBinding) -> None:
        """Redraw a key whose binding changed."""
        if event in (BindingEvent.KEY_ASSIGNED, BindingEvent.KEY_CONFIGURED):
            self.update(key_index, binding.label)
