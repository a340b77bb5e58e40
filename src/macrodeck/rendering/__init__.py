"""Key image rendering."""

from .renderer import AppearanceRenderer, KeyImageRenderer, load_font

__all__ = ["AppearanceRenderer", "KeyImageRenderer", "load_font"]
