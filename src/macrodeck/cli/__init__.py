"""Command-line interface for MacroDeck."""

from .main import cli

__all__ = ["cli"]
