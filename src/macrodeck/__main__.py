"""Main entry point for ``python -m macrodeck``."""

from macrodeck.cli import cli

if __name__ == "__main__":
    cli()
