"""Device command implementations."""

import logging

import click

from macrodeck.exceptions import DeviceError, format_error_for_display

logger = logging.getLogger(__name__)


@click.group(name="devices")
def devices_group():
    """Stream Deck device commands."""
    pass


@devices_group.command(name="list")
def list_devices():
    """List attached Stream Deck devices."""
    # Imported lazily so the rest of the CLI works without the HID backend
    from macrodeck.devices.streamdeck import list_devices as enumerate_devices

    try:
        devices = enumerate_devices()
    except DeviceError as e:
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(f"\n{recovery_hint}", err=True)
        raise SystemExit(1)

    click.echo("Stream Deck Devices:\n")
    if not devices:
        click.echo("  No Stream Deck devices found.")
        return

    for device in devices:
        click.echo(
            f"  [{device['index']}] {device['type']} ({device['key_count']} keys) {device['id']}"
        )
