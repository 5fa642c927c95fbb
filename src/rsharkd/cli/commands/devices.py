"""Device command implementations."""

import logging

import click

from rsharkd.exceptions import DeviceError
from rsharkd.radio import list_devices

logger = logging.getLogger(__name__)


@click.group(name="devices")
def devices_group():
    """RadioSHARK device commands."""
    pass


@devices_group.command(name="list")
def list_radios():
    """List attached RadioSHARK devices."""
    try:
        identifiers = list_devices()
    except DeviceError as e:
        logger.error(f"Listing devices failed: {e.technical_message}")
        raise click.ClickException(str(e))

    click.echo("RadioSHARK devices:\n")
    if not identifiers:
        click.echo("  No RadioSHARK devices found.")
        return

    for identifier in identifiers:
        click.echo(f"  {identifier}")
    click.echo("\nPass an identifier to 'rsharkd serve --shark'.")
