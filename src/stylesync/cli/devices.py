"""CLI command: stylesync devices -- list breakpoints in cascade order."""

from __future__ import annotations

import click

from stylesync.devices import DeviceManager


@click.command()
@click.option(
    "--media-condition",
    type=click.Choice(["max-width", "min-width"]),
    default="max-width",
    show_default=True,
)
def devices(media_condition: str) -> None:
    """List the devices from the broadest breakpoint to the narrowest."""
    for device in DeviceManager().sorted_by_breakpoint(media_condition):
        media = device.get_media_text(media_condition) or "(all)"
        click.echo(f"{device.id:<16} {device.name:<18} {media}")
