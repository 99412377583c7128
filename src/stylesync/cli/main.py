"""stylesync CLI entry point: Click group with subcommands."""

import logging

import click

from stylesync import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stylesync")
@click.option("-v", "--verbose", is_flag=True, help="Log property synchronization to stderr")
def cli(verbose: bool) -> None:
    """stylesync - structured CSS property editing across breakpoints."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from stylesync.cli.devices import devices  # noqa: E402
from stylesync.cli.edit import set_values  # noqa: E402
from stylesync.cli.inspect import inspect  # noqa: E402

cli.add_command(inspect)
cli.add_command(set_values)
cli.add_command(devices)
