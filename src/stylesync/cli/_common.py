"""Helpers shared by CLI commands: loading a stylesheet into a bound StyleManager."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylesync.config import StyleManagerConfig
from stylesync.css import ParseError, RuleSet
from stylesync.devices import DeviceNotFoundError
from stylesync.manager import StyleManager
from stylesync.properties import BUILTIN_PROPERTIES, CompositeProperty, Property
from stylesync.target import Selectable

SECTOR_ID = "general"


def load_manager(
    stylesheet: str,
    selector: str,
    device: str,
    properties: tuple[str, ...],
    media_condition: str,
) -> StyleManager:
    """Parse *stylesheet*, select *selector* at *device* and return the bound manager."""
    try:
        rules = RuleSet()
        rules.add_rules(Path(stylesheet).read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error at {exc.location}: {exc}", err=True)
        sys.exit(1)

    try:
        selectable = Selectable.parse(selector)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--selector") from exc

    config = StyleManagerConfig(media_condition=media_condition)
    manager = StyleManager(rules=rules, config=config)
    manager.add_sector(SECTOR_ID, properties=properties or tuple(BUILTIN_PROPERTIES))
    try:
        manager.select_device(device)
    except DeviceNotFoundError as exc:
        raise click.BadParameter(str(exc), param_hint="--device") from exc
    manager.select(selectable)
    return manager


def find_property(manager: StyleManager, name: str) -> Property | None:
    """Look up *name* among top-level properties, then among their sub-properties."""
    top_level = manager.get_properties(SECTOR_ID)
    for prop in top_level:
        if prop.name == name:
            return prop
    for prop in top_level:
        if isinstance(prop, CompositeProperty):
            child = prop.get_property(name)
            if child is not None:
                return child
    return None


def selection_options(func):
    """Options common to commands that operate on one selected rule."""
    func = click.option(
        "--media-condition",
        type=click.Choice(["max-width", "min-width"]),
        default="max-width",
        show_default=True,
    )(func)
    func = click.option(
        "-p", "--property", "properties", multiple=True,
        help="Built-in or plain property to load (repeatable, default: all built-ins)",
    )(func)
    func = click.option("-d", "--device", default="desktop", show_default=True)(func)
    func = click.option("-s", "--selector", required=True, help="e.g. .btn.primary or #hero")(func)
    return func
