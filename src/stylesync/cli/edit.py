"""CLI command: stylesync set -- edit property values and print the resulting stylesheet."""

from __future__ import annotations

from pathlib import Path

import click

from stylesync.cli._common import find_property, load_manager, selection_options
from stylesync.properties import StackProperty


def _parse_assignment(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint="ASSIGNMENTS")
    return name.strip(), value.strip()


@click.command(name="set")
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.argument("assignments", nargs=-1, required=True)
@selection_options
@click.option("--layer", type=int, default=None, help="Layer edited by stack sub-properties")
@click.option("--in-place", is_flag=True, help="Rewrite STYLESHEET instead of printing")
def set_values(
    stylesheet: str,
    assignments: tuple[str, ...],
    selector: str,
    device: str,
    properties: tuple[str, ...],
    media_condition: str,
    layer: int | None,
    in_place: bool,
) -> None:
    """Apply NAME=VALUE edits to the rule matching --selector at --device.

    NAME may be a property or a sub-property (``padding-top``); an empty VALUE
    clears it.
    """
    manager = load_manager(stylesheet, selector, device, properties, media_condition)
    for raw in assignments:
        name, value = _parse_assignment(raw)
        prop = find_property(manager, name)
        if prop is None:
            raise click.BadParameter(f"unknown property {name!r}", param_hint="ASSIGNMENTS")
        owner = prop.get_owner()
        if isinstance(owner, StackProperty) and layer is not None:
            try:
                owner.select_layer_at(layer)
            except IndexError as exc:
                raise click.BadParameter(str(exc), param_hint="--layer") from exc
        if value:
            prop.up_value(value)
        else:
            prop.clear()

    css = manager.rules.to_css(media_condition)
    if in_place:
        Path(stylesheet).write_text(css, encoding="utf-8")
        click.echo(f"Updated {stylesheet}")
    else:
        click.echo(css, nl=False)
