"""CLI command: stylesync inspect -- show structured property values for a selector."""

from __future__ import annotations

import json

import click

from stylesync.cli._common import SECTOR_ID, load_manager, selection_options


def _origin_note(data: dict) -> str:
    if not data["has_value"]:
        return "  (unset)"
    if data["inherited"]:
        return "  (inherited)"
    return ""


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@selection_options
@click.option("--json", "as_json", is_flag=True, help="Print values as JSON")
def inspect(
    stylesheet: str,
    selector: str,
    device: str,
    properties: tuple[str, ...],
    media_condition: str,
    as_json: bool,
) -> None:
    """Parse STYLESHEET and display the structured values of each property.

    Values come from the rule matching --selector at --device; declarations it
    lacks are inherited from broader breakpoints.
    """
    manager = load_manager(stylesheet, selector, device, properties, media_condition)
    values = manager.get_values()[SECTOR_ID]

    if as_json:
        click.echo(json.dumps(values, indent=2))
        return

    rule = manager.get_last_selected()
    if rule is None:
        click.echo("No rule matches the selection.")
        return
    click.echo(f"Rule:    {rule.selector_string()}" + (f" @media {rule.media}" if rule.media else ""))
    parents = manager.get_selected_parents()
    if parents:
        click.echo("Parents: " + ", ".join(p.media or "(all)" for p in parents))
    click.echo()

    for data in values.values():
        click.echo(f"{data['name']}: {data['value']}{_origin_note(data)}")
        if "layers" in data:
            for i, layer in enumerate(data["layers"]):
                pairs = " ".join(f"{k}={v}" for k, v in layer.items() if v)
                click.echo(f"  [{i}] {pairs}")
        elif "properties" in data and data["has_value"]:
            for child in data["properties"]:
                click.echo(f"  {child['name']}: {child['value']}")
