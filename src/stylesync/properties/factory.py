"""Build properties from configuration mappings.

A configuration looks like::

    {"property": "padding", "type": "composite", "detached": True,
     "properties": ["padding-top", {"property": "padding-right", "default": "0"}, ...]}

``extend`` starts from a built-in definition and overrides its keys, so
``{"extend": "padding", "detached": True}`` is a detached padding. A plain
string is shorthand for ``{"extend": name}`` when *name* is built in, else
for ``{"property": name}``.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Mapping

from stylesync.errors import ConfigError
from stylesync.properties.base import Property, PropertyType
from stylesync.properties.builtins import BUILTIN_PROPERTIES
from stylesync.properties.composite import CompositeProperty
from stylesync.properties.stack import StackProperty

PropertyConfig = Mapping[str, Any] | str

# Widget-level value types of an editor UI; for the model they are all base.
_BASE_ALIASES = {
    "simple",
    "number",
    "integer",
    "color",
    "select",
    "radio",
    "slider",
    "file",
}

_KNOWN_KEYS = {
    "property",
    "type",
    "label",
    "default",
    "properties",
    "detached",
    "separator",
    "join",
    "separator_layers",
    "join_layers",
    "from_style",
    "to_style",
}


def resolve_config(config: PropertyConfig) -> dict[str, Any]:
    """Merge ``extend`` into *config*; returns a new plain dict."""
    if isinstance(config, str):
        config = {"extend": config} if config in BUILTIN_PROPERTIES else {"property": config}

    resolved: dict[str, Any] = {}
    extend = config.get("extend")
    if extend is not None:
        if extend not in BUILTIN_PROPERTIES:
            raise ConfigError(f"Unknown property to extend: {extend!r}", str(extend))
        resolved = copy.deepcopy(BUILTIN_PROPERTIES[extend])
    resolved.update({k: v for k, v in config.items() if k != "extend"})

    if not resolved.get("property"):
        raise ConfigError(f"Property config without a 'property' name: {dict(config)!r}")
    unknown = set(resolved) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(
            f"Unknown keys {sorted(unknown)} in config of {resolved['property']!r}",
            resolved["property"],
        )
    return resolved


def resolve_type(config: Mapping[str, Any]) -> PropertyType:
    raw = config.get("type")
    if not raw:
        return PropertyType.COMPOSITE if config.get("properties") else PropertyType.BASE
    if raw in _BASE_ALIASES:
        return PropertyType.BASE
    try:
        return PropertyType(raw)
    except ValueError:
        raise ConfigError(
            f"Unknown property type {raw!r} for {config.get('property')!r}",
            config.get("property"),
        ) from None


def _build_base(config: Mapping[str, Any]) -> Property:
    return Property(
        config["property"],
        default_value=config.get("default", ""),
        label=config.get("label", ""),
    )


def _build_children(config: Mapping[str, Any]) -> list[Property]:
    children = []
    for child in config.get("properties") or ():
        child_config = resolve_config({"property": child} if isinstance(child, str) else child)
        if resolve_type(child_config) is not PropertyType.BASE:
            raise ConfigError(
                f"Sub-property {child_config['property']!r} of {config['property']!r} "
                "must be a base property",
                config["property"],
            )
        children.append(_build_base(child_config))
    if not children:
        raise ConfigError(f"{config['property']!r} needs at least one sub-property", config["property"])
    return children


def _layout_options(config: Mapping[str, Any]) -> dict[str, Any]:
    options = {
        key: config[key]
        for key in ("detached", "separator", "join", "from_style", "to_style")
        if key in config
    }
    options["default_value"] = config.get("default", "")
    options["label"] = config.get("label", "")
    return options


def _build_composite(config: Mapping[str, Any]) -> Property:
    return CompositeProperty(
        config["property"], _build_children(config), **_layout_options(config)
    )


def _build_stack(config: Mapping[str, Any]) -> Property:
    options = _layout_options(config)
    for key in ("separator_layers", "join_layers"):
        if key in config:
            options[key] = config[key]
    return StackProperty(config["property"], _build_children(config), **options)


_BUILDERS: dict[PropertyType, Callable[[Mapping[str, Any]], Property]] = {
    PropertyType.BASE: _build_base,
    PropertyType.COMPOSITE: _build_composite,
    PropertyType.STACK: _build_stack,
}


def create_property(config: PropertyConfig) -> Property:
    """Create a property from a configuration mapping or a property name."""
    resolved = resolve_config(config)
    return _BUILDERS[resolve_type(resolved)](resolved)
