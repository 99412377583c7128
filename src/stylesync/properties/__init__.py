"""Property model layer -- public type re-exports."""

from stylesync.properties.base import HookContext, Property, PropertyType
from stylesync.properties.builtins import BUILTIN_PROPERTIES
from stylesync.properties.composite import CompositeProperty
from stylesync.properties.factory import create_property, resolve_config
from stylesync.properties.layer import Layer
from stylesync.properties.stack import StackProperty

__all__ = [
    # variants
    "PropertyType",
    "Property",
    "CompositeProperty",
    "StackProperty",
    # values
    "Layer",
    "HookContext",
    # configuration
    "BUILTIN_PROPERTIES",
    "create_property",
    "resolve_config",
]
