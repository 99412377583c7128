"""stylesync -- structured CSS property model synchronized with style rules."""

__version__ = "0.1.0"

from stylesync.config import StyleManagerConfig
from stylesync.css import CssRule, RuleSet, Selector, parse_stylesheet
from stylesync.devices import Device, DeviceManager
from stylesync.errors import ConfigError, HookError, SectorNotFoundError, StyleSyncError
from stylesync.manager import Sector, StyleManager
from stylesync.properties import (
    CompositeProperty,
    Layer,
    Property,
    PropertyType,
    StackProperty,
    create_property,
)
from stylesync.target import Selectable, StyleTarget

__all__ = [
    "__version__",
    "StyleManagerConfig",
    "CssRule",
    "RuleSet",
    "Selector",
    "parse_stylesheet",
    "Device",
    "DeviceManager",
    "ConfigError",
    "HookError",
    "SectorNotFoundError",
    "StyleSyncError",
    "Sector",
    "StyleManager",
    "CompositeProperty",
    "Layer",
    "Property",
    "PropertyType",
    "StackProperty",
    "create_property",
    "Selectable",
    "StyleTarget",
]
