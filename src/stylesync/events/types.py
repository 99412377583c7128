"""Event types emitted by the style manager."""

from dataclasses import dataclass
from typing import Any

from stylesync.css.model import CssRule


@dataclass(frozen=True)
class TargetChanged:
    rule: CssRule
    parents: tuple[CssRule, ...]


@dataclass(frozen=True)
class TargetCleared:
    previous: CssRule


@dataclass(frozen=True)
class DeviceSelected:
    device_id: str


@dataclass(frozen=True)
class PropertyUpdated:
    sector_id: str
    property_name: str
    patch: dict[str, Any]
