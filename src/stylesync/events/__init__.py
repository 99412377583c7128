"""Event system: bus and event types for style manager lifecycle."""

from stylesync.events.bus import EventBus
from stylesync.events.types import (
    DeviceSelected,
    PropertyUpdated,
    TargetChanged,
    TargetCleared,
)

__all__ = [
    "EventBus",
    "DeviceSelected",
    "PropertyUpdated",
    "TargetChanged",
    "TargetCleared",
]
