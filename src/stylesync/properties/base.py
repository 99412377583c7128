"""Base property: one CSS declaration projected from the current style target."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Callable, Mapping

from stylesync.css.model import CssRule
from stylesync.errors import ConfigError
from stylesync.properties.values import declared

if TYPE_CHECKING:
    from stylesync.properties.composite import CompositeProperty
    from stylesync.target import StyleTarget

logger = logging.getLogger(__name__)


class PropertyType(StrEnum):
    BASE = "base"
    COMPOSITE = "composite"
    STACK = "stack"


@dataclass(frozen=True)
class HookContext:
    """Second argument handed to custom ``from_style`` hooks."""

    property: Property
    name: str
    separator: str = " "
    separator_layers: str = ","


FromStyle = Callable[[Mapping[str, Any], HookContext], Any]
ToStyle = Callable[[dict[str, str]], Mapping[str, str]]
ChangeListener = Callable[["Property", dict[str, Any]], None]


class Property:
    """A named leaf value bound to a single CSS declaration.

    ``value`` is a projection of the style target, refreshed by :meth:`sync`.
    ``_origin`` records which rule supplied it: the target rule itself, one
    of its parents, or None when nothing defines the declaration.
    """

    type = PropertyType.BASE

    def __init__(self, name: str, *, default_value: str = "", label: str = "") -> None:
        if not name:
            raise ConfigError("Property name must be a non-empty string")
        self.name = name
        self.label = label or name
        self.default_value = default_value
        self.value = ""
        self._origin: CssRule | None = None
        self._target: StyleTarget | None = None
        self._owner: CompositeProperty | None = None
        self._listeners: list[ChangeListener] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, value={self.value!r})"

    # --- identity -------------------------------------------------------------

    def get_name(self) -> str:
        return self.name

    def get_label(self) -> str:
        return self.label

    def get_type(self) -> PropertyType:
        return self.type

    def get_default_value(self) -> str:
        return self.default_value

    def get_owner(self) -> CompositeProperty | None:
        return self._owner

    def is_top_level(self) -> bool:
        return self._owner is None

    def get_target(self) -> StyleTarget | None:
        if self._owner is not None:
            return self._owner.get_target()
        return self._target

    def on_change(self, callback: ChangeListener) -> None:
        """Call *callback(property, patch)* after every patch this property pushes."""
        self._listeners.append(callback)

    # --- synchronization ------------------------------------------------------

    def sync(self, target: StyleTarget | None) -> None:
        """Refresh the value from *target*; None discards the projection."""
        self._target = target
        if target is None:
            self._assign("", None)
            return
        value, origin = target.resolve(self._read)
        self._assign(value or "", origin)

    def _read(self, style: Mapping[str, Any]) -> str | None:
        return declared(style, self.name) or None

    def _assign(self, value: str, origin: CssRule | None) -> None:
        self.value = value
        self._origin = origin

    def _is_direct(self) -> bool:
        target = self.get_target()
        return target is not None and self._origin is target.rule

    # --- reads ----------------------------------------------------------------

    def get_value(self) -> str:
        return self.value

    def has_value(self, no_parent: bool = False) -> bool:
        """True when a non-empty value resolves on the target rule or, unless *no_parent*, a parent."""
        if not self.value or self._origin is None:
            return False
        return not no_parent or self._is_direct()

    def get_full_value(self) -> str:
        """The resolved value, or the default when nothing defines it."""
        if self.has_value():
            return self.value
        return self.default_value

    def get_style(self) -> dict[str, str]:
        """The declarations this property writes for its current value."""
        return {self.name: self.value}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": str(self.type),
            "value": self.get_full_value(),
            "has_value": self.has_value(),
            "inherited": self.has_value() and not self.has_value(no_parent=True),
        }

    # --- writes ---------------------------------------------------------------

    def up_value(self, value: str) -> None:
        """Set the value and write it back to the target rule."""
        value = "" if value is None else str(value).strip()
        if self._owner is not None:
            self._owner._up_child(self, value)
            return
        self.value = value
        self._push(self.get_style())

    def clear(self) -> None:
        """Empty the declaration on the target rule."""
        if self._owner is not None:
            self._owner._up_child(self, "")
            return
        self.value = ""
        self._push({self.name: ""})

    def _push(self, patch: dict[str, Any]) -> None:
        target = self.get_target()
        if target is None:
            logger.debug("No style target bound, %s keeps its value locally", self.name)
            return
        written = target.update_style(patch)
        logger.debug("Pushed %s to %r: %s", self.name, target.rule, patch)
        self._mark_written(target.rule)
        for callback in list(self._listeners):
            callback(self, written)

    def _mark_written(self, rule: CssRule) -> None:
        self._origin = rule if self.value else None
