"""CompositeProperty: one CSS value split into named sub-properties."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from stylesync.css.model import CssRule
from stylesync.errors import ConfigError, HookError
from stylesync.properties.base import FromStyle, HookContext, Property, PropertyType, ToStyle
from stylesync.properties.values import compress_box, declared, expand_box, join_values, split_value

if TYPE_CHECKING:
    from stylesync.target import StyleTarget

logger = logging.getLogger(__name__)


class CompositeProperty(Property):
    """A property whose value is composed of an ordered set of sub-properties.

    In combined mode the sub-values are written as one shorthand declaration
    (``padding: 1px 2px``) and every sub-declaration is emptied. In detached
    mode each sub-property writes its own declaration and the shorthand is
    emptied. Switching modes only changes how values are written.

    With exactly four sub-properties the shorthand follows the CSS box rule
    (top, right, bottom, left); other arities are positional.
    """

    type = PropertyType.COMPOSITE

    def __init__(
        self,
        name: str,
        properties: Sequence[Property],
        *,
        detached: bool = False,
        separator: str = " ",
        join: str = " ",
        from_style: FromStyle | None = None,
        to_style: ToStyle | None = None,
        default_value: str = "",
        label: str = "",
    ) -> None:
        super().__init__(name, default_value=default_value, label=label)
        names = [p.name for p in properties]
        if len(set(names)) != len(names):
            raise ConfigError(f"Duplicate sub-property names in {name!r}: {names}", name)
        self.properties: list[Property] = list(properties)
        for prop in self.properties:
            if prop.get_type() is not PropertyType.BASE:
                raise ConfigError(
                    f"Sub-property {prop.name!r} of {name!r} must be a base property", name
                )
            prop._owner = self
        self.detached = detached
        self.separator = separator
        self.join = join
        self.from_style = from_style
        self.to_style = to_style
        # Token count of the shorthand last read, kept so output does not shrink it.
        self._arity: int | None = None

    # --- structure ------------------------------------------------------------

    def get_properties(self) -> list[Property]:
        return list(self.properties)

    def get_property(self, name: str) -> Property | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def get_values(self) -> dict[str, str]:
        """Current sub-property values keyed by name."""
        return {prop.name: prop.value for prop in self.properties}

    def is_detached(self) -> bool:
        return self.detached

    def set_detached(self, detached: bool) -> None:
        self.detached = bool(detached)

    def get_split_separator(self) -> str:
        """Separator between sub-values inside the shorthand."""
        return self.separator

    def _hook_context(self) -> HookContext:
        return HookContext(property=self, name=self.name, separator=self.separator)

    # --- parsing --------------------------------------------------------------

    def get_props_from_style(self, style: Mapping[str, Any]) -> dict[str, str] | None:
        """Parse *style* into sub-property values, None when nothing is declared.

        Explicit sub-declarations (``padding-right``) override the values
        derived from the shorthand.
        """
        if self.from_style is not None:
            result = self.from_style(style, self._hook_context())
            if result is not None and not isinstance(result, Mapping):
                raise HookError(self.name, "from_style", result)
            return result

        combined = declared(style, self.name)
        explicit = {
            prop.name: value for prop in self.properties if (value := declared(style, prop.name))
        }
        if not combined and not explicit:
            return None

        if combined:
            result = self._split_value(combined)
        else:
            result = {prop.name: "" for prop in self.properties}
        result.update(explicit)
        return result

    def _split_value(self, value: str) -> dict[str, str]:
        tokens = split_value(value, self.separator)
        if len(self.properties) == 4:
            tokens = expand_box(tokens)
        return {
            prop.name: tokens[i] if i < len(tokens) else ""
            for i, prop in enumerate(self.properties)
        }

    # --- serialization --------------------------------------------------------

    def _empty_style(self) -> dict[str, str]:
        style = {self.name: ""}
        style.update({prop.name: "" for prop in self.properties})
        return style

    def get_style_from_props(self) -> dict[str, str]:
        """The full patch for the shorthand and every sub-declaration."""
        values = self.get_values()
        style = self._empty_style()
        if self.detached:
            style.update(values)
            return style
        if self.to_style is not None:
            result = self.to_style(values)
            if not isinstance(result, Mapping):
                raise HookError(self.name, "to_style", result)
            style.update(result)
            return style
        if not self._keeps_positions(values):
            # A gap before a set value cannot be written in the shorthand.
            logger.debug("Writing %s as separate declarations", self.name)
            style.update(values)
            return style
        style[self.name] = self._join(values)
        return style

    def _tokens(self, values: Mapping[str, str]) -> list[str]:
        return [values.get(prop.name) or prop.default_value for prop in self.properties]

    def _keeps_positions(self, values: Mapping[str, str]) -> bool:
        """True when the joined shorthand reads back with every value in place."""
        if not any(values.get(prop.name) for prop in self.properties):
            return True
        tokens = self._tokens(values)
        if len(tokens) == 4:
            return all(tokens)
        while tokens and not tokens[-1]:
            tokens.pop()
        return all(tokens)

    def _join(self, values: Mapping[str, str]) -> str:
        if not any(values.get(prop.name) for prop in self.properties):
            return ""
        tokens = self._tokens(values)
        if len(tokens) == 4 and all(tokens):
            shortest = compress_box(tokens)
            tokens = tokens[: max(len(shortest), self._arity or 0)]
        return join_values(tokens, self.join)

    def get_style(self) -> dict[str, str]:
        return self.get_style_from_props()

    # --- synchronization ------------------------------------------------------

    def sync(self, target: StyleTarget | None) -> None:
        self._target = target
        self._arity = None
        if target is None:
            self._assign_values({}, None)
            return
        values, origin = target.resolve(self._read_props)
        self._assign_values(values or {}, origin)

    def _read_props(self, style: Mapping[str, Any]) -> dict[str, str] | None:
        values = self.get_props_from_style(style)
        if not values or not any(isinstance(v, str) and v for v in values.values()):
            return None
        self._arity = self._count_tokens(declared(style, self.name))
        return values

    def _count_tokens(self, shorthand: str) -> int | None:
        return len(split_value(shorthand, self.separator)) or None

    def _assign_values(self, values: Mapping[str, str], origin: CssRule | None) -> None:
        self._origin = origin
        for prop in self.properties:
            prop._assign(values.get(prop.name, ""), origin)

    # --- reads ----------------------------------------------------------------

    def get_value(self) -> str:
        return self._join(self.get_values())

    def has_value(self, no_parent: bool = False) -> bool:
        if self._origin is None or not any(prop.value for prop in self.properties):
            return False
        return not no_parent or self._is_direct()

    def get_full_value(self) -> str:
        if self.has_value():
            return self.get_value()
        return self.default_value

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["detached"] = self.detached
        data["properties"] = [prop.to_dict() for prop in self.properties]
        return data

    # --- writes ---------------------------------------------------------------

    def up_value(self, value: str) -> None:
        """Set the whole shorthand value, re-deriving every sub-property."""
        value = "" if value is None else str(value).strip()
        values = self.get_props_from_style({self.name: value}) or {}
        self._arity = self._count_tokens(value)
        self._assign_values(values, self._origin)
        self._push(self.get_style_from_props())

    def _up_child(self, child: Property, value: str) -> None:
        child.value = value
        self._push(self.get_style_from_props())

    def clear(self) -> None:
        """Empty the shorthand and every sub-declaration."""
        self._arity = None
        self._assign_values({}, None)
        self._push(self._empty_style())

    def _mark_written(self, rule: CssRule) -> None:
        self._origin = rule
        for prop in self.properties:
            prop._mark_written(rule)
