"""StackProperty: a comma-separated list of layers, each a group of sub-values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from stylesync.css.model import CssRule
from stylesync.errors import HookError
from stylesync.properties.base import FromStyle, HookContext, Property, PropertyType, ToStyle
from stylesync.properties.composite import CompositeProperty
from stylesync.properties.layer import Layer
from stylesync.properties.values import declared, join_values, split_value

if TYPE_CHECKING:
    from stylesync.target import StyleTarget

logger = logging.getLogger(__name__)


class StackProperty(CompositeProperty):
    """A property holding an ordered list of layers (``box-shadow``, ``background``).

    Combined mode writes every layer into the main declaration, joined with
    ``join_layers``. Detached mode writes one list per sub-property and
    empties the main declaration.

    Sub-property edits apply to the selected layer; every mutation
    re-serializes the whole stack.
    """

    type = PropertyType.STACK

    def __init__(
        self,
        name: str,
        properties: Sequence[Property],
        *,
        detached: bool = False,
        separator: str = " ",
        join: str = " ",
        separator_layers: str = ",",
        join_layers: str = ", ",
        from_style: FromStyle | None = None,
        to_style: ToStyle | None = None,
        default_value: str = "",
        label: str = "",
    ) -> None:
        super().__init__(
            name,
            properties,
            detached=detached,
            separator=separator,
            join=join,
            from_style=from_style,
            to_style=to_style,
            default_value=default_value,
            label=label,
        )
        self.separator_layers = separator_layers
        self.join_layers = join_layers
        self.layers: list[Layer] = []
        self._selected: int | None = None

    def _hook_context(self) -> HookContext:
        return HookContext(
            property=self,
            name=self.name,
            separator=self.separator,
            separator_layers=self.separator_layers,
        )

    # --- parsing --------------------------------------------------------------

    def get_layers_from_style(self, style: Mapping[str, Any]) -> list[dict[str, str]] | None:
        """Parse *style* into per-layer value maps, None when there are no layers.

        The main declaration sets the baseline layers. Each sub-declaration
        then overrides its value layer by layer; groups beyond the baseline
        add trailing layers holding only that sub-property.
        """
        if self.from_style is not None:
            result = self.from_style(style, self._hook_context())
            if result is not None and not (
                isinstance(result, (list, tuple)) and all(isinstance(r, Mapping) for r in result)
            ):
                raise HookError(self.name, "from_style", result)
            return result

        primary = declared(style, self.name)
        if self.name in style and not primary and not self.detached:
            return None
        explicit = {
            prop.name: value for prop in self.properties if (value := declared(style, prop.name))
        }
        if not primary and not explicit:
            return None

        layers = [self._split_value(group) for group in split_value(primary, self.separator_layers)]
        for name, value in explicit.items():
            for i, group in enumerate(split_value(value, self.separator_layers)):
                if i < len(layers):
                    layers[i][name] = group
                else:
                    layers.append({name: group})
        return layers

    def _split_value(self, value: str) -> dict[str, str]:
        tokens = split_value(value, self.separator)
        return {
            prop.name: tokens[i] if i < len(tokens) else ""
            for i, prop in enumerate(self.properties)
        }

    # --- serialization --------------------------------------------------------

    def get_style_from_layers(self) -> dict[str, str]:
        """The full patch for the main declaration and every sub-declaration."""
        style = self._empty_style()
        if not self.layers:
            return style
        if self.detached:
            for prop in self.properties:
                column = [layer.get_value(prop.name) for layer in self.layers]
                if any(column):
                    style[prop.name] = self.join_layers.join(
                        value or prop.default_value for value in column
                    )
            return style
        if self.to_style is not None:
            style[self.name] = self._layers_to_string()
            return style

        # Layers after the first one with a gap go to per-sub-property lists.
        kept = self._positional_layers()
        style[self.name] = self._layers_to_string(self.layers[:kept])
        if kept == len(self.layers):
            return style
        if not kept:
            logger.warning(
                "%s: first layer has an unset position, its layers will not read back", self.name
            )
        rest = self.layers[kept:]
        for prop in self.properties:
            if any(layer.get_value(prop.name) for layer in rest):
                style[prop.name] = self.join_layers.join(
                    layer.get_value(prop.name) or prop.default_value for layer in self.layers
                )
        return style

    def _positional_layers(self) -> int:
        """Number of leading layers the main declaration can hold with values in place."""
        for i, layer in enumerate(self.layers):
            tokens = [layer.get_value(prop.name) or prop.default_value for prop in self.properties]
            while tokens and not tokens[-1]:
                tokens.pop()
            if not all(tokens):
                return i
        return len(self.layers)

    def _layers_to_string(self, layers: Sequence[Layer] | None = None) -> str:
        layers = self.layers if layers is None else layers
        return self.join_layers.join(self._layer_to_string(layer) for layer in layers)

    def _layer_to_string(self, layer: Layer) -> str:
        values = {prop.name: "" for prop in self.properties}
        values.update(layer.get_values())
        if self.to_style is not None:
            result = self.to_style(values)
            if not isinstance(result, Mapping):
                raise HookError(self.name, "to_style", result)
            return result.get(self.name, "")
        return join_values(
            (values[prop.name] or prop.default_value for prop in self.properties), self.join
        )

    def get_style_from_props(self) -> dict[str, str]:
        return self.get_style_from_layers()

    # --- layers ---------------------------------------------------------------

    def get_layers(self) -> list[Layer]:
        return list(self.layers)

    def get_layer(self, index: int) -> Layer:
        self._check_index(index)
        return self.layers[index]

    def add_layer(self, values: Mapping[str, str] | None = None, at: int | None = None) -> Layer:
        """Insert a layer (at the end by default) and write the stack back."""
        layer = self._insert_layer(values, at)
        self._push(self.get_style_from_layers())
        return layer

    def _insert_layer(self, values: Mapping[str, str] | None, at: int | None) -> Layer:
        layer_values = {prop.name: "" for prop in self.properties}
        for name, value in (values or {}).items():
            if name in layer_values:
                layer_values[name] = value
        index = len(self.layers) if at is None else at
        if not 0 <= index <= len(self.layers):
            raise IndexError(f"Layer position {index} out of range for {self.name!r}")
        layer = Layer(values=layer_values)
        self.layers.insert(index, layer)
        if self._selected is not None and self._selected >= index:
            self._selected += 1
        self._reindex()
        return layer

    def remove_layer_at(self, index: int) -> Layer:
        """Remove the layer at *index* and write the stack back."""
        self._check_index(index)
        layer = self.layers.pop(index)
        if self._selected is not None:
            if self._selected == index:
                self._selected = None
            elif self._selected > index:
                self._selected -= 1
        self._reindex()
        self._sync_children()
        self._push(self.get_style_from_layers())
        return layer

    def remove_layer(self, layer: Layer) -> Layer:
        for i, candidate in enumerate(self.layers):
            if candidate is layer:
                return self.remove_layer_at(i)
        raise ValueError(f"Layer is not part of {self.name!r}")

    def move_layer(self, from_index: int, to_index: int) -> Layer:
        """Move a layer to a new position, keeping it selected if it was."""
        self._check_index(from_index)
        self._check_index(to_index)
        selected = self.get_selected_layer()
        layer = self.layers.pop(from_index)
        self.layers.insert(to_index, layer)
        self._reindex()
        if selected is not None:
            self._selected = next(i for i, c in enumerate(self.layers) if c is selected)
        self._push(self.get_style_from_layers())
        return layer

    def select_layer_at(self, index: int) -> Layer:
        self._check_index(index)
        self._selected = index
        self._sync_children()
        return self.layers[index]

    def get_selected_layer(self) -> Layer | None:
        if self._selected is None:
            return None
        return self.layers[self._selected]

    def get_selected_layer_index(self) -> int | None:
        return self._selected

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.layers):
            raise IndexError(f"Layer index {index} out of range for {self.name!r}")

    def _reindex(self) -> None:
        for i, layer in enumerate(self.layers):
            layer.index = i

    def _set_layers(self, layers: Sequence[Mapping[str, str]]) -> None:
        self.layers = [Layer(values=dict(values), index=i) for i, values in enumerate(layers)]

    def _sync_children(self) -> None:
        layer = self.get_selected_layer()
        for prop in self.properties:
            if layer is None:
                prop._assign("", None)
            else:
                prop._assign(layer.get_value(prop.name), self._origin)

    # --- synchronization ------------------------------------------------------

    def sync(self, target: StyleTarget | None) -> None:
        previous = self._target.rule if self._target is not None else None
        self._target = target
        if target is None:
            layers, origin = None, None
        else:
            layers, origin = target.resolve(self._read_layers)
        self._origin = origin
        self._set_layers(layers or [])
        if (
            target is None
            or target.rule is not previous
            or self._selected is None
            or self._selected >= len(self.layers)
        ):
            self._selected = None
        self._sync_children()
        logger.debug("Synced %s: %d layer(s)", self.name, len(self.layers))

    def _read_layers(self, style: Mapping[str, Any]) -> list[dict[str, str]] | None:
        return self.get_layers_from_style(style) or None

    # --- reads ----------------------------------------------------------------

    def get_value(self) -> str:
        return self._layers_to_string()

    def has_value(self, no_parent: bool = False) -> bool:
        if self._origin is None or not self.layers:
            return False
        return not no_parent or self._is_direct()

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["layers"] = [layer.get_values() for layer in self.layers]
        data["selected_layer"] = self._selected
        return data

    # --- writes ---------------------------------------------------------------

    def up_value(self, value: str) -> None:
        """Replace every layer with the ones parsed from *value*."""
        value = "" if value is None else str(value).strip()
        self._set_layers(self.get_layers_from_style({self.name: value}) or [])
        self._selected = None
        self._sync_children()
        self._push(self.get_style_from_layers())

    def _up_child(self, child: Property, value: str) -> None:
        if self._selected is None:
            self._insert_layer(None, None)
            self._selected = len(self.layers) - 1
        self.layers[self._selected].set_value(child.name, value)
        child.value = value
        self._push(self.get_style_from_layers())

    def clear(self) -> None:
        """Drop every layer and empty all declarations."""
        self.layers = []
        self._selected = None
        self._origin = None
        self._sync_children()
        self._push(self._empty_style())

    def _mark_written(self, rule: CssRule) -> None:
        self._origin = rule if self.layers else None
        for prop in self.properties:
            prop._mark_written(rule)
