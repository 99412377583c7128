"""Selection stand-in and the resolved style target threaded through property reads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

from stylesync.css.model import PARTIAL_KEY, CssRule, Selector, parse_selector

T = TypeVar("T")


@dataclass(frozen=True)
class Selectable:
    """The selected element as far as styling is concerned: id, classes and state."""

    id: str = ""
    classes: tuple[str, ...] = ()
    state: str = ""

    @classmethod
    def parse(cls, text: str) -> Selectable:
        """Build a selectable from selector text such as ``.btn.primary:hover`` or ``#hero``."""
        parsed = parse_selector(text)
        if parsed is None:
            raise ValueError(f"Invalid selector: {text!r}")
        selectors, state = parsed
        classes = tuple(s.value for s in selectors if s.kind == "class")
        ids = [s.value for s in selectors if s.kind == "id"]
        return cls(id=ids[0] if ids else "", classes=classes, state=state)

    def selectors(self) -> tuple[Selector, ...]:
        """Selectors of the rule styling this element: its classes, else its id."""
        if self.classes:
            return tuple(Selector.for_class(name) for name in self.classes)
        if self.id:
            return (Selector.for_id(self.id),)
        return ()


@dataclass(frozen=True)
class StyleTarget:
    """A resolved rule plus its ancestor rules at broader breakpoints.

    Only ``rule`` is ever written; ``parents`` (nearest first) are read to
    inherit values the rule does not define.
    """

    rule: CssRule
    parents: tuple[CssRule, ...] = ()

    def rules(self) -> tuple[CssRule, ...]:
        return (self.rule, *self.parents)

    def get_style(self) -> dict[str, Any]:
        return self.rule.get_style()

    def resolve(
        self, reader: Callable[[Mapping[str, Any]], T | None]
    ) -> tuple[T | None, CssRule | None]:
        """Apply *reader* to the rule, then to each parent, until one yields a value.

        Returns the value with the rule that supplied it, or ``(None, None)``.
        Parents are never merged: the first rule defining the value wins.
        """
        for rule in self.rules():
            result = reader(rule.get_style())
            if result is not None:
                return result, rule
        return None, None

    def update_style(self, patch: Mapping[str, Any]) -> dict[str, Any]:
        """Merge *patch* into the target rule, tagged as a programmatic update."""
        tagged = {PARTIAL_KEY: False, **patch}
        self.rule.set_style(tagged)
        return tagged
