"""RuleSet: the rule container that resolves selection targets and their breakpoint parents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from stylesync.css.model import CssRule, Selector, parse_media
from stylesync.css.parser import parse_stylesheet

if TYPE_CHECKING:
    from stylesync.target import Selectable

logger = logging.getLogger(__name__)


class RuleSet:
    """Ordered collection of style rules.

    Rules are matched on their selector set, state and media; two rules with
    the same selectors and state but different media are the same rule at
    different breakpoints.
    """

    def __init__(self, rules: list[CssRule] | None = None) -> None:
        self._rules: list[CssRule] = list(rules) if rules else []

    # --- collection -----------------------------------------------------------

    def add_rules(self, source: str) -> list[CssRule]:
        """Parse stylesheet *source* and append its rules; returns the new rules."""
        rules = parse_stylesheet(source)
        self._rules.extend(rules)
        return rules

    def add(
        self,
        selectors: tuple[Selector, ...],
        state: str = "",
        media: str = "",
        style: Mapping[str, Any] | None = None,
    ) -> CssRule:
        rule = CssRule(selectors=tuple(selectors), style=dict(style or {}), state=state, media=media)
        self._rules.append(rule)
        logger.debug("Created rule %r", rule)
        return rule

    def get(
        self, selectors: tuple[Selector, ...], state: str = "", media: str = ""
    ) -> CssRule | None:
        """Return the rule with exactly these selectors, state and media."""
        key = frozenset(selectors)
        media_key = parse_media(media) or media.strip()
        for rule in self._rules:
            if rule.selector_text:
                continue
            if rule.selector_key() == key and rule.state == state and rule.media_key() == media_key:
                return rule
        return None

    def get_rules(self, selector: str | None = None) -> list[CssRule]:
        if selector is None:
            return list(self._rules)
        return [r for r in self._rules if r.selector_string() == selector]

    def remove(self, rule: CssRule) -> None:
        self._rules = [r for r in self._rules if r is not rule]

    def __iter__(self) -> Iterator[CssRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    # --- resolution -----------------------------------------------------------

    def resolve(
        self, selectable: Selectable, media: str = "", create: bool = True
    ) -> CssRule | None:
        """Return the rule styling *selectable* at *media*.

        Classes win over the id; with neither there is nothing to style.
        When *create* is set a missing rule is added empty.
        """
        selectors = selectable.selectors()
        if not selectors:
            return None
        rule = self.get(selectors, state=selectable.state, media=media)
        if rule is None and create:
            rule = self.add(selectors, state=selectable.state, media=media)
        return rule

    def get_parent_rules(
        self, rule: CssRule, media_condition: str = "max-width"
    ) -> list[CssRule]:
        """Return the rules at broader breakpoints than *rule*, nearest first.

        With ``max-width`` broader means a larger width, with ``min-width`` a
        smaller one. The rule without media is always the last parent. A rule
        without media has no parents.
        """
        if not rule.media or rule.selector_text:
            return []
        width = rule.media_width
        if width is None or rule.media_condition != media_condition:
            return []

        key = rule.selector_key()
        widths: list[tuple[float, CssRule]] = []
        unconditioned: list[CssRule] = []
        for candidate in self._rules:
            if candidate is rule or candidate.selector_text:
                continue
            if candidate.selector_key() != key or candidate.state != rule.state:
                continue
            if not candidate.media:
                unconditioned.append(candidate)
                continue
            if candidate.media_condition != media_condition:
                continue
            candidate_width = candidate.media_width
            if candidate_width is None:
                continue
            if media_condition == "min-width":
                broader = candidate_width < width
            else:
                broader = candidate_width > width
            if broader:
                widths.append((candidate_width, candidate))

        widths.sort(key=lambda item: item[0], reverse=media_condition == "min-width")
        return [candidate for _, candidate in widths] + unconditioned

    # --- output ---------------------------------------------------------------

    def to_css(self, media_condition: str = "max-width") -> str:
        """Serialize all rules: plain rules first, then media blocks broadest first."""
        blocks: list[str] = []
        groups: dict[str, list[CssRule]] = {}
        for rule in self._rules:
            if rule.media:
                groups.setdefault(rule.media, []).append(rule)
                continue
            css = rule.to_css()
            if css:
                blocks.append(css)

        def _order(media: str) -> float:
            parsed = parse_media(media)
            if parsed is None:
                return 0.0
            return parsed[1] if media_condition == "min-width" else -parsed[1]

        for media in sorted(groups, key=_order):
            inner = [css for css in (r.to_css(indent="  ") for r in groups[media]) if css]
            if inner:
                blocks.append(f"@media {media} {{\n" + "\n".join(inner) + "\n}")
        return "\n".join(blocks) + ("\n" if blocks else "")
