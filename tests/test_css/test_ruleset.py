"""Tests for RuleSet resolution and breakpoint parents."""

import pytest

from stylesync.css import RuleSet
from stylesync.target import Selectable

CSS = """
.cls { color: red; }
@media (max-width: 992px) { .cls { padding: 2px; } }
@media (max-width: 768px) { .cls { padding: 3px; } }
@media (max-width: 480px) { .cls { padding: 4px; } }
.other { color: blue; }
"""

CLS = Selectable(classes=("cls",))


@pytest.fixture()
def ruleset() -> RuleSet:
    rs = RuleSet()
    rs.add_rules(CSS)
    return rs


def _rule(rs: RuleSet, index: int):
    return rs.get_rules()[index]


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolve:
    def test_resolves_plain_rule(self, ruleset: RuleSet) -> None:
        assert ruleset.resolve(CLS) is _rule(ruleset, 0)

    def test_resolves_rule_at_media(self, ruleset: RuleSet) -> None:
        assert ruleset.resolve(CLS, media="(max-width: 768px)") is _rule(ruleset, 2)

    def test_media_spacing_is_normalized(self, ruleset: RuleSet) -> None:
        assert ruleset.resolve(CLS, media="(max-width:768px)") is _rule(ruleset, 2)

    def test_creates_missing_rule(self, ruleset: RuleSet) -> None:
        rule = ruleset.resolve(Selectable(classes=("fresh",)))
        assert rule is not None
        assert rule.get_style() == {}
        assert len(ruleset) == 6
        assert ruleset.resolve(Selectable(classes=("fresh",))) is rule

    def test_no_create_returns_none(self, ruleset: RuleSet) -> None:
        assert ruleset.resolve(Selectable(classes=("fresh",)), create=False) is None
        assert len(ruleset) == 5

    def test_id_used_without_classes(self, ruleset: RuleSet) -> None:
        rule = ruleset.resolve(Selectable(id="hero"))
        assert rule is not None
        assert rule.selector_string() == "#hero"

    def test_classes_win_over_id(self, ruleset: RuleSet) -> None:
        assert ruleset.resolve(Selectable(id="hero", classes=("cls",))) is _rule(ruleset, 0)

    def test_nothing_to_style(self, ruleset: RuleSet) -> None:
        assert ruleset.resolve(Selectable()) is None

    def test_state_selects_distinct_rule(self, ruleset: RuleSet) -> None:
        hover = ruleset.add_rules(".cls:hover { color: green; }")[0]
        assert ruleset.resolve(Selectable(classes=("cls",), state="hover")) is hover
        assert ruleset.resolve(CLS) is _rule(ruleset, 0)

    def test_class_order_does_not_matter(self) -> None:
        rs = RuleSet()
        rule = rs.add_rules(".b.a { color: red; }")[0]
        assert rs.resolve(Selectable(classes=("a", "b"))) is rule


# ---------------------------------------------------------------------------
# get_parent_rules
# ---------------------------------------------------------------------------


class TestParentRules:
    def test_max_width_nearest_first(self, ruleset: RuleSet) -> None:
        parents = ruleset.get_parent_rules(_rule(ruleset, 3))
        assert parents == [_rule(ruleset, 2), _rule(ruleset, 1), _rule(ruleset, 0)]

    def test_broadest_rule_has_no_parents(self, ruleset: RuleSet) -> None:
        assert ruleset.get_parent_rules(_rule(ruleset, 0)) == []

    def test_other_selectors_are_ignored(self, ruleset: RuleSet) -> None:
        assert ruleset.get_parent_rules(_rule(ruleset, 1)) == [_rule(ruleset, 0)]

    def test_min_width(self) -> None:
        rs = RuleSet()
        rules = rs.add_rules(
            """
            .cls { color: red; }
            @media (min-width: 768px) { .cls { padding: 1px; } }
            @media (min-width: 992px) { .cls { padding: 2px; } }
            @media (min-width: 1200px) { .cls { padding: 3px; } }
            """
        )
        assert rs.get_parent_rules(rules[3], "min-width") == [rules[2], rules[1], rules[0]]

    def test_condition_mismatch_has_no_parents(self, ruleset: RuleSet) -> None:
        assert ruleset.get_parent_rules(_rule(ruleset, 2), "min-width") == []


# ---------------------------------------------------------------------------
# to_css
# ---------------------------------------------------------------------------


class TestToCss:
    def test_plain_rules_then_media_broadest_first(self, ruleset: RuleSet) -> None:
        css = ruleset.to_css()
        assert css.startswith(".cls {\n  color: red;\n}\n.other {")
        assert css.index("(max-width: 992px)") < css.index("(max-width: 768px)")
        assert css.index("(max-width: 768px)") < css.index("(max-width: 480px)")
        assert "@media (max-width: 480px) {\n  .cls {\n    padding: 4px;\n  }\n}" in css

    def test_empty_rules_are_skipped(self) -> None:
        rs = RuleSet()
        rs.add_rules(".a { color: ; }")
        assert rs.to_css() == ""
