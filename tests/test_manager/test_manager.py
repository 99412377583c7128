"""Tests for StyleManager: selection, breakpoint inheritance and sectors."""

from __future__ import annotations

import pytest

from stylesync.config import StyleManagerConfig
from stylesync.css import PARTIAL_KEY, CssRule, RuleSet
from stylesync.devices import Device, DeviceManager
from stylesync.errors import ConfigError, SectorNotFoundError
from stylesync.manager import StyleManager
from stylesync.properties import CompositeProperty, StackProperty
from stylesync.target import Selectable

SECTOR = "sector-test"
TOP, RIGHT, BOTTOM, LEFT = "padding-top", "padding-right", "padding-bottom", "padding-left"
SIDES = (TOP, RIGHT, BOTTOM, LEFT)
CLS = Selectable(classes=("cls",))


def _sides(prop: CompositeProperty) -> list[str]:
    return [prop.get_property(side).get_full_value() for side in SIDES]


@pytest.fixture()
def manager() -> StyleManager:
    return StyleManager(rules=RuleSet())


@pytest.fixture()
def rule1(manager: StyleManager) -> CssRule:
    return manager.rules.add_rules(".cls { color: red; }")[0]


@pytest.fixture()
def padding(manager: StyleManager, rule1: CssRule) -> CompositeProperty:
    manager.add_sector(SECTOR, properties=[{"extend": "padding", "detached": True}])
    manager.select(CLS)
    return manager.get_property(SECTOR, "padding")


# ---------------------------------------------------------------------------
# Composite properties through the manager
# ---------------------------------------------------------------------------


class TestComposite:
    def test_target_rule(self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule) -> None:
        assert manager.get_last_selected() is rule1
        assert manager.get_selected_parents() == []
        assert not padding.has_value()

    def test_reflects_rule_update(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        padding.set_detached(False)
        rule1.set_style({"padding": "1px 2px 3px 4px"})
        manager.up_sel()
        assert _sides(padding) == ["1px", "2px", "3px", "4px"]

    def test_sub_property_edit_updates_rule(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        padding.set_detached(False)
        rule1.set_style({"padding": "1px 2px 3px 4px"})
        manager.up_sel()
        padding.get_property(BOTTOM).up_value("50%")
        manager.up_sel()
        assert rule1.get_style() == {
            PARTIAL_KEY: False,
            "color": "red",
            "padding": "1px 2px 50% 4px",
            TOP: "",
            RIGHT: "",
            BOTTOM: "",
            LEFT: "",
        }
        assert _sides(padding) == ["1px", "2px", "50%", "4px"]

    def test_detached_edit_on_empty_rule(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        padding.get_property(TOP).up_value("55%")
        manager.up_sel()
        assert rule1.get_style()[TOP] == "55%"
        assert padding.has_value(no_parent=True)
        assert padding.get_property(TOP).has_value()
        assert not padding.get_property(RIGHT).has_value()

    def test_clear(self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule) -> None:
        rule1.set_style({"padding": "1px 2px"})
        manager.up_sel()
        padding.clear()
        manager.up_sel()
        assert not padding.has_value()
        assert rule1.get_declaration("padding") == ""


# ---------------------------------------------------------------------------
# Breakpoint inheritance
# ---------------------------------------------------------------------------


class TestInheritance:
    def test_parent_value_at_tablet(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        rule1.set_style({"padding": "11px 22px", LEFT: "44px"})
        rule2 = manager.rules.add_rules("@media (max-width: 992px) { .cls { color: red; } }")[0]
        manager.select_device("tablet")
        assert manager.get_last_selected() is rule2
        assert manager.get_selected_parents() == [rule1]
        assert padding.has_value()
        assert not padding.has_value(no_parent=True)
        assert _sides(padding) == ["11px", "22px", "11px", "44px"]
        for side in SIDES:
            assert padding.get_property(side).has_value()
            assert not padding.get_property(side).has_value(no_parent=True)

    def test_narrower_rule_ignored_on_desktop(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        manager.rules.add_rules(
            "@media (max-width: 992px) { .cls { padding: 11px 22px; padding-left: 44px; } }"
        )
        manager.select_device("tablet")
        assert padding.has_value(no_parent=True)
        assert _sides(padding) == ["11px", "22px", "11px", "44px"]

        manager.select_device("desktop")
        assert manager.get_last_selected() is rule1
        assert manager.get_selected_parents() == []
        assert not padding.has_value()
        for side in SIDES:
            assert not padding.get_property(side).has_value()
        assert _sides(padding) == ["0", "0", "0", "0"]

    def test_edit_at_tablet_writes_tablet_rule(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        padding.set_detached(False)
        rule1.set_style({"padding": "11px 22px"})
        manager.select_device("tablet")
        padding.get_property(LEFT).up_value("1px")
        tablet_rule = manager.get_last_selected()
        assert tablet_rule is not rule1
        assert tablet_rule.media == "(max-width: 992px)"
        assert tablet_rule.get_declaration("padding") == "11px 22px 11px 1px"
        assert rule1.get_declaration("padding") == "11px 22px"
        assert padding.has_value(no_parent=True)

    def test_missing_rule_is_created(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        manager.select_device("mobilePortrait")
        created = manager.get_last_selected()
        assert created is not None
        assert created.media == "(max-width: 480px)"
        assert manager.get_selected_parents() == [rule1]
        assert len(manager.rules) == 2

    def test_missing_rule_not_created(self, rule1: CssRule) -> None:
        rules = RuleSet([rule1])
        manager = StyleManager(rules=rules, config=StyleManagerConfig(create_missing_rules=False))
        manager.add_sector(SECTOR, properties=["padding"])
        manager.select(CLS)
        assert manager.get_last_selected() is rule1
        manager.select_device("tablet")
        assert manager.get_target() is None
        assert not manager.get_property(SECTOR, "padding").has_value()
        assert len(rules) == 1

    def test_nearest_parent_wins(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        rule1.set_style({"padding": "1px"})
        manager.rules.add_rules("@media (max-width: 992px) { .cls { padding: 2px; } }")
        manager.select_device("mobilePortrait")
        assert _sides(padding) == ["2px"] * 4

    def test_min_width(self) -> None:
        rules = RuleSet()
        plain, tablet = rules.add_rules(
            ".cls { padding: 1px; } @media (min-width: 768px) { .cls { color: red; } }"
        )
        devices = DeviceManager(
            [
                Device("mobile"),
                Device("tablet", width_media="768px"),
                Device("desktop", width_media="1200px"),
            ]
        )
        manager = StyleManager(
            rules=rules, devices=devices, config=StyleManagerConfig(media_condition="min-width")
        )
        manager.add_sector(SECTOR, properties=["padding"])
        manager.select(CLS)
        manager.select_device("desktop")
        assert manager.get_last_selected().media == "(min-width: 1200px)"
        assert manager.get_selected_parents() == [tablet, plain]
        prop = manager.get_property(SECTOR, "padding")
        assert _sides(prop) == ["1px"] * 4
        assert not prop.has_value(no_parent=True)


# ---------------------------------------------------------------------------
# Stacks through the manager
# ---------------------------------------------------------------------------


class TestStack:
    def test_inherited_layers_written_to_tablet_only(self, manager: StyleManager, rule1: CssRule) -> None:
        rule1.set_style({"box-shadow": "1px 1px 2px 0 black, 2px 2px 4px 0 red"})
        manager.add_sector(SECTOR, properties=["box-shadow"])
        manager.select(CLS)
        manager.select_device("tablet")
        shadow = manager.get_property(SECTOR, "box-shadow")
        assert isinstance(shadow, StackProperty)
        assert len(shadow.get_layers()) == 2
        assert not shadow.has_value(no_parent=True)

        shadow.select_layer_at(1)
        shadow.get_property("box-shadow-color").up_value("blue")
        tablet_rule = manager.get_last_selected()
        assert tablet_rule.get_declaration("box-shadow") == (
            "1px 1px 2px 0 black, 2px 2px 4px 0 blue"
        )
        assert rule1.get_declaration("box-shadow") == "1px 1px 2px 0 black, 2px 2px 4px 0 red"
        assert shadow.has_value(no_parent=True)


# ---------------------------------------------------------------------------
# Deselection
# ---------------------------------------------------------------------------


class TestDeselect:
    def test_idle_after_deselect(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        rule1.set_style({"padding": "1px"})
        manager.up_sel()
        assert padding.has_value()
        manager.select(None)
        assert manager.get_target() is None
        assert manager.get_last_selected() is None
        assert not padding.has_value()

    def test_nothing_selectable(self, manager: StyleManager, padding: CompositeProperty) -> None:
        manager.select(Selectable())
        assert manager.get_target() is None


# ---------------------------------------------------------------------------
# Sectors and properties
# ---------------------------------------------------------------------------


class TestSectors:
    def test_sector_lookup(self, manager: StyleManager) -> None:
        sector = manager.add_sector("dims", name="Dimensions", properties=["padding", "margin"])
        assert manager.get_sector("dims") is sector
        assert sector.name == "Dimensions"
        assert [p.name for p in manager.get_properties("dims")] == ["padding", "margin"]
        assert manager.get_sector("missing") is None
        assert manager.get_properties("missing") == []

    def test_sector_name_defaults_to_id(self, manager: StyleManager) -> None:
        assert manager.add_sector("dims").name == "dims"

    def test_sector_position(self, manager: StyleManager) -> None:
        manager.add_sector("a")
        manager.add_sector("b", at=0)
        assert [s.id for s in manager.get_sectors()] == ["b", "a"]

    def test_duplicate_sector(self, manager: StyleManager) -> None:
        manager.add_sector("dims")
        with pytest.raises(ConfigError):
            manager.add_sector("dims")

    def test_remove_sector(self, manager: StyleManager) -> None:
        manager.add_sector("dims")
        manager.remove_sector("dims")
        assert manager.get_sectors() == []
        with pytest.raises(SectorNotFoundError):
            manager.remove_sector("dims")

    def test_add_property_to_unknown_sector(self, manager: StyleManager) -> None:
        with pytest.raises(SectorNotFoundError) as exc_info:
            manager.add_property("missing", "padding")
        assert isinstance(exc_info.value, KeyError)
        assert str(exc_info.value) == "Unknown sector: 'missing'"

    def test_added_property_is_synced(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        rule1.set_style({"margin": "0 auto"})
        margin = manager.add_property(SECTOR, "margin")
        assert margin.has_value(no_parent=True)
        assert margin.get_value() == "0 auto"

    def test_duplicate_property(self, manager: StyleManager, padding: CompositeProperty) -> None:
        with pytest.raises(ConfigError):
            manager.add_property(SECTOR, "padding")

    def test_remove_property(self, manager: StyleManager, padding: CompositeProperty) -> None:
        assert manager.remove_property(SECTOR, "padding") is padding
        assert manager.get_property(SECTOR, "padding") is None
        assert manager.remove_property(SECTOR, "padding") is None

    def test_sectors_from_config(self) -> None:
        config = StyleManagerConfig(sectors=({"id": "dims", "properties": ["padding"]},))
        manager = StyleManager(config=config)
        assert manager.get_property("dims", "padding") is not None

    def test_get_values(self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule) -> None:
        rule1.set_style({"padding": "1px 2px"})
        manager.up_sel()
        values = manager.get_values()[SECTOR]["padding"]
        assert values["value"] == "1px 2px"
        assert values["detached"] is True
        assert values["properties"][0] == {
            "name": TOP,
            "type": "base",
            "value": "1px",
            "has_value": True,
            "inherited": False,
        }

    def test_get_style_target_values(
        self, manager: StyleManager, padding: CompositeProperty, rule1: CssRule
    ) -> None:
        manager.add_property(SECTOR, {"property": "opacity", "default": "1"})
        manager.add_sector("text", properties=["color"])
        rule1.set_style({"padding": "1px 2px"})
        manager.up_sel()
        assert manager.get_style_target_values() == {
            SECTOR: {"padding": "1px 2px", "opacity": "1"},
            "text": {"color": "red"},
        }
