"""StyleManager: owns sectors of properties and keeps them in sync with the selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from stylesync.config import StyleManagerConfig
from stylesync.css.model import CssRule
from stylesync.css.ruleset import RuleSet
from stylesync.devices import DeviceManager
from stylesync.errors import ConfigError, SectorNotFoundError
from stylesync.events import DeviceSelected, EventBus, PropertyUpdated, TargetChanged, TargetCleared
from stylesync.properties import Property, create_property
from stylesync.properties.factory import PropertyConfig
from stylesync.target import Selectable, StyleTarget

logger = logging.getLogger(__name__)


@dataclass
class Sector:
    """A named group of top-level properties."""

    id: str
    name: str = ""
    properties: list[Property] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id:
            raise ConfigError("Sector id must be a non-empty string")
        if not self.name:
            self.name = self.id

    def get_property(self, name: str) -> Property | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def get_properties(self) -> list[Property]:
        return list(self.properties)


class StyleManager:
    """Coordinator between the selection, the active device and the properties.

    The manager is Idle while nothing resolvable is selected and Bound to a
    :class:`StyleTarget` otherwise. :meth:`up_sel` moves between the two and
    must run after every selection change, device change or external edit of
    the target rule.
    """

    def __init__(
        self,
        rules: RuleSet | None = None,
        devices: DeviceManager | None = None,
        config: StyleManagerConfig | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config or StyleManagerConfig()
        self.rules = rules if rules is not None else RuleSet()
        self.devices = devices if devices is not None else DeviceManager(
            selected=self.config.default_device
        )
        self.bus = bus or EventBus()
        self._sectors: list[Sector] = []
        self._selected: Selectable | None = None
        self._target: StyleTarget | None = None
        for sector in self.config.sectors:
            sector = dict(sector)
            self.add_sector(sector.pop("id"), **sector)

    # --- sectors --------------------------------------------------------------

    def add_sector(
        self,
        sector_id: str,
        name: str = "",
        properties: Iterable[PropertyConfig] = (),
        at: int | None = None,
    ) -> Sector:
        if self.get_sector(sector_id) is not None:
            raise ConfigError(f"Duplicate sector id: {sector_id!r}")
        sector = Sector(id=sector_id, name=name)
        if at is None:
            self._sectors.append(sector)
        else:
            self._sectors.insert(at, sector)
        for config in properties:
            self.add_property(sector_id, config)
        return sector

    def get_sector(self, sector_id: str) -> Sector | None:
        for sector in self._sectors:
            if sector.id == sector_id:
                return sector
        return None

    def get_sectors(self) -> list[Sector]:
        return list(self._sectors)

    def remove_sector(self, sector_id: str) -> Sector:
        sector = self._require_sector(sector_id)
        self._sectors.remove(sector)
        return sector

    def _require_sector(self, sector_id: str) -> Sector:
        sector = self.get_sector(sector_id)
        if sector is None:
            raise SectorNotFoundError(sector_id)
        return sector

    # --- properties -----------------------------------------------------------

    def add_property(
        self, sector_id: str, config: PropertyConfig, at: int | None = None
    ) -> Property:
        """Create a property from *config* in a sector, synced with the current target."""
        sector = self._require_sector(sector_id)
        prop = create_property(config)
        if sector.get_property(prop.name) is not None:
            raise ConfigError(f"Duplicate property {prop.name!r} in sector {sector_id!r}", prop.name)
        if at is None:
            sector.properties.append(prop)
        else:
            sector.properties.insert(at, prop)
        prop.on_change(
            lambda changed, patch: self.bus.emit(
                PropertyUpdated(sector_id=sector_id, property_name=changed.name, patch=dict(patch))
            )
        )
        prop.sync(self._target)
        return prop

    def get_property(self, sector_id: str, name: str) -> Property | None:
        sector = self.get_sector(sector_id)
        if sector is None:
            return None
        return sector.get_property(name)

    def get_properties(self, sector_id: str) -> list[Property]:
        sector = self.get_sector(sector_id)
        return sector.get_properties() if sector is not None else []

    def remove_property(self, sector_id: str, name: str) -> Property | None:
        sector = self._require_sector(sector_id)
        prop = sector.get_property(name)
        if prop is not None:
            sector.properties.remove(prop)
        return prop

    def _all_properties(self) -> list[Property]:
        return [prop for sector in self._sectors for prop in sector.properties]

    # --- selection ------------------------------------------------------------

    def select(self, selectable: Selectable | None) -> StyleTarget | None:
        """Change the selection and re-sync; None deselects."""
        self._selected = selectable
        return self.up_sel()

    def get_selected(self) -> Selectable | None:
        return self._selected

    def select_device(self, device_id: str) -> StyleTarget | None:
        """Activate a device (breakpoint) and re-sync."""
        self.devices.select(device_id)
        self.bus.emit(DeviceSelected(device_id=device_id))
        return self.up_sel()

    def get_target(self) -> StyleTarget | None:
        return self._target

    def get_last_selected(self) -> CssRule | None:
        """The rule currently edited, None while Idle."""
        return self._target.rule if self._target is not None else None

    def get_selected_parents(self) -> list[CssRule]:
        return list(self._target.parents) if self._target is not None else []

    # --- synchronization ------------------------------------------------------

    def up_sel(self) -> StyleTarget | None:
        """Resolve the style target and refresh every property from it."""
        previous = self._target
        target = self._resolve_target()
        self._target = target

        for prop in self._all_properties():
            prop.sync(target)

        if target is None:
            if previous is not None:
                logger.info("Style target cleared (was %r)", previous.rule)
                self.bus.emit(TargetCleared(previous=previous.rule))
            return None

        if previous is None or previous.rule is not target.rule or previous.parents != target.parents:
            logger.info(
                "Style target is %r with %d parent rule(s)", target.rule, len(target.parents)
            )
            self.bus.emit(TargetChanged(rule=target.rule, parents=target.parents))
        return target

    def _resolve_target(self) -> StyleTarget | None:
        if self._selected is None:
            return None
        device = self.devices.get_selected()
        media = device.get_media_text(self.config.media_condition) if device is not None else ""
        rule = self.rules.resolve(
            self._selected, media=media, create=self.config.create_missing_rules
        )
        if rule is None:
            logger.debug("No rule resolved for %r at %r", self._selected, media)
            return None
        parents = self.rules.get_parent_rules(rule, self.config.media_condition)
        return StyleTarget(rule=rule, parents=tuple(parents))

    def get_values(self) -> dict[str, dict[str, Any]]:
        """Snapshot of every property, keyed by sector id then property name."""
        return {
            sector.id: {prop.name: prop.to_dict() for prop in sector.properties}
            for sector in self._sectors
        }

    def get_style_target_values(self) -> dict[str, dict[str, str]]:
        """Resolved value of every property, defaults included, keyed by sector id."""
        return {
            sector.id: {prop.name: prop.get_full_value() for prop in sector.properties}
            for sector in self._sectors
        }
