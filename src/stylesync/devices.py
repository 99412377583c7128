"""Devices and their breakpoint ordering."""

from __future__ import annotations

from dataclasses import dataclass

from stylesync.css.model import parse_length
from stylesync.errors import StyleSyncError


class DeviceNotFoundError(StyleSyncError, KeyError):
    """Raised when selecting a device id that is not registered."""

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__(device_id)

    def __str__(self) -> str:
        return f"Unknown device: {self.device_id!r}"


@dataclass(frozen=True)
class Device:
    """A preview device. ``width_media`` is the breakpoint used in media queries."""

    id: str
    name: str = ""
    width: str = ""
    width_media: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Device id must be a non-empty string")

    @property
    def breakpoint(self) -> str:
        return self.width_media or self.width

    def get_media_text(self, media_condition: str = "max-width") -> str:
        """Media text for rules targeting this device, empty for the broadest one."""
        if not self.breakpoint:
            return ""
        return f"({media_condition}: {self.breakpoint})"


DEFAULT_DEVICES: tuple[Device, ...] = (
    Device(id="desktop", name="Desktop"),
    Device(id="tablet", name="Tablet", width="770px", width_media="992px"),
    Device(id="mobileLandscape", name="Mobile landscape", width="568px", width_media="768px"),
    Device(id="mobilePortrait", name="Mobile portrait", width="320px", width_media="480px"),
)


class DeviceManager:
    """Registry of devices with a single selected device."""

    def __init__(
        self, devices: list[Device] | tuple[Device, ...] | None = None, selected: str | None = None
    ) -> None:
        self._devices: list[Device] = list(DEFAULT_DEVICES if devices is None else devices)
        self._selected: str | None = None
        if selected is not None:
            self.select(selected)
        elif self._devices:
            self._selected = self._devices[0].id

    def add(self, device: Device, at: int | None = None) -> Device:
        if self.get(device.id) is not None:
            raise ValueError(f"Duplicate device id: {device.id!r}")
        if at is None:
            self._devices.append(device)
        else:
            self._devices.insert(at, device)
        return device

    def get(self, device_id: str) -> Device | None:
        for device in self._devices:
            if device.id == device_id:
                return device
        return None

    def get_all(self) -> list[Device]:
        return list(self._devices)

    def remove(self, device_id: str) -> Device:
        device = self.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        self._devices.remove(device)
        if self._selected == device_id:
            self._selected = None
        return device

    def select(self, device_id: str) -> Device:
        device = self.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        self._selected = device_id
        return device

    def get_selected(self) -> Device | None:
        if self._selected is None:
            return None
        return self.get(self._selected)

    def sorted_by_breakpoint(self, media_condition: str = "max-width") -> list[Device]:
        """Devices from the broadest breakpoint to the narrowest.

        The device without a breakpoint is the broadest under either
        condition; ``max-width`` then orders by decreasing width and
        ``min-width`` by increasing width.
        """
        mobile_first = media_condition == "min-width"

        def _key(device: Device) -> tuple[int, float]:
            width = parse_length(device.breakpoint) if device.breakpoint else None
            if width is None:
                return (0, 0.0)
            return (1, width if mobile_first else -width)

        return sorted(self._devices, key=_key)
