from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Layer:
    """One comma-separated group of a stack property.

    ``index`` is the layer position at the last mutation of the owning stack;
    layers are addressed by position, never by identity.
    """

    values: dict[str, str] = field(default_factory=dict)
    index: int = 0

    def get_index(self) -> int:
        return self.index

    def get_values(self) -> dict[str, str]:
        return dict(self.values)

    def get_value(self, name: str, default: str = "") -> str:
        return self.values.get(name, default)

    def set_value(self, name: str, value: str) -> None:
        self.values[name] = value
