from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StyleManagerConfig:
    media_condition: str = "max-width"  # or "min-width" for mobile-first breakpoints
    default_device: str = "desktop"
    create_missing_rules: bool = True
    sectors: tuple[dict[str, Any], ...] = ()
