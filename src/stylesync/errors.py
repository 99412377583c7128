"""Exception types raised by the style property model."""

from __future__ import annotations


class StyleSyncError(Exception):
    """Base class for every error raised by stylesync itself."""


class ConfigError(StyleSyncError):
    """Raised when a property or sector configuration is invalid."""

    def __init__(self, message: str, property_name: str | None = None) -> None:
        self.property_name = property_name
        super().__init__(message)


class HookError(StyleSyncError, TypeError):
    """Raised when a custom ``from_style``/``to_style`` hook returns an unexpected shape."""

    def __init__(self, property_name: str, hook: str, result: object) -> None:
        self.property_name = property_name
        self.hook = hook
        self.result = result
        super().__init__(
            f"{hook} hook of property {property_name!r} returned "
            f"unexpected {type(result).__name__}"
        )


class SectorNotFoundError(StyleSyncError, KeyError):
    """Raised when a mutation targets a sector id that was never added."""

    def __init__(self, sector_id: str) -> None:
        self.sector_id = sector_id
        super().__init__(sector_id)

    def __str__(self) -> str:
        return f"Unknown sector: {self.sector_id!r}"
