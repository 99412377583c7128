"""Stylesheet parse failures."""

from __future__ import annotations

from stylesync.errors import StyleSyncError


def _position(value: object) -> int | None:
    # Lark reports unknown positions as -1 or "?".
    return value if isinstance(value, int) and value > 0 else None


class ParseError(StyleSyncError):
    """Stylesheet source could not be parsed.

    ``line`` and ``column`` are 1-based and None when the parser could not
    attribute the failure to a position (unexpected end of input).
    """

    def __init__(self, message: str, line: int | str | None = None, column: int | str | None = None) -> None:
        self.line = _position(line)
        self.column = _position(column)
        super().__init__(message)

    @property
    def location(self) -> str:
        if self.line is None:
            return "end of input"
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"
