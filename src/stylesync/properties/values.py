"""Splitting and joining of CSS value strings."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

__all__ = ["declared", "split_value", "expand_box", "compress_box", "join_values"]


def declared(style: Mapping[str, Any], name: str) -> str:
    """Return the stripped declaration *name* from *style*, ``""`` when unset or empty."""
    value = style.get(name)
    if not isinstance(value, str):
        return ""
    return value.strip()


def split_value(value: str, separator: str = " ") -> list[str]:
    """Split *value* on *separator* outside parentheses and quotes.

    A whitespace separator splits on any run of whitespace and drops empty
    parts. Any other separator is matched after stripping it, keeps empty
    parts (their position is meaningful) and strips each part.

    >>> split_value("rgba(0, 0, 0, .5) 1px")
    ['rgba(0, 0, 0, .5)', '1px']
    >>> split_value("a 1px, b 2px", ",")
    ['a 1px', 'b 2px']
    """
    if not value or not value.strip():
        return []
    on_whitespace = not separator.strip()
    sep = separator if on_whitespace else separator.strip()

    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote = ""
    i = 0
    while i < len(value):
        ch = value[i]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        elif depth == 0:
            if on_whitespace and ch.isspace():
                parts.append("".join(current))
                current = []
                i += 1
                continue
            if not on_whitespace and value.startswith(sep, i):
                parts.append("".join(current))
                current = []
                i += len(sep)
                continue
        current.append(ch)
        i += 1
    parts.append("".join(current))

    parts = [part.strip() for part in parts]
    if on_whitespace:
        parts = [part for part in parts if part]
    return parts


def expand_box(tokens: list[str]) -> list[str]:
    """Expand 1-4 shorthand tokens to top/right/bottom/left."""
    if not tokens:
        return ["", "", "", ""]
    if len(tokens) == 1:
        return [tokens[0]] * 4
    if len(tokens) == 2:
        return [tokens[0], tokens[1], tokens[0], tokens[1]]
    if len(tokens) == 3:
        return [tokens[0], tokens[1], tokens[2], tokens[1]]
    return list(tokens[:4])


def compress_box(values: list[str]) -> list[str]:
    """Shortest top/right/bottom/left token list meaning the same as *values*."""
    top, right, bottom, left = values
    if right != left:
        return [top, right, bottom, left]
    if top != bottom:
        return [top, right, bottom]
    if top != right:
        return [top, right]
    return [top]


def join_values(values: Iterable[str], join: str = " ") -> str:
    """Join the non-empty *values* with *join*."""
    return join.join(value for value in values if value)
