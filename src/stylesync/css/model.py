"""Stylesheet model: Selector and CssRule."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

__all__ = [
    "PARTIAL_KEY",
    "Selector",
    "CssRule",
    "parse_length",
    "parse_media",
    "parse_selector",
]

# Style key marking a patch written programmatically by the property model.
# Rules store it like any other key; it is never a CSS declaration.
PARTIAL_KEY = "__p"

_SELECTOR_RE = re.compile(
    r"""
    ^(?P<parts>(?:[.\#][A-Za-z_-][\w-]*)+)   # one or more .class / #id parts
    (?::(?P<state>[\w-]+))?$                 # optional :state
    """,
    re.VERBOSE,
)

_SELECTOR_PART_RE = re.compile(r"([.#])([\w-]+)")

_MEDIA_WIDTH_RE = re.compile(
    r"\(\s*(?P<condition>min-width|max-width)\s*:\s*(?P<width>[^)\s]+)\s*\)"
)

_LENGTH_RE = re.compile(r"^(?P<number>\d+(?:\.\d+)?)(?P<unit>px|em|rem)?$")

# em/rem breakpoints are resolved against the browser default font size.
_FONT_SIZE_PX = 16.0


@dataclass(frozen=True)
class Selector:
    """A simple selector targeting elements by class or id.

    Specificity values:
        1 = class (.classname)
        2 = id (#elementid)
    """

    kind: str  # "class", "id"
    value: str  # "classname", "elementid"
    specificity: int  # 1, 2

    @classmethod
    def for_class(cls, name: str) -> Selector:
        return cls(kind="class", value=name, specificity=1)

    @classmethod
    def for_id(cls, name: str) -> Selector:
        return cls(kind="id", value=name, specificity=2)

    def __str__(self) -> str:
        prefix = "#" if self.kind == "id" else "."
        return f"{prefix}{self.value}"


def parse_selector(raw: str) -> tuple[tuple[Selector, ...], str] | None:
    """Parse a compound selector such as ``.btn.primary:hover``.

    Returns ``(selectors, state)`` or None when the selector is anything more
    complex than classes and ids with an optional state.
    """
    match = _SELECTOR_RE.match(raw.strip())
    if match is None:
        return None
    selectors = []
    for prefix, name in _SELECTOR_PART_RE.findall(match.group("parts")):
        if prefix == "#":
            selectors.append(Selector.for_id(name))
        else:
            selectors.append(Selector.for_class(name))
    return tuple(selectors), match.group("state") or ""


def parse_length(raw: str) -> float | None:
    """Convert a breakpoint length (``992px``, ``48em``) to pixels."""
    match = _LENGTH_RE.match(raw.strip())
    if match is None:
        return None
    number = float(match.group("number"))
    if match.group("unit") in ("em", "rem"):
        return number * _FONT_SIZE_PX
    return number


def parse_media(media: str) -> tuple[str, float] | None:
    """Extract ``(condition, width_px)`` from media text like ``(max-width: 992px)``."""
    match = _MEDIA_WIDTH_RE.search(media)
    if match is None:
        return None
    width = parse_length(match.group("width"))
    if width is None:
        return None
    return match.group("condition"), width


@dataclass(eq=False)
class CssRule:
    """A style rule: selectors plus a mutable mapping of declarations.

    ``media`` is empty for rules that apply at every breakpoint. Rules are
    compared by identity, two rules with equal content are still distinct.
    """

    selectors: tuple[Selector, ...] = ()
    style: dict[str, Any] = field(default_factory=dict)
    state: str = ""
    media: str = ""
    selector_text: str = ""  # only set for selectors outside the class/id subset

    def get_style(self) -> dict[str, Any]:
        """Return a copy of the declarations."""
        return dict(self.style)

    def set_style(self, patch: Mapping[str, Any], replace: bool = False) -> None:
        """Merge *patch* into the style, or replace the style entirely.

        Empty-string values clear a declaration but keep its key.
        """
        if replace:
            self.style = dict(patch)
        else:
            self.style.update(patch)

    def get_declaration(self, name: str) -> str:
        """Return the stripped value of *name*, or ``""`` when unset or empty."""
        value = self.style.get(name)
        if not isinstance(value, str):
            return ""
        return value.strip()

    def selector_string(self) -> str:
        if self.selector_text:
            return self.selector_text
        text = "".join(str(s) for s in self.selectors)
        if self.state:
            text += f":{self.state}"
        return text

    def selector_key(self) -> frozenset[Selector]:
        return frozenset(self.selectors)

    @property
    def media_condition(self) -> str:
        parsed = parse_media(self.media)
        return parsed[0] if parsed else ""

    @property
    def media_width(self) -> float | None:
        parsed = parse_media(self.media)
        return parsed[1] if parsed else None

    def media_key(self) -> tuple[str, float] | str:
        """Normalized media used for matching: parsed width, else the raw text."""
        return parse_media(self.media) or self.media.strip()

    def to_css(self, indent: str = "") -> str:
        declarations = [
            f"{indent}  {name}: {value.strip()};"
            for name, value in self.style.items()
            if name != PARTIAL_KEY and isinstance(value, str) and value.strip()
        ]
        if not declarations:
            return ""
        lines = [f"{indent}{self.selector_string()} {{", *declarations, f"{indent}}}"]
        return "\n".join(lines)

    def __repr__(self) -> str:
        media = f" @media {self.media}" if self.media else ""
        return f"CssRule({self.selector_string()!r}{media}, declarations={len(self.style)})"
