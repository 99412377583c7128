"""Lark Transformer that converts stylesheet source into CssRule objects.

Syntax example:
    .cls { color: red; padding: 1px 2px; }
    @media (max-width: 992px) {
      .cls { padding: 0; }
    }
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from stylesync.css.errors import ParseError
from stylesync.css.model import CssRule, parse_selector

__all__ = ["parse_stylesheet"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


class _RuleDecl:
    def __init__(self, selector_text: str, style: dict[str, str]):
        self.selector_text = selector_text
        self.style = style


class _MediaBlock:
    def __init__(self, media: str, rules: list[_RuleDecl]):
        self.media = media
        self.rules = rules


class StylesheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into intermediate rule declarations."""

    def declaration(self, items: list[Token | None]) -> tuple[str, str]:
        name = str(items[0])
        value = str(items[1]).strip() if len(items) > 1 and items[1] is not None else ""
        return (name, value)

    def rule(self, items: list[object]) -> _RuleDecl:
        selector_text = " ".join(str(items[0]).split())
        style: dict[str, str] = {}
        for item in items[1:]:
            if isinstance(item, tuple):
                style[item[0]] = item[1]
        return _RuleDecl(selector_text, style)

    def media(self, items: list[object]) -> _MediaBlock:
        media = " ".join(str(items[0]).split())
        rules = [item for item in items[1:] if isinstance(item, _RuleDecl)]
        return _MediaBlock(media, rules)

    def start(self, items: list[object]) -> list[CssRule]:
        rules: list[CssRule] = []
        for item in items:
            if isinstance(item, _MediaBlock):
                for decl in item.rules:
                    rules.extend(_build_rules(decl, media=item.media))
            elif isinstance(item, _RuleDecl):
                rules.extend(_build_rules(item, media=""))
        return rules


def _build_rules(decl: _RuleDecl, media: str) -> list[CssRule]:
    """Build one CssRule per comma-separated selector of a declaration block."""
    rules: list[CssRule] = []
    for raw in decl.selector_text.split(","):
        raw = raw.strip()
        if not raw:
            continue
        parsed = parse_selector(raw)
        if parsed is None:
            rules.append(CssRule(style=dict(decl.style), media=media, selector_text=raw))
            continue
        selectors, state = parsed
        rules.append(
            CssRule(selectors=selectors, style=dict(decl.style), state=state, media=media)
        )
    return rules


@lru_cache(maxsize=1)
def _get_parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        start="start",
    )


def parse_stylesheet(source: str) -> list[CssRule]:
    """Parse stylesheet source into rules, in source order."""
    try:
        tree = _get_parser().parse(source)
    except UnexpectedInput as e:
        raise ParseError(
            str(e).strip(), line=getattr(e, "line", None), column=getattr(e, "column", None)
        ) from e
    return StylesheetTransformer().transform(tree)
