from stylesync.css.errors import ParseError
from stylesync.css.model import PARTIAL_KEY, CssRule, Selector, parse_media, parse_selector
from stylesync.css.parser import parse_stylesheet
from stylesync.css.ruleset import RuleSet

__all__ = [
    "PARTIAL_KEY",
    "CssRule",
    "ParseError",
    "RuleSet",
    "Selector",
    "parse_media",
    "parse_selector",
    "parse_stylesheet",
]
