"""
Theme module for QuizMark
Maps token categories to colors and font styles for highlighted code
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6})$")


class TokenCategory(Enum):
    """Semantic class of a highlighted code span"""
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    FUNCTION = "function"
    TYPE = "type"
    OPERATOR = "operator"
    BRACKET = "bracket"


# --- VS Code Dark palette ---
DEFAULT_COLORS = {
    "background": "#1e1e1e",   # code panel
    "foreground": "#d4d4d4",   # plain code text
    "text": "#333333",         # regular answer text
    "gutter": "#858585",       # line numbers
    "blue": "#569cd6",
    "yellow": "#dcdcaa",
    "orange": "#ce9178",
    "green": "#6a9955",
    "light_green": "#b5cea8",
    "teal": "#4ec9b0",
    "gray": "#d4d4d4",
    "gold": "#ffd700",
}

# category -> (color key, bold, italic)
_CATEGORY_STYLES = {
    TokenCategory.KEYWORD: ("blue", True, False),
    TokenCategory.FUNCTION: ("yellow", False, False),
    TokenCategory.STRING: ("orange", False, False),
    TokenCategory.COMMENT: ("green", False, True),
    TokenCategory.NUMBER: ("light_green", False, False),
    TokenCategory.TYPE: ("teal", False, False),
    TokenCategory.OPERATOR: ("gray", False, False),
    TokenCategory.BRACKET: ("gold", False, False),
}


@dataclass(frozen=True)
class TokenStyle:
    color: str
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class Theme:
    """
    Read-only palette used by the renderer.
    Build it once with from_colors() and share it between calls.
    """
    styles: Mapping[TokenCategory, TokenStyle]
    background: str
    foreground: str
    text: str
    gutter: str

    @classmethod
    def from_colors(cls, colors: dict | None = None) -> "Theme":
        """Create a theme from a dict of named colors, falling back per key"""
        colors = colors if isinstance(colors, dict) else {}
        if not colors:
            logger.debug("No colors supplied, using default palette")

        def _color_safe(key: str) -> str:
            fallback = DEFAULT_COLORS[key]
            value = colors.get(key, fallback)
            if not isinstance(value, str) or not _COLOR_PATTERN.match(value):
                logger.warning(f"Invalid color for '{key}' ({value!r}), using fallback '{fallback}'")
                return fallback
            return value

        styles = {
            category: TokenStyle(_color_safe(key), bold=bold, italic=italic)
            for category, (key, bold, italic) in _CATEGORY_STYLES.items()
        }
        return cls(
            styles=MappingProxyType(styles),
            background=_color_safe("background"),
            foreground=_color_safe("foreground"),
            text=_color_safe("text"),
            gutter=_color_safe("gutter"),
        )

    def style_for(self, category: TokenCategory) -> TokenStyle:
        return self.styles[category]


DEFAULT_THEME = Theme.from_colors(DEFAULT_COLORS)
