"""Draft inline style tokens → Lexical format bits and CSS declarations.

Draft stores inline styles as free-form tokens (``BOLD``, ``bg-#ff0``,
``rgba(0,0,0,1)``, ``700``, ``14px``, ``Roboto``, ...). Five of them are
text decorations that Lexical keeps in a bitmask on the text node; every
other token becomes a CSS declaration in the node's ``style`` string.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from draft_lexical.config import DEFAULT_FONTS

# Lexical text format flags
FORMAT_BITMASK = {
    "bold": 1,
    "italic": 2,
    "strikethrough": 4,
    "underline": 8,
    "code": 16,
}

_FONT_WEIGHT = re.compile(r"[0-9]{3}")
_REPEATED_SEMICOLONS = re.compile(r";{2,}")


class StyleResolver:
    """Resolves raw style tokens against a set of known font names."""

    def __init__(self, fonts: Optional[Iterable[str]] = None):
        self.fonts = frozenset(
            name.lower() for name in (DEFAULT_FONTS if fonts is None else fonts)
        )

    def resolve(self, token: str) -> Optional[str]:
        """Map one style token to a decoration name or a CSS declaration.

        Decoration tokens come back as their lowercase name so that
        :func:`format_bitmask` can pick them up. Returns None for an empty
        token. Unknown tokens are passed through lowercased.
        """
        style = token.lower()
        if not style:
            return None
        if style in FORMAT_BITMASK:
            return style

        # first match wins
        if style.startswith("bg-"):
            return f"background-color: {style[3:]};"
        if style.startswith("rgba"):
            return f"color: {style};"
        if _FONT_WEIGHT.fullmatch(style):
            return f"font-weight: {style};"
        if style.endswith("px"):
            return f"font-size: {style};"
        if style in self.fonts:
            return f"font-family: {style};"
        return style


def format_bitmask(styles: Iterable[str]) -> int:
    """OR together the format bits of every decoration in *styles*."""
    bitmask = 0
    for style in styles:
        bitmask |= FORMAT_BITMASK.get(style.lower(), 0)
    return bitmask


def style_string(styles: Iterable[str]) -> str:
    """Join the non-decoration declarations of *styles* into one CSS string."""
    declarations = [s for s in styles if s.lower() not in FORMAT_BITMASK]
    return _REPEATED_SEMICOLONS.sub(";", ";".join(declarations))
