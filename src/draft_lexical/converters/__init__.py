"""Draft → Lexical conversion: style resolution, segmentation, list nesting."""

from draft_lexical.converters.draft_converter import DraftConverter, convert
from draft_lexical.converters.lists import ListItemResult, ListTreeBuilder, build_list_tree
from draft_lexical.converters.segments import segment
from draft_lexical.converters.styles import StyleResolver, format_bitmask, style_string

__all__ = [
    "DraftConverter",
    "ListItemResult",
    "ListTreeBuilder",
    "StyleResolver",
    "build_list_tree",
    "convert",
    "format_bitmask",
    "segment",
    "style_string",
]
