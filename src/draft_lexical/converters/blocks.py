"""Per-block conversion: decide what a Draft block becomes in Lexical.

Draft block types may carry extra presentation classes in the type
string itself, e.g. ``"header-two align-center direction-rtl"`` or
``"unstyled line-height__1-5 intent-left-2"``. These are decoded here
into the Lexical element's ``format``, ``direction``, ``indent`` and
``style`` fields.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from draft_lexical.config import Config
from draft_lexical.converters.entities import EntityConverter
from draft_lexical.converters.lists import ListItemResult
from draft_lexical.converters.segments import segment
from draft_lexical.converters.styles import StyleResolver
from draft_lexical.draft.schema import RawBlock, RawDocument
from draft_lexical.exceptions import ConversionError
from draft_lexical.ir.schema import HeadingNode, ListItemNode, ParagraphNode, QuoteNode

logger = logging.getLogger(__name__)

_ALIGNMENTS = ("left", "right", "center", "justify")
_HEADING_TAGS = {
    "header-one": "h1",
    "header-two": "h2",
    "header-three": "h3",
    "header-four": "h4",
    "header-five": "h5",
    "header-six": "h6",
}
_INDENT = re.compile(r"intent-left-(\d+)")
_LINE_HEIGHT = re.compile(r"line-height__([\d-]+)")
_LIST_CLASS_PREFIX = re.compile(r"ordered-list-|unordered-list-")


# ---------------------------------------------------------------------------
# Block type string decoding
# ---------------------------------------------------------------------------


def node_type(block_type: str) -> str:
    """Lexical element type for a Draft block type."""
    if block_type == "blockquote":
        return "quote"
    if block_type.startswith("header"):
        return "heading"
    return "paragraph"


def heading_tag(block_type: str) -> str:
    return _HEADING_TAGS.get(block_type.split()[0] if block_type else "", "h1")


def alignment(block_type: str) -> Optional[str]:
    for name in _ALIGNMENTS:
        if f"align-{name}" in block_type:
            return name
    return None


def direction(block_type: str) -> Optional[str]:
    if "direction-rtl" in block_type:
        return "rtl"
    if "direction-ltr" in block_type:
        return "ltr"
    return None


def indent(block_type: str) -> Optional[int]:
    match = _INDENT.search(block_type)
    return int(match.group(1)) if match else None


def line_height(block_type: str) -> Optional[str]:
    """``line-height__1-5`` → ``"1.5"``."""
    match = _LINE_HEIGHT.search(block_type)
    return match.group(1).replace("-", ".", 1) if match else None


def is_list_item(block_type: str) -> bool:
    return "list-item" in block_type


def list_type(block_type: str) -> str:
    """Bullet for ``unordered-list-item`` types, number otherwise.

    This is a prefix match rather than an equality test, so a bullet item
    that also carries presentation classes (``unordered-list-item
    align-center``) stays a bullet instead of becoming a numbered item.
    """
    return "bullet" if block_type.startswith("unordered-list-item") else "number"


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class BlockConverter:
    """Converts one block at a time against a document's entity table."""

    def __init__(self, document: RawDocument, config: Optional[Config] = None):
        self.document = document
        self.config = config or Config.default()
        self.resolver = StyleResolver(self.config.style.fonts)
        self.entities = EntityConverter(self.resolver, self.config.table)

    @property
    def warnings(self) -> list[str]:
        return self.entities.warnings

    def convert(self, block: RawBlock):
        """Return a block node, or a ListItemResult for list items."""
        if block.type == "atomic" and block.entity_ranges:
            return self.convert_atomic(block)
        if is_list_item(block.type):
            return self.convert_list_item(block)
        return self.convert_text(block)

    def convert_atomic(self, block: RawBlock):
        key = block.entity_ranges[0].key
        entity = self.document.entity_map.get(key)
        if entity is None:
            raise ConversionError(f"Atomic block {block.key!r} references missing entity {key!r}")
        logger.debug("Atomic block %r → %s entity", block.key, entity.type)
        return self.entities.convert(entity)

    def convert_list_item(self, block: RawBlock) -> ListItemResult:
        item = ListItemNode(children=self.runs(block))

        class_name = block.data.get("className")
        if class_name:
            item.class_name = _LIST_CLASS_PREFIX.sub("", str(class_name), count=1)
        text_direction = direction(block.type)
        if text_direction:
            item.direction = text_direction

        return ListItemResult(list_type=list_type(block.type), item=item, depth=block.depth)

    def convert_text(self, block: RawBlock):
        kind = node_type(block.type)
        fields = {"children": self.runs(block)}

        text_format = alignment(block.type)
        if text_format:
            fields["format"] = text_format
        text_direction = direction(block.type)
        if text_direction:
            fields["direction"] = text_direction
        text_indent = indent(block.type)
        if text_indent:
            fields["indent"] = text_indent
        height = line_height(block.type)
        if height:
            fields["style"] = f"line-height: {height};"

        if kind == "heading":
            return HeadingNode(tag=heading_tag(block.type), **fields)
        if kind == "quote":
            return QuoteNode(**fields)
        return ParagraphNode(**fields)

    def runs(self, block: RawBlock):
        return segment(
            block.text,
            block.inline_style_ranges,
            block.entity_ranges,
            self.document.entity_map,
            self.resolver,
            self.config.style.default_link_rel,
        )
