"""Overlay Draft style and link ranges onto block text to produce Lexical runs.

Every character gets an ordered set of resolved styles and at most one
link entity key. A left-to-right scan then cuts the text wherever either
changes, so adjacent runs always differ in styles or link.

Style ranges accumulate (two tokens resolving to the same declaration
count once). Link ranges do not: each position holds a single key and a
later range overwrites an earlier one where they overlap.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Union

from draft_lexical.converters.styles import StyleResolver, format_bitmask, style_string
from draft_lexical.draft.schema import EntityRange, InlineStyleRange, RawEntity
from draft_lexical.exceptions import ConversionError
from draft_lexical.ir.schema import LinkNode, TextNode

DEFAULT_LINK_REL = "noreferrer"


def segment(
    text: str,
    style_ranges: Sequence[InlineStyleRange],
    entity_ranges: Sequence[EntityRange],
    entity_map: Mapping[str, RawEntity],
    resolver: Optional[StyleResolver] = None,
    default_rel: str = DEFAULT_LINK_REL,
) -> list[Union[TextNode, LinkNode]]:
    """Split *text* into text and link nodes.

    Ranges reaching past the end of the text are clipped. Non-link
    entities are ignored here; atomic entities are handled by the entity
    dispatch table.

    Args:
        text: The block text.
        style_ranges: Inline style ranges, in document order.
        entity_ranges: Entity ranges, in document order.
        entity_map: The document's entity table.
        resolver: Style token resolver. Uses the default font set if None.
        default_rel: ``rel`` for links whose entity has none.

    Returns:
        Runs in text order; their texts concatenate back to *text*.

    Raises:
        ConversionError: If an entity range references a missing entity.
    """
    if not text:
        return []

    resolver = resolver or StyleResolver()
    positions = _utf16_positions(text)

    # dicts as insertion-ordered sets
    style_map: list[dict[str, None]] = [{} for _ in text]
    link_map: list[Optional[str]] = [None] * len(text)

    for style_range in style_ranges:
        style = resolver.resolve(style_range.style)
        if style is None:
            continue
        for index in _covered(positions, style_range.offset, style_range.length):
            style_map[index][style] = None

    for entity_range in entity_ranges:
        entity = entity_map.get(entity_range.key)
        if entity is None:
            raise ConversionError(f"Entity '{entity_range.key}' not found in entity map")
        if not entity.is_link:
            continue
        for index in _covered(positions, entity_range.offset, entity_range.length):
            link_map[index] = entity_range.key

    runs: list[Union[TextNode, LinkNode]] = []
    start = 0
    current = (style_map[0].keys(), link_map[0])

    for index in range(1, len(text)):
        styles, link_key = style_map[index].keys(), link_map[index]
        if styles != current[0] or link_key != current[1]:
            runs.append(
                _make_run(text[start:index], current[0], current[1], entity_map, default_rel)
            )
            start = index
            current = (styles, link_key)

    runs.append(_make_run(text[start:], current[0], current[1], entity_map, default_rel))
    return runs


def _make_run(
    text: str,
    styles,
    link_key: Optional[str],
    entity_map: Mapping[str, RawEntity],
    default_rel: str,
) -> Union[TextNode, LinkNode]:
    """Close a run: compute its format/style and wrap it in a link if needed."""
    styles = list(styles)
    node = TextNode(text=text, format=format_bitmask(styles), style=style_string(styles))

    if link_key is None:
        return node

    data = entity_map[link_key].data
    return LinkNode(
        children=[node],
        url=data.get("url") or data.get("href") or "",
        target=data.get("target") or None,
        title=data.get("title") or None,
        rel=data.get("rel") or default_rel,
    )


def _utf16_positions(text: str) -> list[int]:
    """Map each UTF-16 code unit of *text* to its Python string index."""
    positions: list[int] = []
    for index, char in enumerate(text):
        positions.append(index)
        if ord(char) > 0xFFFF:
            # astral characters take a surrogate pair in UTF-16
            positions.append(index)
    return positions


def _covered(positions: list[int], offset: int, length: int) -> list[int]:
    """String indices covered by a UTF-16 range, clipped to the text."""
    end = min(offset + length, len(positions))
    return [positions[unit] for unit in range(max(offset, 0), end)]
