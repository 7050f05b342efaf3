"""Atomic Draft entities (tables, media, widgets, ...) → Lexical block nodes.

Each atomic block points at one entity; its ``type`` selects the node
shape. Unknown types become a horizontal rule so the document still
converts.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional

from draft_lexical.config import TableConfig
from draft_lexical.converters.segments import segment
from draft_lexical.converters.styles import StyleResolver
from draft_lexical.draft.schema import RawEntity
from draft_lexical.exceptions import ConversionError
from draft_lexical.ir.schema import (
    HorizontalRuleNode,
    HtmlNode,
    ImageNode,
    MediaNode,
    ParagraphNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TokenNode,
    WidgetNode,
)

logger = logging.getLogger(__name__)

WIDGET_TYPES = ("form", "gallery", "testimonial")

_YOUTUBE_ID = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


class EntityConverter:
    """Dispatch table from entity type to Lexical node."""

    def __init__(
        self,
        resolver: Optional[StyleResolver] = None,
        table_config: Optional[TableConfig] = None,
    ):
        self.resolver = resolver or StyleResolver()
        self.table_config = table_config or TableConfig()
        self.warnings: list[str] = []
        self._handlers: dict[str, Callable[[RawEntity], Any]] = {
            "table": self.convert_table,
            "divider": lambda entity: HorizontalRuleNode(),
            "html": self.convert_html,
            "TOKEN": lambda entity: TokenNode(data=entity.data.get("texcontent")),
            "media": self.convert_media,
            "image": self.convert_image,
        }
        for widget in WIDGET_TYPES:
            self._handlers[widget] = self.convert_widget

    def convert(self, entity: RawEntity):
        """Convert one atomic entity, falling back to a horizontal rule."""
        handler = self._handlers.get(entity.type)
        node = handler(entity) if handler else None
        if node is None:
            self._warn(f"Unsupported {entity.type!r} entity replaced by a horizontal rule")
            return HorizontalRuleNode()
        return node

    def convert_table(self, entity: RawEntity) -> TableNode:
        """Build a table; the first row is the header row.

        ``entity.data["data"]`` is a list of row mappings whose values are
        the cell texts in column order; an ``id`` key is row bookkeeping.
        """
        rows = entity.data.get("data") or []
        if not isinstance(rows, list):
            raise ConversionError("Table entity data must be a list of rows")
        config = entity.data.get("config") or {}
        top_row_color = config.get("topRowColor") or None
        row_color = config.get("rowColor") or None

        table_rows = []
        for row_index, row in enumerate(rows):
            if not isinstance(row, dict):
                raise ConversionError(f"Table row {row_index} is not a mapping")
            header = row_index == 0
            cells = [
                TableCellNode(
                    background_color=top_row_color if header else row_color,
                    header_state=self.table_config.header_state if header else 0,
                    children=[ParagraphNode(children=self._cell_runs(value))],
                )
                for key, value in row.items()
                if key != "id"
            ]
            table_rows.append(TableRowNode(direction=None, children=cells))

        columns = len([key for key in rows[0] if key != "id"]) if rows else 0
        return TableNode(
            col_widths=[self.table_config.column_width] * columns,
            children=table_rows,
        )

    def _cell_runs(self, value: Any):
        text = "" if value is None else str(value)
        return segment(text, [], [], {}, self.resolver)

    def convert_html(self, entity: RawEntity) -> HtmlNode:
        return HtmlNode(data=entity.data.get("htmlCode"), config=entity.data.get("config"))

    def convert_media(self, entity: RawEntity) -> Optional[MediaNode]:
        link = entity.data.get("original_link")
        if not link:
            return None
        return MediaNode(data=media_url(link), config=dict(entity.data))

    def convert_image(self, entity: RawEntity) -> ImageNode:
        config = dict(entity.data.get("config") or {})
        size = config.pop("size", None) or {}
        return ImageNode(
            src=entity.data.get("src"),
            config=config,
            hyperlink=entity.data.get("hyperlink"),
            width=size.get("width"),
            height=size.get("height"),
        )

    def convert_widget(self, entity: RawEntity) -> WidgetNode:
        return WidgetNode(
            type=entity.type,
            data=entity.data.get("data"),
            config=entity.data.get("config"),
        )

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


def media_url(url: Optional[str]) -> Optional[str]:
    """Return a privacy-enhanced embed URL for YouTube links, else *url*."""
    if not url:
        return None
    match = _YOUTUBE_ID.match(url)
    if match and len(match.group(2)) == 11:
        return f"https://www.youtube-nocookie.com/embed/{match.group(2)}"
    return url
