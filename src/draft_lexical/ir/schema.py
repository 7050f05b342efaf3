"""Pydantic models for the Lexical editor-state tree (the converter output).

Every node carries a `type` discriminator; block-level children are a
closed discriminated union so a serialized tree validates back into the
same node classes. Field names are snake_case in Python and camelCase on
the wire (`listType`, `colSpan`, ...), so dump with ``by_alias=True``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: int = 1


class _ElementNode(_Node):
    """Fields shared by every Lexical element (nodes that have children)."""

    direction: Optional[Literal["ltr", "rtl"]] = "ltr"
    format: str = ""
    indent: int = 0


# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------


class TextNode(_Node):
    """A run of text sharing one format bitmask and one style string."""

    type: Literal["text"] = "text"
    text: str
    format: int = 0  # bold=1 italic=2 strikethrough=4 underline=8 code=16
    style: str = ""
    mode: str = "normal"
    detail: int = 0


class LinkNode(_ElementNode):
    type: Literal["link"] = "link"
    children: list[TextNode] = Field(default_factory=list)
    url: str = ""
    target: Optional[str] = None
    title: Optional[str] = None
    rel: str = "noreferrer"


InlineNode = Annotated[Union[TextNode, LinkNode], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Text blocks
# ---------------------------------------------------------------------------


class ParagraphNode(_ElementNode):
    type: Literal["paragraph"] = "paragraph"
    style: str = ""
    children: list[InlineNode] = Field(default_factory=list)


class HeadingNode(_ElementNode):
    type: Literal["heading"] = "heading"
    tag: Literal["h1", "h2", "h3", "h4", "h5", "h6"] = "h1"
    style: str = ""
    children: list[InlineNode] = Field(default_factory=list)


class QuoteNode(_ElementNode):
    type: Literal["quote"] = "quote"
    style: str = ""
    children: list[InlineNode] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Lists (recursive for nesting)
# ---------------------------------------------------------------------------


class ListItemNode(_ElementNode):
    type: Literal["listitem"] = "listitem"
    class_name: Optional[str] = Field(default=None, alias="className")
    children: list[InlineNode] = Field(default_factory=list)


class ListNode(_ElementNode):
    """A list container; nested lists sit beside the items they follow."""

    type: Literal["list"] = "list"
    list_type: Literal["bullet", "number"] = Field(default="bullet", alias="listType")
    start: int = 1
    tag: Literal["ul", "ol"] = "ul"
    children: list[ListChild] = Field(default_factory=list)


ListChild = Annotated[Union[ListItemNode, ListNode], Field(discriminator="type")]

ListNode.model_rebuild()


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TableCellNode(_ElementNode):
    type: Literal["tablecell"] = "tablecell"
    col_span: int = Field(default=1, alias="colSpan")
    row_span: int = Field(default=1, alias="rowSpan")
    background_color: Optional[str] = Field(default=None, alias="backgroundColor")
    header_state: int = Field(default=0, alias="headerState")
    children: list[ParagraphNode] = Field(default_factory=list)


class TableRowNode(_ElementNode):
    type: Literal["tablerow"] = "tablerow"
    children: list[TableCellNode] = Field(default_factory=list)


class TableNode(_ElementNode):
    type: Literal["table"] = "table"
    col_widths: list[int] = Field(default_factory=list, alias="colWidths")
    children: list[TableRowNode] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Atomic entity blocks
# ---------------------------------------------------------------------------


class HorizontalRuleNode(_Node):
    type: Literal["horizontalrule"] = "horizontalrule"


class HtmlNode(_Node):
    type: Literal["html"] = "html"
    data: Any = None
    config: Any = None


class TokenNode(_Node):
    type: Literal["TOKEN"] = "TOKEN"
    data: Any = None


class MediaNode(_Node):
    type: Literal["media"] = "media"
    data: Optional[str] = None  # embeddable URL
    config: dict[str, Any] = Field(default_factory=dict)


class ImageNode(_Node):
    type: Literal["image"] = "image"
    src: Optional[str] = None
    config: dict[str, Any] = Field(default_factory=dict)
    hyperlink: Any = None
    width: Any = None
    height: Any = None
    max_width: str = Field(default="inherit", alias="maxWidth")


class WidgetNode(_Node):
    """Form, gallery and testimonial widgets share one shape."""

    type: Literal["form", "gallery", "testimonial"]
    data: Any = None
    config: Any = None


# The top-level discriminated union of all block types
BlockNode = Annotated[
    Union[
        ParagraphNode,
        HeadingNode,
        QuoteNode,
        ListNode,
        TableNode,
        HorizontalRuleNode,
        HtmlNode,
        TokenNode,
        MediaNode,
        ImageNode,
        WidgetNode,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Root / editor state
# ---------------------------------------------------------------------------


class RootNode(_ElementNode):
    type: Literal["root"] = "root"
    children: list[BlockNode] = Field(default_factory=list)


class EditorState(BaseModel):
    """The complete Lexical editor state produced by one conversion."""

    root: RootNode = Field(default_factory=RootNode)

    def to_dict(self) -> dict:
        """Dump to plain JSON-compatible data using wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, **kwargs) -> str:
        """Serialize to JSON string."""
        kwargs.setdefault("indent", 2)
        return self.model_dump_json(by_alias=True, **kwargs)

    @classmethod
    def from_json(cls, json_str: str) -> EditorState:
        """Deserialize from JSON string."""
        return cls.model_validate_json(json_str)
