"""Lexical editor-state node models."""

from draft_lexical.ir.schema import (
    BlockNode,
    EditorState,
    HeadingNode,
    HorizontalRuleNode,
    HtmlNode,
    ImageNode,
    InlineNode,
    LinkNode,
    ListChild,
    ListItemNode,
    ListNode,
    MediaNode,
    ParagraphNode,
    QuoteNode,
    RootNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    TokenNode,
    WidgetNode,
)

__all__ = [
    "BlockNode",
    "EditorState",
    "HeadingNode",
    "HorizontalRuleNode",
    "HtmlNode",
    "ImageNode",
    "InlineNode",
    "LinkNode",
    "ListChild",
    "ListItemNode",
    "ListNode",
    "MediaNode",
    "ParagraphNode",
    "QuoteNode",
    "RootNode",
    "TableCellNode",
    "TableNode",
    "TableRowNode",
    "TextNode",
    "TokenNode",
    "WidgetNode",
]
