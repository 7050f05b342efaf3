"""Conversion report — node statistics and warnings from a conversion run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from draft_lexical.ir.schema import (
    EditorState,
    HeadingNode,
    LinkNode,
    ListItemNode,
    ListNode,
    ParagraphNode,
    QuoteNode,
    TableNode,
    TextNode,
)


@dataclass
class ConversionReport:
    """Summary of a Draft-to-Lexical conversion run."""

    # Source info
    source_file: str = ""
    block_count: int = 0

    # Timing
    convert_time_seconds: float = 0.0

    # Node counts
    paragraph_count: int = 0
    heading_count: int = 0
    quote_count: int = 0
    list_count: int = 0
    list_item_count: int = 0
    link_count: int = 0
    table_count: int = 0
    entity_count: int = 0  # atomic blocks other than tables

    # Deepest list nesting seen (1 = a flat list)
    max_list_depth: int = 0

    # Entity node counts by type: {type: count}
    entities_by_type: dict[str, int] = field(default_factory=dict)

    # Warnings collected during conversion
    warnings: list[str] = field(default_factory=list)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self._to_dict(), indent=indent)

    def _to_dict(self) -> dict:
        """Convert to a plain dict for JSON serialization."""
        return {
            "source_file": self.source_file,
            "block_count": self.block_count,
            "timing": {
                "convert_seconds": round(self.convert_time_seconds, 3),
            },
            "node_counts": {
                "paragraphs": self.paragraph_count,
                "headings": self.heading_count,
                "quotes": self.quote_count,
                "lists": self.list_count,
                "list_items": self.list_item_count,
                "links": self.link_count,
                "tables": self.table_count,
                "entities": self.entity_count,
            },
            "max_list_depth": self.max_list_depth,
            "entities_by_type": dict(sorted(self.entities_by_type.items())),
            "warnings": self.warnings,
        }

    @classmethod
    def from_state(
        cls, state: EditorState, source_file: str = "", block_count: int = 0
    ) -> ConversionReport:
        """Build a report by walking an editor-state tree."""
        report = cls(source_file=source_file, block_count=block_count)
        _walk_nodes(state.root.children, report)
        return report


def _walk_nodes(nodes: list, report: ConversionReport, list_depth: int = 0) -> None:
    """Recursively walk Lexical nodes to populate report counters."""
    for node in nodes:
        if isinstance(node, ParagraphNode):
            report.paragraph_count += 1
            _walk_nodes(node.children, report)
        elif isinstance(node, HeadingNode):
            report.heading_count += 1
            _walk_nodes(node.children, report)
        elif isinstance(node, QuoteNode):
            report.quote_count += 1
            _walk_nodes(node.children, report)
        elif isinstance(node, ListNode):
            report.list_count += 1
            report.max_list_depth = max(report.max_list_depth, list_depth + 1)
            _walk_nodes(node.children, report, list_depth + 1)
        elif isinstance(node, ListItemNode):
            report.list_item_count += 1
            _walk_nodes(node.children, report)
        elif isinstance(node, LinkNode):
            report.link_count += 1
        elif isinstance(node, TableNode):
            report.table_count += 1
        elif isinstance(node, TextNode):
            continue
        else:
            report.entity_count += 1
            report.entities_by_type[node.type] = report.entities_by_type.get(node.type, 0) + 1
