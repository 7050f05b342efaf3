"""Depth-stack reconstruction of nested Lexical lists from flat Draft blocks.

Draft keeps list items as flat blocks with a ``depth``; Lexical nests a
whole ``list`` node inside its parent list, next to the items. Blocks are
folded in document order over a stack of open lists (shallowest first):

- A non-list block closes every open list and goes to the root.
- A depth-0 item whose list type differs from the open list closes the
  whole stack, so the new list becomes a root-level sibling.
- An item deeper than the open list, or of a different type, opens a new
  list nested in the open one (or at the root when nothing is open).
- An item at the open list's depth joins it.
- A shallower item closes lists until one at or above its depth is open
  and joins that one.

List nodes are appended to their parent once, when created, and only
gain children afterwards, so the root children are complete at any
point; there is nothing to flush at the end.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from draft_lexical.ir.schema import ListItemNode, ListNode

ListType = Literal["bullet", "number"]


@dataclass
class ListItemResult:
    """A converted list-item block waiting to be placed in a list."""

    list_type: ListType
    item: ListItemNode
    depth: int = 0


@dataclass
class _ListFrame:
    node: ListNode
    depth: int


@dataclass
class ListTreeBuilder:
    """Folds converted blocks into root children, nesting list items."""

    children: list = field(default_factory=list)
    _stack: list[_ListFrame] = field(default_factory=list, repr=False)

    def add(self, result: Union[ListItemResult, object]) -> None:
        """Place the next converted block, in document order."""
        if isinstance(result, ListItemResult):
            self._add_item(result)
        else:
            self._stack.clear()
            self.children.append(result)

    def extend(self, results) -> list:
        for result in results:
            self.add(result)
        return self.children

    @property
    def open_depths(self) -> list[int]:
        """Depths of the currently open lists, shallowest first."""
        return [frame.depth for frame in self._stack]

    def _add_item(self, result: ListItemResult) -> None:
        stack = self._stack
        depth = result.depth

        # A type change at the root starts a separate top-level list.
        if stack and depth == 0 and stack[-1].node.list_type != result.list_type:
            stack.clear()

        if (
            not stack
            or stack[-1].depth < depth
            or stack[-1].node.list_type != result.list_type
        ):
            self._open_list(result)
        elif stack[-1].depth == depth:
            stack[-1].node.children.append(result.item)
        else:
            while stack and stack[-1].depth > depth:
                stack.pop()
            if stack:
                stack[-1].node.children.append(result.item)
            else:
                # every open list was deeper than this item
                self._open_list(result)

    def _open_list(self, result: ListItemResult) -> None:
        node = ListNode(
            list_type=result.list_type,
            tag="ul" if result.list_type == "bullet" else "ol",
            children=[result.item],
        )
        parent = self._stack[-1].node.children if self._stack else self.children
        parent.append(node)
        self._stack.append(_ListFrame(node=node, depth=result.depth))


def build_list_tree(results) -> list:
    """Fold a complete sequence of converted blocks into root children."""
    return ListTreeBuilder().extend(results)
