"""Draft.js raw content models."""

from draft_lexical.draft.schema import (
    EntityRange,
    InlineStyleRange,
    RawBlock,
    RawDocument,
    RawEntity,
)

__all__ = [
    "EntityRange",
    "InlineStyleRange",
    "RawBlock",
    "RawDocument",
    "RawEntity",
]
