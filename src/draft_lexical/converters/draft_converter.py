"""Draft.js raw content → Lexical editor state.

The key algorithm is the list fold in :mod:`draft_lexical.converters.lists`:
blocks are converted one by one and fed to it strictly in document order,
since list nesting depends on the previous blocks.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from draft_lexical.compact import compact
from draft_lexical.config import Config
from draft_lexical.converters.blocks import BlockConverter
from draft_lexical.converters.lists import ListTreeBuilder
from draft_lexical.draft.schema import RawDocument
from draft_lexical.exceptions import ConversionError, ParseError
from draft_lexical.ir.schema import EditorState, RootNode

logger = logging.getLogger(__name__)


class DraftConverter:
    """Converts whole Draft documents; one instance can convert many."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config.default()
        self.warnings: list[str] = []

    def convert(self, document: Union[RawDocument, dict]) -> EditorState:
        """Convert one Draft document.

        Args:
            document: A RawDocument, or the raw JSON object as a dict.

        Returns:
            The complete EditorState.

        Raises:
            ParseError: If the document is malformed.
            ConversionError: If a block cannot be converted. No partial
                tree is returned.
        """
        self.warnings = []
        document = self.load(document)
        blocks = BlockConverter(document, self.config)
        builder = ListTreeBuilder()

        for index, block in enumerate(document.blocks):
            try:
                builder.add(blocks.convert(block))
            except (ConversionError, AttributeError, TypeError, ValueError) as exc:
                # e.g. entity data of the wrong shape
                raise ConversionError(f"Block {index} ({block.key or block.type}): {exc}") from exc

        self.warnings = list(blocks.warnings)
        logger.info(
            "Converted %d blocks into %d root nodes", len(document.blocks), len(builder.children)
        )
        return EditorState(root=RootNode(children=builder.children))

    @staticmethod
    def load(document: Union[RawDocument, dict]) -> RawDocument:
        """Validate a raw Draft object into a RawDocument."""
        if isinstance(document, RawDocument):
            return document
        if not isinstance(document, dict):
            raise ParseError(f"Draft content must be an object, got {type(document).__name__}")
        try:
            return RawDocument.model_validate(document)
        except ValidationError as exc:
            raise ParseError(f"Invalid Draft content: {exc}") from exc

    def convert_embedded(self, obj: Any, path: str = "$") -> Any:
        """Convert every Draft document nested in a larger JSON object.

        Objects stored under one of ``config.proposal.raw_keys`` are
        converted and replaced by their serialized root node, shaped by
        ``config.output`` (default stripping, key shortening). Other
        objects and lists are searched recursively, except under
        ``config.proposal.excluded_keys``. Scalars are left as they are.
        """
        if isinstance(obj, list):
            return [self.convert_embedded(item, f"{path}[{i}]") for i, item in enumerate(obj)]
        if not isinstance(obj, dict):
            return obj

        raw_keys = set(self.config.proposal.raw_keys)
        excluded = set(self.config.proposal.excluded_keys)
        result = dict(obj)

        for key, value in obj.items():
            if key in excluded:
                continue
            if key in raw_keys and isinstance(value, dict):
                logger.debug("Converting embedded Draft content at %s.%s", path, key)
                root = self.convert(value).root.model_dump(mode="json", by_alias=True)
                result[key] = compact(root, self.config.output)
            else:
                result[key] = self.convert_embedded(value, f"{path}.{key}")

        return result


def convert(document: Union[RawDocument, dict], config: Optional[Config] = None) -> EditorState:
    """Convenience wrapper around :meth:`DraftConverter.convert`."""
    return DraftConverter(config).convert(document)
