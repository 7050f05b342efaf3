"""Pydantic models for the Draft.js raw content format (the converter input).

Field names follow the raw JSON (`inlineStyleRanges`, `entityRanges`,
`entityMap`) through aliases; Python code uses the snake_case names.
Offsets and lengths are counted in UTF-16 code units, as Draft.js does.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class InlineStyleRange(BaseModel):
    """One inline style token applied over [offset, offset + length)."""

    offset: int = Field(ge=0, strict=True)
    length: int = Field(ge=0, strict=True)
    style: str


class EntityRange(BaseModel):
    """A reference to an `entityMap` entry applied over a text range."""

    offset: int = Field(ge=0, strict=True)
    length: int = Field(ge=0, strict=True)
    key: str

    @field_validator("key", mode="before")
    @classmethod
    def _coerce_key(cls, value: Any) -> Any:
        # Draft stores range keys as ints while entityMap keys are strings.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class RawBlock(BaseModel):
    """A single Draft content block."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = ""
    text: str
    type: str = "unstyled"
    depth: int = Field(default=0, ge=0)
    inline_style_ranges: list[InlineStyleRange] = Field(
        default_factory=list, alias="inlineStyleRanges"
    )
    entity_ranges: list[EntityRange] = Field(default_factory=list, alias="entityRanges")
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _none_data(cls, value: Any) -> Any:
        return {} if value is None else value


class RawEntity(BaseModel):
    """An entry in the shared entity table."""

    type: str
    mutability: str = "MUTABLE"
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _none_data(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_link(self) -> bool:
        return self.type.upper() == "LINK"


class RawDocument(BaseModel):
    """A complete Draft raw content object: blocks plus the entity table."""

    model_config = ConfigDict(populate_by_name=True)

    blocks: list[RawBlock] = Field(default_factory=list)
    entity_map: dict[str, RawEntity] = Field(default_factory=dict, alias="entityMap")

    @model_validator(mode="after")
    def _check_entity_keys(self) -> RawDocument:
        for index, block in enumerate(self.blocks):
            for entity_range in block.entity_ranges:
                if entity_range.key not in self.entity_map:
                    raise ValueError(
                        f"block {index} ({block.key or 'no key'}) references "
                        f"missing entity '{entity_range.key}'"
                    )
        return self

    @classmethod
    def from_json(cls, json_str: str) -> RawDocument:
        """Deserialize from a JSON string."""
        return cls.model_validate_json(json_str)
