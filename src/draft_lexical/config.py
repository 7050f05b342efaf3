"""YAML-backed configuration for the Draft → Lexical converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from draft_lexical.exceptions import ConfigError

# Font names recognised as `font-family` styles (compared lowercase).
DEFAULT_FONTS = (
    "arial",
    "helvetica",
    "verdana",
    "tahoma",
    "trebuchet ms",
    "times new roman",
    "georgia",
    "garamond",
    "courier new",
    "brush script mt",
    "roboto",
    "open sans",
    "lato",
    "montserrat",
    "poppins",
    "inter",
    "raleway",
    "nunito",
    "oswald",
    "merriweather",
    "playfair display",
    "source sans pro",
    "ubuntu",
    "pt sans",
    "noto sans",
)

DEFAULT_RAW_KEYS = (
    "raw",
    "rawtitle",
    "subrawtitle",
    "rawsubtitle",
    "rawcontact",
    "rawname",
    "rawemail",
    "rawmyname",
    "rawby",
)

DEFAULT_EXCLUDED_KEYS = (
    "sectionorder",
    "titleFont",
    "bodyFont",
    "variables",
    "headerConfig",
    "titleStyle",
)


@dataclass
class StyleConfig:
    """Inline style resolution settings."""

    fonts: list[str] = field(default_factory=lambda: list(DEFAULT_FONTS))
    default_link_rel: str = "noreferrer"


@dataclass
class TableConfig:
    """Table entity rendering settings."""

    column_width: int = 92
    header_state: int = 3  # Lexical TableCellHeaderStates.ROW | COLUMN


@dataclass
class OutputConfig:
    """Output JSON shape."""

    wrap_editor_state: bool = True  # emit {"editorState": {"root": ...}}
    shorten_keys: bool = False
    strip_defaults: bool = False
    indent: Optional[int] = 2


@dataclass
class ProposalConfig:
    """Keys used when converting Draft documents embedded in a larger object."""

    raw_keys: list[str] = field(default_factory=lambda: list(DEFAULT_RAW_KEYS))
    excluded_keys: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_KEYS))


@dataclass
class Config:
    """Top-level converter configuration."""

    style: StyleConfig = field(default_factory=StyleConfig)
    table: TableConfig = field(default_factory=TableConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    proposal: ProposalConfig = field(default_factory=ProposalConfig)
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        """Load configuration from a YAML file."""
        try:
            text = path.read_text(encoding="utf-8")
            data = yaml.safe_load(text) or {}
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}")

        return cls._from_dict(data)

    @classmethod
    def from_yaml_string(cls, text: str) -> Config:
        """Load configuration from a YAML string."""
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> Config:
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        style_data = data.get("style") or {}
        table_data = data.get("table") or {}
        output_data = data.get("output") or {}
        proposal_data = data.get("proposal") or {}

        style = StyleConfig(**_known(style_data, StyleConfig))
        style.fonts = [str(name).lower() for name in style.fonts]

        return cls(
            style=style,
            table=TableConfig(**_known(table_data, TableConfig)),
            output=OutputConfig(**_known(output_data, OutputConfig)),
            proposal=ProposalConfig(**_known(proposal_data, ProposalConfig)),
            verbose=data.get("verbose", False),
        )

    @classmethod
    def default(cls) -> Config:
        """Return the default configuration."""
        return cls()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Config:
        """Load config from path, or return defaults if path is None."""
        if path is None:
            return cls.default()
        return cls.from_yaml(path)


def _known(data: dict, section: type) -> dict:
    return {k: v for k, v in data.items() if k in section.__dataclass_fields__}
