"""Storage-size reductions for Lexical JSON: short keys and default stripping.

Both passes work on plain JSON data (dicts/lists). Shortening is undone
by :func:`expand_keys`; stripped defaults come back when the expanded
data is validated into :class:`~draft_lexical.ir.schema.EditorState`,
since every stripped value is the model field's default.
"""

from __future__ import annotations

from typing import Any

from draft_lexical.config import OutputConfig

KEY_MAPPING = {
    "format": "f",
    "indent": "i",
    "version": "v",
    "children": "c",
    "text": "tx",
    "type": "t",
    "style": "s",
    "mode": "m",
    "direction": "d",
}

REVERSE_KEY_MAPPING = {short: key for key, short in KEY_MAPPING.items()}

_TREE_KEYS = ("editorState", "root", "children")

# key -> values that equal a model default for every node carrying the key
DEFAULT_VALUES = {
    "format": (0, ""),
    "indent": (0,),
    "version": (1,),
    "mode": ("normal",),
    "detail": (0,),
    "style": ("",),
    "direction": ("ltr",),
}


def shorten_keys(data: Any) -> Any:
    """Recursively rename keys listed in KEY_MAPPING to their short form."""
    return _rename(data, KEY_MAPPING)


def expand_keys(data: Any) -> Any:
    """Inverse of :func:`shorten_keys`."""
    return _rename(data, REVERSE_KEY_MAPPING)


def strip_defaults(data: Any) -> Any:
    """Drop node fields whose value equals the default.

    Only nodes (objects with a `type`) are stripped, and only the tree
    itself is walked; entity payloads such as `data` and `config` are kept
    verbatim.
    """
    if isinstance(data, list):
        return [strip_defaults(item) for item in data]
    if not isinstance(data, dict):
        return data

    is_node = "type" in data
    result = {}
    for key, value in data.items():
        if is_node and _is_default(key, value):
            continue
        result[key] = strip_defaults(value) if key in _TREE_KEYS else value
    return result


def compact(data: Any, output: OutputConfig) -> Any:
    """Apply the configured default stripping and key shortening."""
    if output.strip_defaults:
        data = strip_defaults(data)
    if output.shorten_keys:
        data = shorten_keys(data)
    return data


def _is_default(key: str, value: Any) -> bool:
    defaults = DEFAULT_VALUES.get(key)
    if defaults is None or isinstance(value, bool):
        return False
    return any(type(value) is type(default) and value == default for default in defaults)


def _rename(data: Any, mapping: dict[str, str]) -> Any:
    if isinstance(data, list):
        return [_rename(item, mapping) for item in data]
    if isinstance(data, dict):
        return {mapping.get(key, key): _rename(value, mapping) for key, value in data.items()}
    return data
