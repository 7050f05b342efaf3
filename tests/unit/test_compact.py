"""Tests for key shortening/expansion and default stripping."""

from draft_lexical.compact import expand_keys, shorten_keys, strip_defaults
from draft_lexical.converters.draft_converter import convert
from draft_lexical.ir.schema import EditorState


def _state() -> EditorState:
    return convert(
        {
            "blocks": [
                {
                    "text": "Hello world",
                    "type": "header-two align-center",
                    "inlineStyleRanges": [{"offset": 0, "length": 5, "style": "BOLD"}],
                },
                {"text": "item", "type": "ordered-list-item"},
                {
                    "text": " ",
                    "type": "atomic",
                    "entityRanges": [{"offset": 0, "length": 1, "key": 0}],
                },
            ],
            "entityMap": {
                "0": {"type": "html", "data": {"htmlCode": "<p/>", "config": {"style": "", "format": 0}}}
            },
        }
    )


class TestShortenKeys:
    def test_known_keys_shortened(self):
        data = {"type": "text", "text": "a", "format": 1, "style": "", "children": []}
        assert shorten_keys(data) == {"t": "text", "tx": "a", "f": 1, "s": "", "c": []}

    def test_unknown_keys_kept(self):
        assert shorten_keys({"listType": "bullet"}) == {"listType": "bullet"}

    def test_nested(self):
        data = {"root": {"children": [{"version": 1, "mode": "normal", "direction": "rtl"}]}}
        assert shorten_keys(data) == {"root": {"c": [{"v": 1, "m": "normal", "d": "rtl"}]}}

    def test_expand_inverts_shorten(self):
        data = _state().to_dict()
        assert expand_keys(shorten_keys(data)) == data

    def test_scalars_untouched(self):
        assert shorten_keys("text") == "text"
        assert shorten_keys([1, None]) == [1, None]


class TestStripDefaults:
    def test_text_node_defaults_removed(self):
        node = {"type": "text", "text": "a", "format": 0, "style": "", "mode": "normal", "detail": 0, "version": 1}
        assert strip_defaults(node) == {"type": "text", "text": "a"}

    def test_non_default_values_kept(self):
        node = {"type": "paragraph", "format": "center", "direction": "rtl", "indent": 2, "children": []}
        assert strip_defaults(node) == node

    def test_null_direction_kept(self):
        node = {"type": "tablerow", "direction": None, "children": []}
        assert strip_defaults(node) == node

    def test_entity_payloads_untouched(self):
        stripped = strip_defaults(_state().to_dict())
        html = stripped["root"]["children"][2]
        assert html["config"] == {"style": "", "format": 0}

    def test_defaults_restored_by_validation(self):
        state = _state()
        stripped = strip_defaults(state.to_dict())
        assert "version" not in stripped["root"]
        assert EditorState.model_validate(stripped) == state

    def test_shortened_and_stripped_roundtrip(self):
        state = _state()
        compact = shorten_keys(strip_defaults(state.to_dict()))
        assert EditorState.model_validate(expand_keys(compact)) == state
