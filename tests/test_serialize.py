"""Tests for JSON persistence of trees."""

import json

import pytest

from mindpad.errors import MindPadError, ParseError
from mindpad.serialize import deserialize, from_dict, serialize, to_dict
from mindpad.tree import add_child, new_tree


class TestSerialize:
    """Encoding trees."""

    def test_fields_written(self, small_tree):
        small_tree.note = "root note"
        data = json.loads(serialize(small_tree))

        assert set(data) == {"label", "children", "note", "x", "y"}
        assert data["label"] == "Root"
        assert data["note"] == "root note"
        assert [c["label"] for c in data["children"]] == ["A", "B"]
        assert data["children"][0]["children"][0]["label"] == "A1"

    def test_derived_fields_not_written(self, small_tree):
        text = serialize(small_tree)
        for key in ("parent", "depth", "subtree_weight"):
            assert key not in text

    def test_unicode_kept_readable(self):
        root = new_tree("Idées 🧠")
        assert "Idées 🧠" in serialize(root)

    def test_indent(self, small_tree):
        assert "\n" not in serialize(small_tree)
        assert "\n  " in serialize(small_tree, indent=2)

    def test_to_dict_is_independent_copy(self, small_tree):
        data = to_dict(small_tree)
        data["children"].clear()
        assert len(small_tree.children) == 2


class TestDeserialize:
    """Decoding trees and rebuilding derived fields."""

    def test_restores_parent_and_depth(self):
        text = '{"label":"R","children":[{"label":"C","children":[],"note":""}],"note":""}'
        tree = deserialize(text)

        child = tree.children[0]
        assert child.depth == 1
        assert child.parent is tree
        assert tree.parent is None
        assert tree.subtree_weight == 2

    def test_optional_fields_default(self):
        tree = deserialize('{"label": "R", "children": []}')
        assert tree.note == ""
        assert (tree.x, tree.y) == (0.0, 0.0)

    def test_null_note_becomes_empty(self):
        assert deserialize('{"label": "R", "children": [], "note": null}').note == ""

    def test_positions_read(self):
        tree = deserialize('{"label": "R", "children": [], "x": 5, "y": -2.5}')
        assert (tree.x, tree.y) == (5.0, -2.5)

    def test_equal_after_reload(self, small_tree):
        small_tree.children[1].note = "# heading\n\ntext"
        restored = deserialize(serialize(small_tree))
        assert restored == small_tree
        assert restored is not small_tree
        assert restored.children[0].children[0].depth == 2

    def test_unknown_keys_ignored(self):
        tree = deserialize('{"label": "R", "children": [], "color": "red"}')
        assert tree.label == "R"

    @pytest.mark.parametrize("text", [
        "",
        "not json",
        "{\"label\": \"R\"",
        "[]",
        "42",
        "null",
        '{"children": []}',
        '{"label": 5, "children": []}',
        '{"label": "R"}',
        '{"label": "R", "children": {}}',
        '{"label": "R", "children": [], "note": 3}',
        '{"label": "R", "children": [], "x": "left"}',
        '{"label": "R", "children": [], "y": true}',
        '{"label": "R", "children": [{"label": "C"}]}',
        '{"label": "R", "children": ["C"]}',
    ])
    def test_malformed_input_raises_parse_error(self, text):
        with pytest.raises(ParseError):
            deserialize(text)

    def test_non_string_input(self):
        with pytest.raises(ParseError):
            deserialize(None)

    def test_excessive_nesting(self):
        text = '{"label": "n", "children": [' * 5000 + "]}" * 5000
        with pytest.raises(ParseError):
            deserialize(text)

    def test_parse_error_is_mindpad_error(self):
        assert issubclass(ParseError, MindPadError)

    def test_from_dict_leaves_derived_fields_alone(self):
        root = from_dict({"label": "R", "children": [{"label": "C", "children": []}]})
        assert root.children[0].parent is None
        assert root.children[0].depth == 0

    def test_large_tree(self):
        root = new_tree()
        for i in range(50):
            branch = add_child(root, f"b{i}")
            for j in range(10):
                add_child(branch, f"l{i}.{j}")
        restored = deserialize(serialize(root))
        assert restored.subtree_weight == 551
