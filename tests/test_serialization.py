"""Tests for bigote.serialization: token tree JSON round-trip."""

import json

import pytest

from bigote import Writer, parse
from bigote.context import Context
from bigote.serialization import from_dict, from_json, to_dict, to_json
from bigote.tokens import Inverted, Name, Partial, Section, Text


class TestToDict:
    def test_text(self) -> None:
        assert to_dict(Text("hi", 0, 2)) == {"_type": "Text", "value": "hi", "start": 0, "end": 2}

    def test_partial_keeps_line_state(self) -> None:
        data = to_dict(Partial("p", 2, 8, indentation="  ", tag_index=0))
        assert data["_type"] == "Partial"
        assert data["indentation"] == "  "
        assert data["line_has_non_space"] is False

    def test_section_children_are_nested(self) -> None:
        section = Section("a", 0, 6, children=(Name("x", 6, 11),), close_start=11)
        data = to_dict(section)
        assert data["children"] == [{"_type": "Name", "path": "x", "start": 6, "end": 11}]
        assert data["close_start"] == 11


class TestFromDict:
    def test_rebuilds_section(self) -> None:
        data = {
            "_type": "Inverted",
            "name": "a",
            "start": 0,
            "end": 6,
            "close_start": 10,
            "children": [{"_type": "Text", "value": "none", "start": 6, "end": 10}],
        }
        token = from_dict(data)
        assert token == Inverted("a", 0, 6, children=(Text("none", 6, 10),), close_start=10)
        assert isinstance(token.children, tuple)

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"value": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown token type"):
            from_dict({"_type": "Heading"})


class TestJson:
    def test_round_trip(self) -> None:
        tokens = parse("{{! c }}{{#items}}<{{name}}>{{/items}}{{^items}}none{{/items}}\n  {{>p}}\n")
        assert from_json(to_json(tokens)) == tokens

    def test_output_is_deterministic(self) -> None:
        tokens = parse("{{#a}}{{b}}{{/a}}")
        assert to_json(tokens) == to_json(from_json(to_json(tokens)))

    def test_indent(self) -> None:
        assert "\n" in to_json(parse("{{a}}"), indent=2)

    def test_top_level_is_a_list(self) -> None:
        assert isinstance(json.loads(to_json(parse("x"))), list)

    def test_not_a_list(self) -> None:
        with pytest.raises(ValueError, match="Expected a list"):
            from_json('{"_type": "Text"}')

    def test_restored_tree_renders(self) -> None:
        template = "{{#l}}[{{.}}]{{/l}}"
        tokens = from_json(to_json(parse(template)))
        out = Writer().render_tokens(tokens, Context({"l": [1, 2]}), original_template=template)
        assert out == "[1][2]"
