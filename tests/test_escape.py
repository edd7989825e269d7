"""Tests for bigote.escape: default HTML escaping."""

import pytest

from bigote.escape import ENTITY_MAP, escape_html


class TestEscapeHtml:
    @pytest.mark.parametrize(("char", "entity"), sorted(ENTITY_MAP.items()))
    def test_each_entity(self, char: str, entity: str) -> None:
        assert escape_html(char) == entity

    def test_mixed(self) -> None:
        assert escape_html('& " < >') == "&amp; &quot; &lt; &gt;"

    def test_plain_text_untouched(self) -> None:
        assert escape_html("plain text 123") == "plain text 123"

    def test_ampersand_not_double_escaped_in_one_pass(self) -> None:
        assert escape_html("&lt;") == "&amp;lt;"

    def test_non_strings_are_stringified(self) -> None:
        assert escape_html(5) == "5"
        assert escape_html(None) == "None"
