"""Tests for error formatting and the exception hierarchy."""

import pytest

from bigote import BigoteError, ParseError, RenderError, parse, render
from bigote.location import SourceLocation


class TestExceptionHierarchy:
    def test_parse_error_is_bigote_error(self) -> None:
        assert issubclass(ParseError, BigoteError)

    def test_render_error_is_bigote_error(self) -> None:
        assert issubclass(RenderError, BigoteError)

    def test_catch_all(self) -> None:
        with pytest.raises(BigoteError):
            parse("{{/nope}}")


class TestParseErrorFormatting:
    def test_message_only(self) -> None:
        err = ParseError("boom")
        assert str(err) == "boom"
        assert err.message == "boom"
        assert err.offset is None

    def test_with_line(self) -> None:
        assert str(ParseError("boom", lineno=3)) == "3 boom"

    def test_with_line_and_column(self) -> None:
        err = ParseError("boom", offset=12, lineno=3, col_offset=4)
        assert str(err) == "3:4 boom"
        assert err.offset == 12

    def test_location_property(self) -> None:
        err = ParseError("boom", offset=12, lineno=3, col_offset=4)
        assert err.location == SourceLocation(3, 4, 12)
        assert str(err) == f"{err.location} boom"

    def test_location_needs_line_and_column(self) -> None:
        assert ParseError("boom", lineno=3).location is None
        assert ParseError("boom").location is None


class TestSourceLocation:
    def test_first_line(self) -> None:
        assert SourceLocation.from_offset("abc", 2) == SourceLocation(1, 3, 2)

    def test_after_newline(self) -> None:
        loc = SourceLocation.from_offset("a\nbc", 3)
        assert (loc.lineno, loc.col_offset) == (2, 2)
        assert str(loc) == "2:2"

    def test_offset_clamped(self) -> None:
        assert SourceLocation.from_offset("ab", 99).offset == 2
        assert SourceLocation.from_offset("ab", -5).offset == 0


class TestErrorSites:
    def test_unclosed_tag_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("a\nb {{x")
        err = exc_info.value
        assert err.message == "Unclosed tag at 7"
        assert (err.lineno, err.col_offset) == (2, 6)

    def test_unopened_section_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("ab{{/x}}")
        assert exc_info.value.message == 'Unopened section "x" at 2'
        assert exc_info.value.col_offset == 3
        assert exc_info.value.location == SourceLocation(1, 3, 2)

    def test_render_surfaces_parse_errors(self) -> None:
        with pytest.raises(ParseError, match='Unclosed section "a"'):
            render("{{#a}}{{/b}}", {"a": True})

    def test_partial_parse_errors_propagate(self) -> None:
        with pytest.raises(ParseError, match="Unclosed tag"):
            render("{{>p}}", {}, {"p": "{{oops"})

    def test_render_time_misses_are_not_errors(self) -> None:
        assert render("{{a.b.c}}{{#x}}{{/x}}{{>nope}}", {}) == ""
