"""Tests for bigote.scanner: anchored template cursor."""

import re

from bigote.scanner import Scanner

_OPEN = re.compile(r"\{\{\s*")
_WORD = re.compile(r"\w+")


class TestScan:
    def test_matches_at_cursor(self) -> None:
        scanner = Scanner("{{ name}}")
        assert scanner.scan(_OPEN) == "{{ "
        assert scanner.pos == 3

    def test_miss_does_not_advance(self) -> None:
        scanner = Scanner("abc {{x}}")
        assert scanner.scan(_OPEN) == ""
        assert scanner.pos == 0

    def test_is_anchored_not_a_search(self) -> None:
        """A match later in the source is not a match at the cursor."""
        scanner = Scanner("  word")
        assert scanner.scan(_WORD) == ""
        assert scanner.pos == 0

    def test_scan_from_middle(self) -> None:
        scanner = Scanner("ab{{")
        scanner.scan_until(_OPEN)
        assert scanner.scan(_OPEN) == "{{"
        assert scanner.eos()


class TestScanUntil:
    def test_returns_skipped_text(self) -> None:
        scanner = Scanner("Hello {{name}}")
        assert scanner.scan_until(_OPEN) == "Hello "
        assert scanner.pos == 6
        assert scanner.tail == "{{name}}"

    def test_match_at_cursor_skips_nothing(self) -> None:
        scanner = Scanner("{{name}}")
        assert scanner.scan_until(_OPEN) == ""
        assert scanner.pos == 0

    def test_no_match_consumes_rest(self) -> None:
        scanner = Scanner("plain text")
        assert scanner.scan_until(_OPEN) == "plain text"
        assert scanner.eos()
        assert scanner.tail == ""


class TestEos:
    def test_empty_source(self) -> None:
        assert Scanner("").eos()

    def test_not_at_end(self) -> None:
        assert not Scanner("x").eos()
