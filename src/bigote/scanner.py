"""Position cursor over an immutable template string.

Every match the parser performs goes through a Scanner. ``scan`` is anchored
at the cursor (never a forward search); ``scan_until`` skips forward to the
next occurrence of a pattern.

Thread Safety:
Scanner instances are single-use. Create one per template string.

"""

from __future__ import annotations

import re


class Scanner:
    """Cursor over a template string with pattern-anchored consumption.

    Usage:
        >>> scanner = Scanner("Hi {{name}}")
        >>> scanner.scan_until(re.compile(r"\\{\\{"))
        'Hi '
        >>> scanner.scan(re.compile(r"\\{\\{"))
        '{{'
        >>> scanner.pos
        5

    """

    __slots__ = ("_source", "_source_len", "pos")

    def __init__(self, source: str) -> None:
        self._source = source
        self._source_len = len(source)
        self.pos = 0

    @property
    def tail(self) -> str:
        """Unconsumed remainder of the source."""
        return self._source[self.pos :]

    def eos(self) -> bool:
        """Return True when the cursor is at the end of the source."""
        return self.pos >= self._source_len

    def scan(self, pattern: re.Pattern[str]) -> str:
        """Consume ``pattern`` if it matches exactly at the cursor.

        Returns:
            The matched text, or "" when there is no match at the cursor.
            The cursor does not move on a miss.
        """
        match = pattern.match(self._source, self.pos)
        if match is None:
            return ""
        text = match.group(0)
        self.pos += len(text)
        return text

    def scan_until(self, pattern: re.Pattern[str]) -> str:
        """Skip up to (not including) the next match of ``pattern``.

        Skips to the end of the source when there is no further match.

        Returns:
            The skipped text.
        """
        match = pattern.search(self._source, self.pos)
        end = self._source_len if match is None else match.start()
        text = self._source[self.pos : end]
        self.pos = end
        return text

    def __repr__(self) -> str:
        return f"Scanner(pos={self.pos}, len={self._source_len})"
