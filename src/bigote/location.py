"""Source location tracking for error messages.

Tokens store absolute offsets only. SourceLocation turns an offset into a
line/column pair on demand, so parse errors can point at the offending tag.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of an offset inside a template.

    All line and column numbers are 1-indexed.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute offset in the template

    Examples:
        >>> SourceLocation.from_offset("a\\nbc", 3)
        SourceLocation(lineno=2, col_offset=2, offset=3)

    """

    lineno: int
    col_offset: int
    offset: int = 0

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "10:5"
        """
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(cls, source: str, offset: int) -> SourceLocation:
        """Compute the line and column of ``offset`` within ``source``.

        Offsets past the end of ``source`` are clamped to its length.
        """
        offset = max(0, min(offset, len(source)))
        lineno = source.count("\n", 0, offset) + 1
        col_offset = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return cls(lineno=lineno, col_offset=col_offset, offset=offset)
