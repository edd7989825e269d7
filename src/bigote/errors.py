"""Exception classes for Bigote.

Structural template problems are fatal and raise ParseError. Render-time
misses (unknown names, unknown partials, falsy values) are not errors.
"""

from __future__ import annotations

from bigote.location import SourceLocation


class BigoteError(Exception):
    """Base exception for all Bigote errors."""

    pass


class ParseError(BigoteError):
    """Error during template parsing.

    Raised for invalid delimiter pairs, unclosed tags, and sections that are
    unopened, mismatched, or left open at end of input.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            offset: Absolute offset in the template where the error occurred
            lineno: Line number (1-indexed)
            col_offset: Column offset (1-indexed)
        """
        self.message = message
        self.offset = offset
        self.lineno = lineno
        self.col_offset = col_offset

        prefix = ""
        if self.location is not None:
            prefix = f"{self.location} "
        elif lineno is not None:
            prefix = f"{lineno} "

        super().__init__(f"{prefix}{message}")

    @property
    def location(self) -> SourceLocation | None:
        """Line and column of the error, when both are known."""
        if self.lineno is None or self.col_offset is None:
            return None
        return SourceLocation(self.lineno, self.col_offset, self.offset or 0)


class RenderError(BigoteError):
    """Error during rendering.

    The only render-time failure: a higher-order section was rendered
    without access to the original template text.
    """

    pass
