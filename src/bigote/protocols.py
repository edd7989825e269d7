"""Protocols for Bigote.

Defines the contracts view values may implement to control name resolution.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class _Missing:
    """Sentinel type for a segment that did not resolve."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@runtime_checkable
class Viewable(Protocol):
    """Protocol for view values that resolve name segments themselves.

    A view implementing ``resolve`` bypasses the default mapping, sequence and
    attribute lookup. Return ``MISSING`` for names the view does not have;
    any other return value, ``None`` included, counts as a hit and stops the
    scope-chain walk.

    Example:
        >>> class Env:
        ...     def resolve(self, segment: str) -> Any:
        ...         return os.environ.get(segment.upper(), MISSING)

    """

    def resolve(self, segment: str) -> Any:
        """Return the value named ``segment`` or ``MISSING``."""
        ...


__all__ = ["MISSING", "Viewable"]
