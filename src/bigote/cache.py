"""Template cache for parsed token trees.

Parsing is a pure function of (template text, delimiter pair), so the parsed
tree can be memoized under that compound key. Token trees are immutable and
safe to share between renders.

Thread Safety:
    DictTemplateCache is not thread-safe. For concurrent rendering, use a
    cache implementation with internal locking (e.g. threading.Lock around
    get/set/clear).

Example:
    >>> from bigote import Writer, DictTemplateCache
    >>> writer = Writer(cache=DictTemplateCache())
    >>> tokens1 = writer.parse("Hi {{name}}")
    >>> tokens2 = writer.parse("Hi {{name}}")  # Cache hit, no re-parse
    >>> tokens1 is tokens2
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from bigote.tokens import Token

CacheKey = tuple[str, tuple[str, str]]


class TemplateCache(Protocol):
    """Protocol for parsed-template caches.

    Cache key is (template, (open_delimiter, close_delimiter)).
    """

    def get(self, key: CacheKey) -> tuple[Token, ...] | None:
        """Return cached tokens if present, else None."""
        ...

    def set(self, key: CacheKey, tokens: tuple[Token, ...]) -> None:
        """Store tokens in cache."""
        ...

    def clear(self) -> None:
        """Drop every cached entry."""
        ...


class DictTemplateCache:
    """In-memory template cache using a dict.

    Not thread-safe. For concurrent rendering, wrap with a lock or use a
    thread-safe implementation.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[CacheKey, tuple[Token, ...]] = {}

    def get(self, key: CacheKey) -> tuple[Token, ...] | None:
        """Return cached tokens if present, else None."""
        return self._data.get(key)

    def set(self, key: CacheKey, tokens: tuple[Token, ...]) -> None:
        """Store tokens in cache."""
        self._data[key] = tokens

    def clear(self) -> None:
        """Drop every cached entry."""
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


__all__ = ["CacheKey", "DictTemplateCache", "TemplateCache"]
