"""Scope chain for resolving template names.

A Context wraps one view value and an optional parent. Entering a section
pushes a new child Context; names are resolved from the innermost scope
outward.

Resolution of a dotted name ``a.b.c``:
1. Walk the chain inner to outer until a scope's view resolves ``a``.
2. Resolve ``b`` then ``c`` strictly against that value. A missing segment
   yields None; the walk never falls back to outer scopes mid-path.

Example:
    >>> ctx = Context({"a": {"b": 5}, "x": 1}).push({"a": {}})
    >>> ctx.lookup("x")
    1
    >>> ctx.lookup("a.b") is None
    True

Thread Safety:
Context nodes are never mutated after construction apart from their private
lookup cache, which only memoizes pure results. A render creates its own
chain, so nothing is shared between concurrent renders.

"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from bigote.protocols import MISSING, Viewable

_INDEX_RE = re.compile(r"-?\d+")

_BUILTIN_VALUES = (str, bytes, bytearray, int, float, complex, list, tuple, set, frozenset, range)


def resolve_segment(view: Any, segment: str) -> Any:
    """Resolve one name segment against a single view value.

    Lookup order:
    - Viewable: ``view.resolve(segment)``
    - Mapping: key lookup
    - Sequence (not str): integer index
    - Anything else: public attribute, which covers objects and dataclasses.
      Built-in values (strings, numbers, lists, tuples, sets) only expose
      their data fields such as ``.real``, never their methods

    Returns:
        The resolved value, or MISSING. A present key whose value is None
        resolves to None.
    """
    if view is None or view is MISSING:
        return MISSING
    if isinstance(view, Viewable):
        return view.resolve(segment)
    if isinstance(view, Mapping):
        return view[segment] if segment in view else MISSING
    if (
        isinstance(view, Sequence)
        and not isinstance(view, str)
        and _INDEX_RE.fullmatch(segment)
    ):
        index = int(segment)
        if -len(view) <= index < len(view):
            return view[index]
        return MISSING
    if not segment or segment.startswith("_"):
        return MISSING
    value = getattr(view, segment, MISSING)
    if isinstance(view, _BUILTIN_VALUES) and callable(value):
        # Methods of built-in values are not fields (str.title, list.count)
        return MISSING
    return value


class Context:
    """Immutable scope-chain node.

    Usage:
        >>> root = Context({"name": "outer"})
        >>> inner = root.push({"name": "inner"})
        >>> inner.lookup("name"), root.lookup("name")
        ('inner', 'outer')

    """

    __slots__ = ("_view", "_parent", "_cache")

    def __init__(self, view: Any, parent: Context | None = None) -> None:
        self._view = view
        self._parent = parent
        self._cache: dict[str, Any] = {}

    @property
    def view(self) -> Any:
        """View value bound at this scope."""
        return self._view

    @property
    def parent(self) -> Context | None:
        """Enclosing scope, or None at the root."""
        return self._parent

    def push(self, view: Any) -> Context:
        """Return a new child scope binding ``view``."""
        return Context(view, self)

    def lookup(self, path: str) -> Any:
        """Resolve a dotted ``path`` across the scope chain.

        ``"."`` returns the current view.

        Returns:
            The resolved value, or None when nothing resolves.
        """
        if path == ".":
            return self._view
        try:
            return self._cache[path]
        except KeyError:
            pass

        value = self._resolve(path)
        self._cache[path] = value
        return value

    def _resolve(self, path: str) -> Any:
        head, *rest = path.split(".")

        context: Context | None = self
        value = MISSING
        while context is not None:
            value = resolve_segment(context._view, head)
            if value is not MISSING:
                break
            context = context._parent
        if value is MISSING:
            return None

        for segment in rest:
            value = resolve_segment(value, segment)
            if value is MISSING:
                return None
        return value

    def __repr__(self) -> str:
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        return f"Context(view={self._view!r}, depth={depth})"


__all__ = ["Context", "resolve_segment"]
