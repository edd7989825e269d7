"""Default HTML escaping for ``{{name}}`` tags.

Escapes the characters that can break out of HTML text and attribute
contexts, including unquoted attributes and backtick-quoted legacy IE
attributes.
"""

from __future__ import annotations

import re
from typing import Any

ENTITY_MAP: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "/": "&#x2F;",
    "`": "&#x60;",
    "=": "&#x3D;",
}

_ESCAPE_RE = re.compile(r"[&<>\"'`=/]")


def escape_html(value: Any) -> str:
    """Escape HTML special characters in ``str(value)``.

    Example:
        >>> escape_html("<a href='/'>")
        '&lt;a href&#x3D;&#39;&#x2F;&#39;&gt;'

    """
    return _ESCAPE_RE.sub(lambda m: ENTITY_MAP[m.group(0)], str(value))


__all__ = ["ENTITY_MAP", "escape_html"]
