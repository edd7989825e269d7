"""Token tree serialization: JSON round-trip for parsed templates.

Converts typed tokens to/from JSON-compatible dicts. Useful for:
- Shipping pre-parsed templates and loading them without re-parsing
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from bigote import parse
    from bigote.serialization import to_json, from_json

    tokens = parse("{{#items}}{{name}}{{/items}}")
    restored = from_json(to_json(tokens))
    assert restored == tokens

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from bigote.tokens import (
    Comment,
    DelimiterSet,
    Inverted,
    Name,
    Partial,
    Section,
    Text,
    Token,
    Unescaped,
)

# Registry of token type names to classes for deserialization
_TOKEN_TYPES: dict[str, type[Token]] = {
    "Text": Text,
    "Name": Name,
    "Unescaped": Unescaped,
    "Comment": Comment,
    "DelimiterSet": DelimiterSet,
    "Partial": Partial,
    "Section": Section,
    "Inverted": Inverted,
}


def to_dict(token: Token) -> dict[str, Any]:
    """Convert a token to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Section children are serialized recursively.

    Args:
        token: Any Bigote token.

    Returns:
        Dict with ``_type`` and all token fields.

    """
    result: dict[str, Any] = {"_type": type(token).__name__}
    for f in fields(token):
        value = getattr(token, f.name)
        if f.name == "children":
            value = [to_dict(child) for child in value]
        result[f.name] = value
    return result


def from_dict(data: dict[str, Any]) -> Token:
    """Reconstruct a typed token from a dict.

    Args:
        data: Dict with ``_type`` and token fields (as produced by to_dict).

    Returns:
        Typed token (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized token"
        raise ValueError(msg)

    token_cls = _TOKEN_TYPES.get(type_name)
    if token_cls is None:
        msg = f"Unknown token type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(token_cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        if f.name == "children":
            raw = tuple(from_dict(child) for child in raw)
        kwargs[f.name] = raw

    return token_cls(**kwargs)


def to_json(tokens: Sequence[Token], *, indent: int | None = None) -> str:
    """Serialize a token tree to a JSON string.

    Args:
        tokens: Top-level tokens, as returned by parse().
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string holding a list of token dicts.

    """
    return json.dumps([to_dict(t) for t in tokens], sort_keys=True, indent=indent)


def from_json(data: str) -> tuple[Token, ...]:
    """Deserialize a token tree from a JSON string.

    Raises:
        ValueError: If the JSON is not a list of tokens.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a list of tokens, got {type(raw).__name__}"
        raise ValueError(msg)
    return tuple(from_dict(item) for item in raw)


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
