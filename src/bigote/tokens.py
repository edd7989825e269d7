"""Typed template tokens for Bigote.

The parser produces a tree of these tokens; the writer walks it. Every token
carries the absolute ``start``/``end`` offsets of its source text. Block
tokens (Section, Inverted) carry their children and the offset at which
their closing tag begins, which is what lambda sections slice raw text with.

Token Hierarchy:
Token (base)
├── Text            literal text
├── Name            {{name}}
├── Unescaped       {{{name}}} or {{&name}}
├── Comment         {{! ... }}
├── DelimiterSet    {{=<% %>=}}
├── Partial         {{> name}}
└── Block
    ├── Section     {{#name}} ... {{/name}}
    └── Inverted    {{^name}} ... {{/name}}

Thread Safety:
All tokens are frozen (immutable) and safe to share across threads, which
is what makes parsed trees safe to cache and reuse across renders.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Token:
    """Base class for all template tokens."""


@dataclass(frozen=True, slots=True)
class Text(Token):
    """Literal template text, rendered verbatim."""

    value: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Name(Token):
    """Escaped variable reference.

    Template: {{path}}

    """

    path: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Unescaped(Token):
    """Raw variable reference.

    Template: {{{path}}} or {{&path}}

    """

    path: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Comment(Token):
    """Comment tag. Produces no output."""

    value: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class DelimiterSet(Token):
    """Delimiter change directive. Produces no output.

    Template: {{=<% %>=}}

    The value is the raw body between the ``=`` signs.

    """

    value: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Partial(Token):
    """Reference to another named template.

    Template: {{> name}}

    Attributes:
        indentation: Text preceding the tag on its line, with every
            non-whitespace character replaced by a single space
        tag_index: Zero-based index of this tag among tags on its line
        line_has_non_space: Whether the line had non-whitespace text
            before this tag

    """

    name: str
    start: int
    end: int
    indentation: str = ""
    tag_index: int = 0
    line_has_non_space: bool = False


@dataclass(frozen=True, slots=True)
class Block(Token):
    """Base class for tokens that own child tokens."""

    name: str
    start: int
    end: int
    children: tuple[Token, ...] = ()
    close_start: int = 0


@dataclass(frozen=True, slots=True)
class Section(Block):
    """Section rendered zero or more times depending on its value.

    Template: {{#name}} ... {{/name}}

    """


@dataclass(frozen=True, slots=True)
class Inverted(Block):
    """Section rendered only when its value is falsy.

    Template: {{^name}} ... {{/name}}

    """


__all__ = [
    "Block",
    "Comment",
    "DelimiterSet",
    "Inverted",
    "Name",
    "Partial",
    "Section",
    "Text",
    "Token",
    "Unescaped",
]
