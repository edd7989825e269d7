"""Template parser producing a nested token tree.

Scans a template with a Scanner and the active delimiter pair, emitting a
flat token stream which is then squashed (adjacent text merged) and nested
(section children attached).

Standalone Tags:
A line holding only block tags (section, inverted, close, partial, comment,
delimiter change) and whitespace is removed from the output entirely, line
break included. Whitespace text is emitted one character at a time so that
the fragments belonging to such a line can be dropped when its newline (or
the end of input) is reached.

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per parse
operation. The resulting token tree is immutable and thread-safe.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from bigote.config import DEFAULT_DELIMITERS
from bigote.errors import ParseError
from bigote.location import SourceLocation
from bigote.scanner import Scanner
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
from bigote.utils.logger import get_logger

logger = get_logger(__name__)

_WHITE_RE = re.compile(r"\s*")
_SPACE_RE = re.compile(r"\s+")
_EQUALS_RE = re.compile(r"\s*=")
_CURLY_RE = re.compile(r"\s*\}")
_TAG_RE = re.compile(r"#|\^|/|>|\{|&|=|!")


@dataclass(frozen=True, slots=True)
class _Open:
    """Opening tag of a section, before its children are known."""

    sigil: str
    name: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class _Close:
    """Closing tag of a section."""

    name: str
    start: int
    end: int


@dataclass(slots=True)
class _Frame:
    """Section under construction while nesting."""

    opener: _Open
    children: list[Token] = field(default_factory=list)

    def build(self, close_start: int) -> Section | Inverted:
        cls = Section if self.opener.sigil == "#" else Inverted
        return cls(
            name=self.opener.name,
            start=self.opener.start,
            end=self.opener.end,
            children=tuple(self.children),
            close_start=close_start,
        )


def validate_delimiters(delimiters: object) -> tuple[str, str]:
    """Return ``delimiters`` as an (open, close) pair or raise ParseError.

    A string, as found in ``{{=<% %>=}}`` bodies, is split on whitespace and
    its first two parts are used. Any other value must be exactly a pair.
    """
    if isinstance(delimiters, str):
        delimiters = _SPACE_RE.split(delimiters.strip(), maxsplit=2)[:2]
    if (
        not isinstance(delimiters, Sequence)
        or isinstance(delimiters, str)
        or len(delimiters) != 2
        or not all(isinstance(d, str) and d for d in delimiters)
    ):
        msg = f"Invalid tags: {delimiters!r}"
        raise ParseError(msg)
    return (delimiters[0], delimiters[1])


class Parser:
    """Single-pass Mustache tokenizer and tree builder.

    Usage:
        >>> tokens = Parser("Hello {{#who}}{{name}}{{/who}}").parse()
        >>> tokens[1].children
        (Name(path='name', start=14, end=22),)

    """

    __slots__ = (
        "_template",
        "_delimiters",
        "_opening_re",
        "_closing_re",
        "_closing_curly_re",
        # Flat token buffer; None marks a stripped whitespace fragment
        "_tokens",
        "_sections",
        # Per-line state
        "_spaces",
        "_has_tag",
        "_non_space",
        "_line_has_non_space",
        "_indentation",
        "_tag_index",
    )

    def __init__(
        self,
        template: str,
        delimiters: Sequence[str] | None = None,
    ) -> None:
        """Initialize parser with template text.

        Args:
            template: Template source
            delimiters: Initial (open, close) pair, defaults to ("{{", "}}")

        Raises:
            ParseError: If ``delimiters`` is not a pair of non-empty strings
        """
        self._template = template
        self._tokens: list[Token | _Open | _Close | None] = []
        self._sections: list[_Open] = []
        self._spaces: list[int] = []
        self._has_tag = False
        self._non_space = False
        self._line_has_non_space = False
        self._indentation = ""
        self._tag_index = 0
        self._compile_tags(DEFAULT_DELIMITERS if delimiters is None else delimiters)

    @property
    def delimiters(self) -> tuple[str, str]:
        """Currently active delimiter pair."""
        return self._delimiters

    def parse(self) -> tuple[Token, ...]:
        """Parse the template into a nested token tree.

        Returns:
            Top-level tokens; sections hold their children.

        Raises:
            ParseError: On unclosed tags and unopened, mismatched or
                unclosed sections.
        """
        if not self._template:
            return ()

        scanner = Scanner(self._template)
        while not scanner.eos():
            start = scanner.pos
            start = self._scan_text(scanner.scan_until(self._opening_re), start)

            if not scanner.scan(self._opening_re):
                break
            self._has_tag = True

            sigil = scanner.scan(_TAG_RE) or "name"
            scanner.scan(_WHITE_RE)

            if sigil == "=":
                value = scanner.scan_until(_EQUALS_RE)
                scanner.scan(_EQUALS_RE)
                scanner.scan_until(self._closing_re)
            elif sigil == "{":
                value = scanner.scan_until(self._closing_curly_re)
                scanner.scan(_CURLY_RE)
                scanner.scan_until(self._closing_re)
                sigil = "&"
            else:
                value = scanner.scan_until(self._closing_re)

            if not scanner.scan(self._closing_re):
                raise self._error(f"Unclosed tag at {scanner.pos}", scanner.pos)

            self._emit_tag(sigil, value, start, scanner.pos)

        self._strip_space()

        if self._sections:
            opened = self._sections.pop()
            raise self._error(
                f'Unclosed section "{opened.name}" at {scanner.pos}', scanner.pos
            )

        return _nest_tokens(_squash_tokens(self._tokens))

    # =========================================================================
    # Scanning helpers
    # =========================================================================

    def _scan_text(self, value: str, start: int) -> int:
        """Emit ``value`` one character at a time, tracking line state.

        Returns:
            Offset just past the text.
        """
        for char in value:
            if char.isspace():
                self._spaces.append(len(self._tokens))
                self._indentation += char
            else:
                self._non_space = True
                self._line_has_non_space = True
                self._indentation += " "

            self._tokens.append(Text(char, start, start + 1))
            start += 1

            if char == "\n":
                self._strip_space()
                self._indentation = ""
                self._tag_index = 0
                self._line_has_non_space = False
        return start

    def _emit_tag(self, sigil: str, value: str, start: int, end: int) -> None:
        if sigil == ">":
            token: Token | _Open | _Close = Partial(
                name=value,
                start=start,
                end=end,
                indentation=self._indentation,
                tag_index=self._tag_index,
                line_has_non_space=self._line_has_non_space,
            )
        elif sigil in ("#", "^"):
            token = _Open(sigil, value, start, end)
            self._sections.append(token)
        elif sigil == "/":
            token = _Close(value, start, end)
            self._check_close(value, start)
        elif sigil == "&":
            token = Unescaped(value, start, end)
            self._non_space = True
        elif sigil == "=":
            token = DelimiterSet(value, start, end)
            self._compile_tags(value, offset=start)
            logger.debug("Delimiters switched to %r at %d", self.delimiters, start)
        elif sigil == "!":
            token = Comment(value, start, end)
        else:
            token = Name(value, start, end)
            self._non_space = True

        self._tag_index += 1
        self._tokens.append(token)

    def _check_close(self, name: str, start: int) -> None:
        if not self._sections:
            raise self._error(f'Unopened section "{name}" at {start}', start)
        opened = self._sections.pop()
        if opened.name != name:
            raise self._error(f'Unclosed section "{opened.name}" at {start}', start)

    def _strip_space(self) -> None:
        """Drop whitespace fragments of a standalone line, then reset line state."""
        if self._has_tag and not self._non_space:
            while self._spaces:
                self._tokens[self._spaces.pop()] = None
        else:
            self._spaces = []

        self._has_tag = False
        self._non_space = False

    def _compile_tags(self, delimiters: object, offset: int | None = None) -> None:
        try:
            opening, closing = validate_delimiters(delimiters)
        except ParseError as e:
            if offset is None:
                raise
            raise self._error(e.message, offset) from None

        self._delimiters = (opening, closing)
        self._opening_re = re.compile(re.escape(opening) + r"\s*")
        self._closing_re = re.compile(r"\s*" + re.escape(closing))
        self._closing_curly_re = re.compile(r"\s*" + re.escape("}" + closing))

    def _error(self, message: str, offset: int) -> ParseError:
        loc = SourceLocation.from_offset(self._template, offset)
        return ParseError(message, offset=offset, lineno=loc.lineno, col_offset=loc.col_offset)


def _squash_tokens(tokens: list[Token | _Open | _Close | None]) -> list[Token | _Open | _Close]:
    """Merge runs of adjacent Text tokens, skipping stripped fragments."""
    squashed: list[Token | _Open | _Close] = []
    run: list[Text] = []

    def flush() -> None:
        if run:
            squashed.append(Text("".join(t.value for t in run), run[0].start, run[-1].end))
            run.clear()

    for token in tokens:
        if token is None:
            continue
        if isinstance(token, Text):
            run.append(token)
        else:
            flush()
            squashed.append(token)
    flush()
    return squashed


def _nest_tokens(tokens: list[Token | _Open | _Close]) -> tuple[Token, ...]:
    """Fold a flat token stream into a tree using a stack of section frames."""
    root: list[Token] = []
    frames: list[_Frame] = []

    for token in tokens:
        if isinstance(token, _Open):
            frames.append(_Frame(token))
        elif isinstance(token, _Close):
            section = frames.pop().build(close_start=token.start)
            (frames[-1].children if frames else root).append(section)
        else:
            (frames[-1].children if frames else root).append(token)

    return tuple(root)


def parse_template(
    template: str,
    delimiters: Sequence[str] | None = None,
) -> tuple[Token, ...]:
    """Parse ``template`` into a token tree without caching.

    Args:
        template: Template source
        delimiters: Initial (open, close) pair, defaults to ("{{", "}}")

    Returns:
        Top-level tokens of the template.

    Raises:
        ParseError: On invalid delimiters or structural errors.
    """
    return Parser(template, delimiters).parse()


__all__ = ["Parser", "parse_template", "validate_delimiters"]
