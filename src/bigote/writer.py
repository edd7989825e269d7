"""Tree-walking template writer.

Renders a parsed token tree against a Context. Partials and lambda
sub-renders re-enter the parser through the writer's template cache.

Thread Safety:
All per-render state is encapsulated in RenderState, created fresh for each
render_tokens() call. A Writer may be shared between threads as long as its
template cache is thread-safe (DictTemplateCache is not).

Higher-Order Sections:
A section whose value is callable is not rendered by the writer. The callable
receives the raw template text between the section's tags and a render
function bound to the current context, partials and config:

    >>> def bold(text, render):
    ...     return "<b>" + render(text) + "</b>"
    >>> Writer().render("{{#bold}}Hi {{name}}{{/bold}}", {"bold": bold, "name": "Jo"})
    '<b>Hi Jo</b>'

"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Mapping, Sequence, Sized
from dataclasses import dataclass
from typing import Any

from bigote.cache import DictTemplateCache, TemplateCache
from bigote.config import DEFAULT_DELIMITERS, RenderConfig, coerce_config
from bigote.context import Context
from bigote.errors import RenderError
from bigote.escape import escape_html
from bigote.parser import parse_template, validate_delimiters
from bigote.profiling import get_render_accumulator
from bigote.protocols import MISSING, Viewable
from bigote.tokens import (
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

Partials = Mapping[str, str] | Callable[[str], str | None]

_NON_INDENT_RE = re.compile(r"[^ \t]")


def is_falsy(value: Any) -> bool:
    """Mustache truthiness.

    Falsy: None, False, zero, NaN, the empty string, and empty sequences or
    other sized iterables. Mappings are truthy even when empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, float):
        return value == 0 or math.isnan(value)
    if isinstance(value, int):
        return value == 0
    if isinstance(value, str):
        return not value
    if isinstance(value, Sized) and _is_iterable_section(value):
        return len(value) == 0
    return False


def _is_iterable_section(value: Any) -> bool:
    """True for values a section repeats over, one scope per item."""
    return (
        isinstance(value, Iterable)
        and not isinstance(value, (str, bytes, Mapping))
        and not isinstance(value, Viewable)
    )


def _is_lambda(value: Any) -> bool:
    """Callables other than classes count as lambdas."""
    return callable(value) and not isinstance(value, type)


def indent_partial(template: str, indentation: str, line_has_non_space: bool) -> str:
    """Prefix every non-empty line of ``template`` with ``indentation``.

    Only the spaces and tabs of ``indentation`` are kept. The first line is
    left alone when the partial tag followed other text on its line.
    """
    prefix = _NON_INDENT_RE.sub("", indentation)
    lines = template.split("\n")
    for i, line in enumerate(lines):
        if line and (i > 0 or not line_has_non_space):
            lines[i] = prefix + line
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class RenderState:
    """Per-render inputs threaded through the tree walk.

    Attributes:
        partials: Name to template mapping, or a resolver callable
        original_template: Source text the current tokens were parsed from
        config: Delimiters and escape function

    """

    partials: Partials | None
    original_template: str | None
    config: RenderConfig


class Writer:
    """Render templates to strings, caching parsed token trees.

    Usage:
        >>> writer = Writer()
        >>> writer.render("Hello {{name}}!", {"name": "<World>"})
        'Hello &lt;World&gt;!'

        >>> # Disable caching
        >>> writer = Writer(cache=None)

    """

    __slots__ = ("cache",)

    def __init__(self, cache: TemplateCache | None = MISSING) -> None:
        """Initialize writer.

        Args:
            cache: Template cache; defaults to a new DictTemplateCache.
                Pass None to disable caching.
        """
        self.cache: TemplateCache | None = DictTemplateCache() if cache is MISSING else cache

    def clear_cache(self) -> None:
        """Clear all cached templates in this writer."""
        if self.cache is not None:
            self.cache.clear()

    def parse(self, template: str, delimiters: Sequence[str] | None = None) -> tuple[Token, ...]:
        """Parse ``template``, serving repeat requests from the cache.

        Raises:
            ParseError: On invalid delimiters or structural errors.
        """
        pair = validate_delimiters(delimiters) if delimiters is not None else None
        acc = get_render_accumulator()

        if self.cache is None:
            if acc is not None:
                acc.record_parse(cached=False)
            return parse_template(template, pair)

        key = (template, pair or DEFAULT_DELIMITERS)
        tokens = self.cache.get(key)
        cached = tokens is not None
        if not cached:
            logger.debug("Template cache miss (%d chars)", len(template))
            tokens = parse_template(template, pair)
            self.cache.set(key, tokens)
        if acc is not None:
            acc.record_parse(cached=cached)
        return tokens

    def render(
        self,
        template: str,
        view: Any = None,
        partials: Partials | None = None,
        config: RenderConfig | Mapping[str, Any] | Sequence[str] | None = None,
    ) -> str:
        """Render ``template`` against ``view``.

        Args:
            template: Template source
            view: Root view value, or an existing Context
            partials: Partial templates by name, or a resolver callable
            config: RenderConfig, mapping, or a bare delimiter pair

        Returns:
            Rendered output.

        Raises:
            TypeError: If ``template`` is not a string.
            ParseError: On invalid delimiters or structural template errors.
            RenderError: If a lambda section runs without its source text.
        """
        if not isinstance(template, str):
            msg = (
                'Invalid template! Template should be a "str" but '
                f'"{type(template).__name__}" was given as the first argument '
                "for render(template, view, partials)"
            )
            raise TypeError(msg)

        config = coerce_config(config)
        tokens = self.parse(template, config.delimiters)
        context = view if isinstance(view, Context) else Context(view)
        output = self.render_tokens(tokens, context, partials, template, config)

        acc = get_render_accumulator()
        if acc is not None:
            acc.record_render(len(output))
        return output

    def render_tokens(
        self,
        tokens: Sequence[Token],
        context: Context,
        partials: Partials | None = None,
        original_template: str | None = None,
        config: RenderConfig | Mapping[str, Any] | Sequence[str] | None = None,
    ) -> str:
        """Render an already parsed token tree.

        ``original_template`` is only needed by higher-order sections, which
        slice their raw text out of it.
        """
        state = RenderState(partials, original_template, coerce_config(config))
        parts: list[str] = []
        self._render_into(parts, tokens, context, state)
        return "".join(parts)

    # =========================================================================
    # Token rendering
    # =========================================================================

    def _render_into(
        self,
        parts: list[str],
        tokens: Sequence[Token],
        context: Context,
        state: RenderState,
    ) -> None:
        for token in tokens:
            match token:
                case Text():
                    parts.append(token.value)
                case Name():
                    self._render_name(parts, token, context, state)
                case Unescaped():
                    value = _interpolated(context.lookup(token.path))
                    if value is not None:
                        parts.append(str(value))
                case Section():
                    self._render_section(parts, token, context, state)
                case Inverted():
                    if is_falsy(context.lookup(token.name)):
                        self._render_into(parts, token.children, context, state)
                case Partial():
                    self._render_partial(parts, token, context, state)
                case _:
                    pass  # Comment, DelimiterSet

    def _render_name(
        self, parts: list[str], token: Name, context: Context, state: RenderState
    ) -> None:
        value = _interpolated(context.lookup(token.path))
        if value is None:
            return
        escape = state.config.escape
        if escape is None or escape is escape_html:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                parts.append(str(value))
            else:
                parts.append(escape_html(value))
        else:
            parts.append(escape(value))

    def _render_section(
        self, parts: list[str], token: Section, context: Context, state: RenderState
    ) -> None:
        value = context.lookup(token.name)
        if is_falsy(value):
            return

        if _is_iterable_section(value):
            for item in value:
                self._render_into(parts, token.children, context.push(item), state)
        elif _is_lambda(value):
            if state.original_template is None:
                msg = "Cannot use higher-order sections without the original template"
                raise RenderError(msg)

            def sub_render(text: str) -> str:
                return self.render(text, context, state.partials, state.config)

            acc = get_render_accumulator()
            if acc is not None:
                acc.record_lambda()
            raw = state.original_template[token.end : token.close_start]
            result = value(raw, sub_render)
            if result is not None:
                parts.append(str(result))
        elif value is True:
            self._render_into(parts, token.children, context, state)
        else:
            self._render_into(parts, token.children, context.push(value), state)

    def _render_partial(
        self, parts: list[str], token: Partial, context: Context, state: RenderState
    ) -> None:
        if state.partials is None:
            template = None
        elif callable(state.partials):
            template = state.partials(token.name)
        else:
            template = state.partials.get(token.name)
        if template is None:
            logger.debug("Partial %r not found", token.name)
            acc = get_render_accumulator()
            if acc is not None:
                acc.record_missing_partial(token.name)
            return

        if token.tag_index == 0 and token.indentation:
            template = indent_partial(template, token.indentation, token.line_has_non_space)

        tokens = self.parse(template, state.config.delimiters)
        nested = RenderState(state.partials, template, state.config)
        self._render_into(parts, tokens, context, nested)


def _interpolated(value: Any) -> Any:
    """Call variable lambdas; pass everything else through."""
    if _is_lambda(value):
        return value()
    return value


__all__ = ["Partials", "RenderState", "Writer", "indent_partial", "is_falsy"]
