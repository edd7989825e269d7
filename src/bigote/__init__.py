"""
Bigote: Logic-less Mustache templates for Python

Renders templates made of delimited tags against a view of nested mappings,
sequences and objects. No expressions, no control flow: values are
substituted, sections repeat or hide, partials splice in other templates.

Quick Start:
    >>> from bigote import render
    >>> render("Hello {{name}}!", {"name": "World"})
    'Hello World!'

    >>> render("{{#items}}<li>{{.}}</li>{{/items}}", {"items": ["a", "b"]})
    '<li>a</li><li>b</li>'

Partials and Custom Delimiters:
    >>> render("{{> user}}", {"name": "Ana"}, partials={"user": "<b>{{name}}</b>"})
    '<b>Ana</b>'
    >>> render("<% name %>", {"name": "Ana"}, config=("<%", "%>"))
    'Ana'

Higher-Order Sections:
    >>> def upper(text, render):
    ...     return render(text).upper()
    >>> render("{{#upper}}hi {{name}}{{/upper}}", {"upper": upper, "name": "ana"})
    'HI ANA'

Installation:
    pip install bigote              # Zero runtime dependencies
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from bigote.cache import DictTemplateCache, TemplateCache
from bigote.config import DEFAULT_DELIMITERS, RenderConfig, coerce_config
from bigote.context import Context
from bigote.errors import BigoteError, ParseError, RenderError
from bigote.escape import escape_html
from bigote.parser import Parser, parse_template
from bigote.profiling import RenderAccumulator, get_render_accumulator, profiled_render
from bigote.protocols import MISSING, Viewable
from bigote.scanner import Scanner
from bigote.serialization import from_dict, from_json, to_dict, to_json
from bigote.tokens import (
    Block,
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
from bigote.writer import Writer, is_falsy

__version__ = "0.1.0"

# All module-level functions use this writer
_default_writer = Writer()


def parse(template: str, delimiters: Sequence[str] | None = None) -> tuple[Token, ...]:
    """Parse and cache ``template`` in the default writer.

    Parsing ahead of time avoids parsing on the fly at render time.

    Args:
        template: Template source
        delimiters: Initial (open, close) pair, defaults to ("{{", "}}")

    Returns:
        Top-level tokens of the template.

    Raises:
        ParseError: If ``delimiters`` is not a pair of non-empty strings, or
            on unclosed tags and unopened, mismatched or unclosed sections.

    Example:
        >>> parse("Hi {{name}}")
        (Text(value='Hi ', start=0, end=3), Name(path='name', start=3, end=11))
    """
    return _default_writer.parse(template, delimiters)


def render(
    template: str,
    view: Any = None,
    partials: Mapping[str, str] | Callable[[str], str | None] | None = None,
    config: RenderConfig | Mapping[str, Any] | Sequence[str] | None = None,
) -> str:
    """Render ``template`` with ``view`` using the default writer.

    Args:
        template: Template source
        view: Root view value (mapping, object, sequence or scalar)
        partials: Partial templates by name, or a callable resolving a name
            to a template (None when unknown)
        config: RenderConfig, a mapping with ``delimiters``/``tags`` and
            ``escape`` keys, or a bare delimiter pair

    Returns:
        Rendered output.

    Raises:
        TypeError: If ``template`` is not a string.
        ParseError: On invalid delimiters or structural template errors.
        RenderError: If a lambda section runs without its source text.
    """
    return _default_writer.render(template, view, partials, config)


def clear_cache() -> None:
    """Clear all cached templates in the default writer."""
    _default_writer.clear_cache()


def get_template_cache() -> TemplateCache | None:
    """Return the default writer's template cache (None when disabled)."""
    return _default_writer.cache


def set_template_cache(cache: TemplateCache | None) -> None:
    """Replace the default writer's template cache.

    Pass None to disable caching. Use a thread-safe implementation when
    rendering from several threads.
    """
    _default_writer.cache = cache


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "clear_cache",
    "get_template_cache",
    "set_template_cache",
    # Template cache
    "DictTemplateCache",
    "TemplateCache",
    # Tokens
    "Token",
    "Text",
    "Name",
    "Unescaped",
    "Comment",
    "DelimiterSet",
    "Partial",
    "Block",
    "Section",
    "Inverted",
    # Components
    "Scanner",
    "Parser",
    "parse_template",
    "Context",
    "Writer",
    "is_falsy",
    # View protocol
    "MISSING",
    "Viewable",
    # Configuration
    "DEFAULT_DELIMITERS",
    "RenderConfig",
    "coerce_config",
    # Escaping
    "escape_html",
    # Errors
    "BigoteError",
    "ParseError",
    "RenderError",
    # Profiling
    "RenderAccumulator",
    "profiled_render",
    "get_render_accumulator",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
]
