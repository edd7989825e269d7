"""Bigote RenderAccumulator: opt-in profiling for template rendering.

Accumulates, for every render inside a ``profiled_render()`` block:
- render() calls (lambda sub-renders included) and total output length
- Template parses and template cache hits (partials and lambda
  sub-renders included)
- Higher-order section calls and partials that could not be found

Zero overhead when disabled (get_render_accumulator() returns None).

Example:
    from bigote import render
    from bigote.profiling import profiled_render

    with profiled_render() as metrics:
        render("Hello {{name}}", {"name": "World"})

    print(metrics.summary())
    # {"total_ms": 0.1, "render_calls": 1, "parse_calls": 1, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class RenderAccumulator:
    """Accumulated metrics during template rendering.

    Attributes:
        start_time: Profiling start timestamp.
        render_calls: Number of render() calls recorded.
        output_length: Total length of rendered output.
        parse_calls: Number of templates actually parsed.
        cache_hits: Number of parses served from the template cache.
        lambda_calls: Number of higher-order sections invoked.
        missing_partials: Names of partials that resolved to nothing, in
            lookup order (repeats included).

    """

    start_time: float = field(default_factory=perf_counter)
    render_calls: int = 0
    output_length: int = 0
    parse_calls: int = 0
    cache_hits: int = 0
    lambda_calls: int = 0
    missing_partials: list[str] = field(default_factory=list)

    def record_render(self, output_length: int) -> None:
        """Record a completed render call."""
        self.render_calls += 1
        self.output_length += output_length

    def record_parse(self, *, cached: bool) -> None:
        """Record a parse request, served from cache or not."""
        if cached:
            self.cache_hits += 1
        else:
            self.parse_calls += 1

    def record_lambda(self) -> None:
        self.lambda_calls += 1

    def record_missing_partial(self, name: str) -> None:
        self.missing_partials.append(name)

    @property
    def cache_hit_rate(self) -> float:
        """Share of parse requests served from the cache (0.0 when none)."""
        requests = self.parse_calls + self.cache_hits
        return self.cache_hits / requests if requests else 0.0

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of render metrics.

        Returns:
            Dict with total_ms, render_calls, output_length, parse_calls,
            cache_hits, cache_hit_rate, lambda_calls, missing_partials
            (distinct names, sorted).

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "render_calls": self.render_calls,
            "output_length": self.output_length,
            "parse_calls": self.parse_calls,
            "cache_hits": self.cache_hits,
            "cache_hit_rate": round(self.cache_hit_rate, 3),
            "lambda_calls": self.lambda_calls,
            "missing_partials": sorted(set(self.missing_partials)),
        }


_accumulator: ContextVar[RenderAccumulator | None] = ContextVar(
    "render_accumulator",
    default=None,
)


def get_render_accumulator() -> RenderAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_render() -> Iterator[RenderAccumulator]:
    """Collect render metrics for the duration of the with block.

    Profiling follows the current context, so renders in other threads or
    asyncio tasks started outside the block are not counted.

    Yields:
        RenderAccumulator populated by every render inside the block.

    """
    acc = RenderAccumulator()
    token: Token[RenderAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = ["RenderAccumulator", "get_render_accumulator", "profiled_render"]
