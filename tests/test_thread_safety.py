"""Thread safety tests for rendering.

Token trees and configs are immutable, and every render builds its own
Context chain, so a parsed template can be rendered from many threads at
once. These tests use real threading to catch shared-state bugs.
"""

from concurrent.futures import ThreadPoolExecutor

from bigote import RenderConfig, Writer, parse
from bigote.context import Context


class TestConcurrentRendering:
    def test_shared_token_tree(self) -> None:
        template = "{{#items}}<{{name}}>{{/items}}"
        tokens = parse(template)
        writer = Writer(cache=None)

        def work(n: int) -> str:
            view = {"items": [{"name": f"{n}-{i}"} for i in range(20)]}
            return writer.render_tokens(tokens, Context(view), original_template=template)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(64)))

        for n, out in enumerate(results):
            assert out == "".join(f"<{n}-{i}>" for i in range(20))

    def test_per_call_config_does_not_leak(self) -> None:
        writer = Writer(cache=None)
        custom = RenderConfig(delimiters=("<%", "%>"))

        def work(n: int) -> str:
            if n % 2:
                return writer.render("<%v%>{{v}}", {"v": n}, config=custom)
            return writer.render("<%v%>{{v}}", {"v": n})

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(40)))

        for n, out in enumerate(results):
            assert out == (f"{n}{{{{v}}}}" if n % 2 else f"<%v%>{n}")
