"""Tests for bigote.cache: parsed template caching."""

from bigote.cache import DictTemplateCache, TemplateCache
from bigote.parser import parse_template
from bigote.writer import Writer


class RecordingCache:
    """TemplateCache that logs every call."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._data: dict = {}

    def get(self, key):
        self.calls.append("get")
        return self._data.get(key)

    def set(self, key, tokens) -> None:
        self.calls.append("set")
        self._data[key] = tokens

    def clear(self) -> None:
        self.calls.append("clear")
        self._data.clear()


class TestDictTemplateCache:
    def test_get_missing(self) -> None:
        assert DictTemplateCache().get(("x", ("{{", "}}"))) is None

    def test_set_then_get(self) -> None:
        cache = DictTemplateCache()
        key = ("Hi {{name}}", ("{{", "}}"))
        tokens = parse_template("Hi {{name}}")
        cache.set(key, tokens)
        assert cache.get(key) is tokens
        assert len(cache) == 1

    def test_delimiters_distinguish_keys(self) -> None:
        cache = DictTemplateCache()
        cache.set(("t", ("{{", "}}")), ())
        assert cache.get(("t", ("<%", "%>"))) is None

    def test_clear(self) -> None:
        cache = DictTemplateCache()
        cache.set(("t", ("{{", "}}")), ())
        cache.clear()
        assert len(cache) == 0


class TestWriterWithCustomCache:
    def test_protocol_is_structural(self) -> None:
        cache: TemplateCache = RecordingCache()
        writer = Writer(cache=cache)
        writer.parse("{{a}}")
        writer.parse("{{a}}")
        assert cache.calls == ["get", "set", "get"]

    def test_clear_delegates(self) -> None:
        cache = RecordingCache()
        Writer(cache=cache).clear_cache()
        assert cache.calls == ["clear"]

    def test_partials_share_cache(self) -> None:
        cache = DictTemplateCache()
        writer = Writer(cache=cache)
        writer.render("{{>p}}{{>p}}", {}, {"p": "x"})
        assert len(cache) == 2
        assert cache.get(("x", ("{{", "}}"))) is not None

    def test_default_delimiters_share_key(self) -> None:
        writer = Writer()
        assert writer.parse("{{a}}") is writer.parse("{{a}}", ("{{", "}}"))
