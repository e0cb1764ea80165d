"""Unit tests for the contour cache."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from kerndeterminer.core.cache import ContourCache
from kerndeterminer.core.sampler import flatten_glyph
from kerndeterminer.domain import Font, Master
from kerndeterminer.exceptions import GlyphNotFoundError, MasterNotFoundError


@pytest.fixture
def font(make_glyph) -> Font:
    regular = Master.from_glyphs(
        "Regular",
        [
            make_glyph("a", (0, 0, 100, 200), advance_width=100),
            make_glyph("b", (0, 0, 50, 50), advance_width=60),
        ],
    )
    bold = Master.from_glyphs("Bold", [make_glyph("a", (0, 0, 150, 200), advance_width=150)])
    return Font([regular, bold], aliases={"Heavy": "Bold"})


class CountingBuilder:
    """Builder that counts calls and can be slowed down."""

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, glyph):
        with self._lock:
            self.calls.append(glyph.name)
        if self.delay:
            time.sleep(self.delay)
        return flatten_glyph(glyph)


class TestContourCache:
    """Tests for ContourCache."""

    def test_builds_once(self, font):
        builder = CountingBuilder()
        cache = ContourCache(font, builder=builder)

        first = cache.get_or_build("a", "Regular")
        second = cache.get_or_build("a", "Regular")

        assert first is second
        assert builder.calls == ["a"]
        assert cache.stats.builds == 1
        assert cache.stats.hits == 1

    def test_masters_are_separate_entries(self, font):
        cache = ContourCache(font)
        regular = cache.get_or_build("a", "Regular")
        bold = cache.get_or_build("a", "Bold")
        assert regular.bbox.width == 100
        assert bold.bbox.width == 150
        assert len(cache) == 2

    def test_alias_shares_entry(self, font):
        builder = CountingBuilder()
        cache = ContourCache(font, builder=builder)
        assert cache.get_or_build("a", "Heavy") is cache.get_or_build("a", "Bold")
        assert builder.calls == ["a"]
        assert ("a", "Bold") in cache

    def test_unknown_master(self, font):
        cache = ContourCache(font)
        with pytest.raises(MasterNotFoundError) as exc_info:
            cache.get_or_build("a", "Light")
        assert exc_info.value.available == ["Regular", "Bold"]

    def test_unknown_glyph_leaves_no_entry(self, font):
        cache = ContourCache(font)
        with pytest.raises(GlyphNotFoundError):
            cache.get_or_build("b", "Bold")
        assert len(cache) == 0
        assert ("b", "Bold") not in cache
        # Cache still works afterwards
        assert cache.get_or_build("b", "Regular").advance_width == 60

    def test_builder_failure_is_retried(self, font):
        attempts = []

        def flaky(glyph):
            attempts.append(glyph.name)
            if len(attempts) == 1:
                raise RuntimeError("boom")
            return flatten_glyph(glyph)

        cache = ContourCache(font, builder=flaky)
        with pytest.raises(RuntimeError):
            cache.get_or_build("a", "Regular")
        assert cache.get_or_build("a", "Regular").glyph_name == "a"
        assert attempts == ["a", "a"]

    def test_concurrent_same_key_builds_once(self, font):
        builder = CountingBuilder(delay=0.05)
        cache = ContourCache(font, builder=builder)

        with ThreadPoolExecutor(max_workers=8) as executor:
            outlines = list(executor.map(lambda _: cache.get_or_build("a", "Regular"), range(16)))

        assert builder.calls == ["a"]
        assert all(outline is outlines[0] for outline in outlines)

    def test_concurrent_distinct_keys_build_in_parallel(self, font):
        builder = CountingBuilder(delay=0.2)
        cache = ContourCache(font, builder=builder)
        keys = [("a", "Regular"), ("b", "Regular"), ("a", "Bold")]

        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=3) as executor:
            list(executor.map(lambda key: cache.get_or_build(*key), keys))
        elapsed = time.perf_counter() - start

        assert sorted(builder.calls) == ["a", "a", "b"]
        assert elapsed < 0.2 * len(keys)

    def test_stats_consistent_under_threads(self, font):
        cache = ContourCache(font, builder=CountingBuilder(delay=0.01))
        keys = [("a", "Regular"), ("b", "Regular"), ("a", "Bold")] * 200

        with ThreadPoolExecutor(max_workers=16) as executor:
            list(executor.map(lambda key: cache.get_or_build(*key), keys))

        stats = cache.stats
        assert stats.builds == 3
        assert stats.misses == 3
        assert stats.hits + stats.misses == len(keys)

    def test_clear(self, font):
        builder = CountingBuilder()
        cache = ContourCache(font, builder=builder)
        cache.get_or_build("a", "Regular")
        cache.clear()
        assert len(cache) == 0
        cache.get_or_build("a", "Regular")
        assert builder.calls == ["a", "a"]
