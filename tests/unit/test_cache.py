"""Unit tests for the glyph cache."""

from collections.abc import Callable

import pytest

from graffix.core.cache import DEFAULT_TTL_SECONDS, GlyphCache
from graffix.domain.glyph import ProcessedGlyph


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def glyph(make_glyph: Callable[..., ProcessedGlyph]) -> ProcessedGlyph:
    return make_glyph("o", asset_key="o:alternate")


class TestGlyphCache:
    """Tests for GlyphCache."""

    def test_default_ttl(self) -> None:
        """Test entries live thirty minutes by default."""
        assert DEFAULT_TTL_SECONDS == 1800
        assert GlyphCache().ttl_seconds == 1800

    def test_miss(self, clock: FakeClock) -> None:
        """Test reading an absent key."""
        cache = GlyphCache(clock=clock)
        assert cache.get("a:standard") is None
        assert cache.misses == 1

    def test_hit_returns_same_object(self, clock: FakeClock, glyph: ProcessedGlyph) -> None:
        """Test a fresh entry is returned as stored."""
        cache = GlyphCache(clock=clock)
        cache.set("o:alternate", glyph)
        clock.now += 60
        assert cache.get("o:alternate") is glyph
        assert cache.hits == 1

    def test_valid_just_before_deadline(self, clock: FakeClock, glyph: ProcessedGlyph) -> None:
        """Test an entry read just before its TTL elapses is still valid."""
        cache = GlyphCache(ttl_seconds=1800, clock=clock)
        cache.set("o:alternate", glyph)
        clock.now += 1799.999
        assert cache.get("o:alternate") is glyph

    def test_expired_at_deadline(self, clock: FakeClock, glyph: ProcessedGlyph) -> None:
        """Test an entry read exactly at its TTL is expired and removed."""
        cache = GlyphCache(ttl_seconds=1800, clock=clock)
        cache.set("o:alternate", glyph)
        clock.now += 1800
        assert cache.get("o:alternate") is None
        assert "o:alternate" not in cache
        assert len(cache) == 0

    def test_contains_respects_deadline(self, clock: FakeClock, glyph: ProcessedGlyph) -> None:
        """Test membership follows the same deadline as reads, without counting."""
        cache = GlyphCache(ttl_seconds=1800, clock=clock)
        cache.set("k", glyph)
        assert "k" in cache
        clock.now += 1800
        assert "k" not in cache
        assert 1 not in cache
        assert (cache.hits, cache.misses) == (0, 0)

    def test_overwrite_refreshes(self, clock: FakeClock, make_glyph: Callable[..., ProcessedGlyph]) -> None:
        """Test the last write wins and restarts the entry's lifetime."""
        cache = GlyphCache(ttl_seconds=10, clock=clock)
        first = make_glyph("a")
        second = make_glyph("a")
        cache.set("a:standard", first)
        clock.now += 8
        cache.set("a:standard", second)
        clock.now += 8
        assert cache.get("a:standard") is second

    def test_keys_are_independent(self, clock: FakeClock, make_glyph: Callable[..., ProcessedGlyph]) -> None:
        """Test variants of one letter are cached separately."""
        cache = GlyphCache(clock=clock)
        standard = make_glyph("o")
        alternate = make_glyph("o", asset_key="o:alternate")
        cache.set("o:standard", standard)
        cache.set("o:alternate", alternate)
        assert cache.get("o:standard") is standard
        assert cache.get("o:alternate") is alternate

    def test_clear(self, clock: FakeClock, glyph: ProcessedGlyph) -> None:
        """Test clearing drops every entry."""
        cache = GlyphCache(clock=clock)
        cache.set("o:alternate", glyph)
        cache.clear()
        assert len(cache) == 0
