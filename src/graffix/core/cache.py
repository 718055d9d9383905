"""Time-limited memoization of rasterized glyphs."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from graffix.domain.glyph import ProcessedGlyph

DEFAULT_TTL_SECONDS = 30 * 60


@dataclass(frozen=True)
class CacheEntry:
    """A cached glyph and the time it was stored."""

    glyph: ProcessedGlyph
    timestamp: float


class GlyphCache:
    """Keyed glyph cache with lazy expiry.

    An entry stored at time T is returned by reads before T + ttl and is
    dropped by the first read at or after that deadline. There is no
    background sweep. Writes replace whole entries, last write wins.

    Example:
        cache = GlyphCache(ttl_seconds=60)
        cache.set("o:alternate", glyph)
        cache.get("o:alternate")
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> ProcessedGlyph | None:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        if self._is_expired(entry):
            self._entries.pop(key, None)
            self.misses += 1
            return None

        self.hits += 1
        return entry.glyph

    def set(self, key: str, glyph: ProcessedGlyph) -> None:
        self._entries[key] = CacheEntry(glyph=glyph, timestamp=self._clock())

    def clear(self) -> None:
        self._entries = {}

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.timestamp >= self.ttl_seconds

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key) if isinstance(key, str) else None
        return entry is not None and not self._is_expired(entry)

    def __len__(self) -> int:
        return len(self._entries)
