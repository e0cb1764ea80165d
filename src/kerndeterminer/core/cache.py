"""Contour cache: flattened outlines per (glyph, master).

Entries are built lazily and never invalidated; the font behind the cache
is immutable. Concurrent first requests for one key run a single build,
builds for unrelated keys run in parallel, and completed entries are read
without taking a lock.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from kerndeterminer.core.sampler import flatten_glyph
from kerndeterminer.domain import FlattenedOutline, Font, Glyph

logger = structlog.get_logger(__name__)

CacheKey = tuple[str, str]


@dataclass
class CacheStats:
    """Counters for cache activity."""

    hits: int = 0
    misses: int = 0
    builds: int = 0


class _BuildCell:
    """Once-computed slot for one cache key."""

    __slots__ = ("lock", "value")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.value: FlattenedOutline | None = None


class ContourCache:
    """Memoizes flattened outlines of a font's glyphs.

    Args:
        font: Font to read glyphs from
        builder: Function flattening a glyph (defaults to flatten_glyph)

    Example:
        cache = ContourCache(font)
        outline = cache.get_or_build("A", "Regular")
    """

    def __init__(
        self,
        font: Font,
        builder: Callable[[Glyph], FlattenedOutline] = flatten_glyph,
    ) -> None:
        self._font = font
        self._builder = builder
        self._cells: dict[CacheKey, _BuildCell] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def get_or_build(self, glyph_name: str, master_name: str) -> FlattenedOutline:
        """Return the flattened outline of a glyph, building it on first use.

        Raises:
            MasterNotFoundError: If the font has no such master
            GlyphNotFoundError: If the master has no such glyph
        """
        master = self._font.master(master_name)
        key = (glyph_name, master.name)

        cell = self._cells.get(key)
        if cell is not None and cell.value is not None:
            self._count("hits")
            return cell.value

        with self._lock:
            cell = self._cells.setdefault(key, _BuildCell())

        with cell.lock:
            if cell.value is not None:
                self._count("hits")
                return cell.value

            self._count("misses")
            start = time.perf_counter()
            try:
                outline = self._builder(master.glyph(glyph_name))
            except Exception:
                with self._lock:
                    if self._cells.get(key) is cell:
                        del self._cells[key]
                raise

            cell.value = outline
            self._count("builds")

        logger.debug(
            "Outline flattened",
            glyph=glyph_name,
            master=master.name,
            segments=outline.segment_count,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return outline

    def _count(self, counter: str) -> None:
        with self._lock:
            setattr(self._stats, counter, getattr(self._stats, counter) + 1)

    def __contains__(self, key: object) -> bool:
        cell = self._cells.get(key)  # type: ignore[arg-type]
        return cell is not None and cell.value is not None

    def __len__(self) -> int:
        return sum(1 for cell in list(self._cells.values()) if cell.value is not None)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._cells.clear()

    @property
    def stats(self) -> CacheStats:
        return self._stats
