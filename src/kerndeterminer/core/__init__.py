"""Core algorithms for kerndeterminer.

This module contains:

- Outline sampling (Bezier flattening into polylines)
- The contour cache (flattened outline per glyph and master)
- The distance engine (closest-point distance between placed outlines)
- The kern solver (offset search under the tuck bound)
- The KernDeterminer facade

The sampler, distance engine and solver are pure; only the cache holds
mutable state.
"""

from kerndeterminer.core.cache import CacheStats, ContourCache
from kerndeterminer.core.determiner import KernDeterminer
from kerndeterminer.core.distance import min_distance, segment_distances
from kerndeterminer.core.sampler import FLATTEN_TOLERANCE, contour_to_polyline, flatten_glyph
from kerndeterminer.core.solver import KernSolver

__all__ = [
    "FLATTEN_TOLERANCE",
    "CacheStats",
    "ContourCache",
    "KernDeterminer",
    "KernSolver",
    "contour_to_polyline",
    "flatten_glyph",
    "min_distance",
    "segment_distances",
]
