"""Domain models for kerndeterminer.

This module contains the models representing fonts, masters, glyphs,
contours and the flattened outlines derived from them. All models are:

- Immutable once built
- Independent of fontTools/ufoLib2 implementation details

Key classes:
- Point: A 2D point with curve metadata
- Contour: A closed contour representing a shape boundary
- Glyph: A single glyph with its contours and metrics
- Master / Font: Named design variants and their container
- BoundingBox / FlattenedOutline: Polyline approximation of a glyph
- KernQuery: Parameters of one kern determination
"""

from kerndeterminer.domain.contour import Contour, Point, PointType
from kerndeterminer.domain.font import Font, Master
from kerndeterminer.domain.glyph import Glyph
from kerndeterminer.domain.outline import BoundingBox, FlattenedOutline
from kerndeterminer.domain.query import KernQuery

__all__: list[str] = [
    # Enums
    "PointType",
    # Core types
    "Point",
    "Contour",
    "Glyph",
    "Master",
    "Font",
    "BoundingBox",
    "FlattenedOutline",
    "KernQuery",
]
