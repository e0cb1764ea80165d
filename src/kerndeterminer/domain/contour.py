"""Core geometric types for contour representation.

This module defines the outline types read from a font source:
- Point: A 2D point with curve type information
- PointType: Enum for point type on a curve
- Contour: A closed contour (cyclic point sequence)
"""

from dataclasses import dataclass, field
from enum import Enum, auto


class PointType(Enum):
    """Point type on a contour.

    Points can be:
    - ON_CURVE: Point on the actual curve
    - OFF_CURVE_QUAD: Quadratic Bezier control point (TrueType)
    - OFF_CURVE_CUBIC: Cubic Bezier control point (PostScript/CFF)
    """

    ON_CURVE = auto()
    OFF_CURVE_QUAD = auto()
    OFF_CURVE_CUBIC = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space with curve metadata.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
        point_type: Type of point (on-curve or control point)
    """

    x: float
    y: float
    point_type: PointType = PointType.ON_CURVE

    @property
    def is_on_curve(self) -> bool:
        return self.point_type == PointType.ON_CURVE

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True)
class Contour:
    """A closed contour representing a shape boundary.

    The point sequence is cyclic: the segment from the last point back to
    the first closes the contour. Off-curve points between two on-curve
    points describe a quadratic or cubic Bezier segment.

    Attributes:
        points: Points forming the contour
    """

    points: tuple[Point, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def is_empty(self) -> bool:
        return not self.points

