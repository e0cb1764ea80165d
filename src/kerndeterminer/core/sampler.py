"""Outline sampler: turns glyph contours into flattened polylines."""

import numpy as np
from fontTools.pens.basePen import decomposeSuperBezierSegment

from kerndeterminer.core._bezier import Vec, flatten_cubic, flatten_quadratic
from kerndeterminer.domain import Contour, FlattenedOutline, Glyph, Point, PointType

# Maximum deviation between the polyline and the true curve, in font units
FLATTEN_TOLERANCE = 0.5


def _expand_implied_points(points: tuple[Point, ...]) -> list[Point]:
    """Insert TrueType implied on-curve points and rotate to an on-curve start.

    Two consecutive quadratic off-curve points imply an on-curve point at
    their midpoint. A contour made only of quadratic off-curve points is
    valid TrueType; it gets an implied point between every pair.
    """
    n = len(points)
    expanded: list[Point] = []
    for i, current in enumerate(points):
        expanded.append(current)
        following = points[(i + 1) % n]
        if (
            n > 1
            and current.point_type == PointType.OFF_CURVE_QUAD
            and following.point_type == PointType.OFF_CURVE_QUAD
        ):
            expanded.append(
                Point((current.x + following.x) / 2, (current.y + following.y) / 2)
            )

    start = next((i for i, p in enumerate(expanded) if p.is_on_curve), None)
    if start is None:
        # No on-curve point to anchor curves on; use the control polygon.
        return [Point(p.x, p.y) for p in expanded]
    return expanded[start:] + expanded[:start]


def _flatten_super_bezier(p0: Vec, controls: list[Vec], p_end: Vec, tolerance: float) -> list[Vec]:
    """Flatten a run of two or more off-curve points as chained cubics.

    A run longer than two is a UFO superbezier; fontTools splits it into
    plain cubics the same way pens draw it.
    """
    points = [p0]
    start = p0
    for c1, c2, end in decomposeSuperBezierSegment([*controls, p_end]):
        points.extend(flatten_cubic(start, c1, c2, end, tolerance)[1:])
        start = end
    return points


def contour_to_polyline(contour: Contour, tolerance: float = FLATTEN_TOLERANCE) -> np.ndarray:
    """Flatten one closed contour.

    Args:
        contour: Contour with on-curve and off-curve points
        tolerance: Maximum deviation from the true curve

    Returns:
        (n, 2) array of polyline vertices; the closing edge from the last
        vertex back to the first is implied. Empty for an empty contour.
    """
    if contour.is_empty():
        return np.empty((0, 2))

    points = _expand_implied_points(contour.points)
    n = len(points)
    vertices: list[Vec] = []

    i = 0
    while i < n:
        start = points[i]
        j = i + 1
        controls: list[Point] = []
        while j < n + 1 and not points[j % n].is_on_curve:
            controls.append(points[j % n])
            j += 1
        end = points[j % n]

        p0 = start.to_tuple()
        p_end = end.to_tuple()
        if len(controls) == 1:
            segment = flatten_quadratic(p0, controls[0].to_tuple(), p_end, tolerance)
        elif controls:
            segment = _flatten_super_bezier(
                p0, [c.to_tuple() for c in controls], p_end, tolerance
            )
        else:
            segment = [p0, p_end]

        vertices.extend(segment[:-1])
        i = j

    deduped: list[Vec] = []
    for vertex in vertices:
        if not deduped or vertex != deduped[-1]:
            deduped.append(vertex)
    if len(deduped) > 1 and deduped[0] == deduped[-1]:
        deduped.pop()

    return np.array(deduped, dtype=float).reshape(-1, 2)


def flatten_glyph(glyph: Glyph, tolerance: float = FLATTEN_TOLERANCE) -> FlattenedOutline:
    """Flatten every contour of a glyph.

    Args:
        glyph: Decomposed glyph
        tolerance: Maximum deviation from the true curves

    Returns:
        FlattenedOutline carrying the glyph's advance width and anchors
    """
    polylines = [contour_to_polyline(contour, tolerance) for contour in glyph.contours]
    return FlattenedOutline.from_polylines(
        glyph_name=glyph.name,
        polylines=polylines,
        advance_width=glyph.advance_width,
        anchors=glyph.anchors,
    )
