"""Internal Bezier curve flattening algorithms.

This is an internal module containing helper functions for the outline
sampler. Not intended for public use.

Curves are subdivided at t=0.5 with De Casteljau's algorithm until every
control point lies within the tolerance of the chord. The curve lies in the
convex hull of its control points, so that bounds the true deviation.
Subdivision runs on an explicit stack rather than by recursion.
"""

import math

Vec = tuple[float, float]

# 2**16 pieces per segment; only reached by degenerate input
MAX_DEPTH = 16


def _mid(a: Vec, b: Vec) -> Vec:
    return ((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5)


def _distance_to_chord(p: Vec, a: Vec, b: Vec) -> float:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq < 1e-12:
        return math.hypot(p[0] - a[0], p[1] - a[1])

    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(p[0] - (a[0] + t * dx), p[1] - (a[1] + t * dy))


def flatten_quadratic(p0: Vec, p1: Vec, p2: Vec, tolerance: float) -> list[Vec]:
    """Flatten a quadratic Bezier curve.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        tolerance: Maximum distance from true curve

    Returns:
        Points approximating the curve, both endpoints included
    """
    points = [p0]
    stack = [(p0, p1, p2, 0)]

    while stack:
        q0, q1, q2, depth = stack.pop()

        if depth >= MAX_DEPTH or _distance_to_chord(q1, q0, q2) <= tolerance:
            points.append(q2)
            continue

        q01 = _mid(q0, q1)
        q12 = _mid(q1, q2)
        mid = _mid(q01, q12)

        # Right half first so the left half is emitted first
        stack.append((mid, q12, q2, depth + 1))
        stack.append((q0, q01, mid, depth + 1))

    return points


def flatten_cubic(p0: Vec, p1: Vec, p2: Vec, p3: Vec, tolerance: float) -> list[Vec]:
    """Flatten a cubic Bezier curve.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        tolerance: Maximum distance from true curve

    Returns:
        Points approximating the curve, both endpoints included
    """
    points = [p0]
    stack = [(p0, p1, p2, p3, 0)]

    while stack:
        q0, q1, q2, q3, depth = stack.pop()

        if depth >= MAX_DEPTH or (
            _distance_to_chord(q1, q0, q3) <= tolerance
            and _distance_to_chord(q2, q0, q3) <= tolerance
        ):
            points.append(q3)
            continue

        # First level
        q01 = _mid(q0, q1)
        q12 = _mid(q1, q2)
        q23 = _mid(q2, q3)
        # Second level
        r0 = _mid(q01, q12)
        r1 = _mid(q12, q23)
        # Third level (curve point at t=0.5)
        mid = _mid(r0, r1)

        stack.append((mid, r1, q23, q3, depth + 1))
        stack.append((q0, q01, r0, mid, depth + 1))

    return points
