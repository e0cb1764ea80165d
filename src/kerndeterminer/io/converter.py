"""Converters between pen recordings and domain models.

Both fontTools glyph sets and ufoLib2 layers can draw a glyph into a pen.
Drawing into a DecomposingRecordingPen flattens components into plain
contours, which are then turned into domain Contours here.
"""

from collections.abc import Mapping
from typing import Any

from fontTools.pens.recordingPen import DecomposingRecordingPen

from kerndeterminer.domain.contour import Contour, Point, PointType
from kerndeterminer.domain.glyph import Glyph


def draw_glyph(
    name: str,
    source_glyph: Any,
    glyph_set: Mapping[str, Any],
    advance_width: float,
    anchors: Mapping[str, tuple[float, float]] | None = None,
) -> Glyph:
    """Draw a source glyph and convert it to a domain Glyph.

    Args:
        name: Name of the glyph
        source_glyph: fontTools or ufoLib2 glyph object with a ``draw`` method
        glyph_set: Mapping used to resolve component references
        advance_width: Advance width in font units
        anchors: Anchor positions, if the source has any

    Returns:
        Domain Glyph with components decomposed
    """
    pen = DecomposingRecordingPen(glyph_set)
    source_glyph.draw(pen)

    return Glyph(
        name=name,
        contours=recording_to_contours(pen.value),
        advance_width=float(advance_width or 0),
        anchors=anchors or {},
    )


def recording_to_contours(recording: list[tuple[str, tuple[Any, ...]]]) -> list[Contour]:
    """Convert RecordingPen recording to list of Contour objects.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic, last may be None
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ()) / ('endPath', ())

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        List of Contour objects
    """
    contours: list[Contour] = []
    current_points: list[Point] = []

    for command, args in recording:
        if command == "moveTo":
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []

            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "lineTo":
            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "qCurveTo":
            for i, pt in enumerate(args):
                if pt is None:
                    # All-off-curve TrueType contour
                    continue
                x, y = pt
                if i < len(args) - 1:
                    current_points.append(Point(x, y, PointType.OFF_CURVE_QUAD))
                else:
                    current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "curveTo":
            *controls, (x3, y3) = args
            for x, y in controls:
                current_points.append(Point(x, y, PointType.OFF_CURVE_CUBIC))
            current_points.append(Point(x3, y3, PointType.ON_CURVE))

        elif command == "closePath" or command == "endPath":
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []

    if current_points:
        contours.append(Contour(points=current_points))

    return contours
