"""Flattened outlines and bounding boxes.

A FlattenedOutline is the polyline approximation of one glyph in one master.
Besides the polylines it keeps the segment arrays the distance engine works
on, so they are built once per glyph rather than once per distance query.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box in font units."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    def translate(self, dx: float = 0.0, dy: float = 0.0) -> "BoundingBox":
        return BoundingBox(self.x_min + dx, self.y_min + dy, self.x_max + dx, self.y_max + dy)

    def vertical_gap(self, other: "BoundingBox") -> float:
        """Vertical separation between the boxes (0 if their y ranges overlap)."""
        return max(0.0, other.y_min - self.y_max, self.y_min - other.y_max)

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.x_min, self.y_min, self.x_max, self.y_max)


def _readonly(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class FlattenedOutline:
    """Polyline approximation of a glyph's contours.

    Attributes:
        glyph_name: Name of the source glyph
        polylines: One closed polyline per contour, each an (n, 2) array
            whose last point connects back to the first
        starts: (m, 2) array of segment start points over all polylines
        ends: (m, 2) array of segment end points
        segment_boxes: (m, 4) array of per-segment (x_min, y_min, x_max, y_max)
        bbox: Combined bounding box, None for an empty outline
        advance_width: Advance width of the source glyph
        anchors: Anchor positions of the source glyph
    """

    glyph_name: str
    polylines: tuple[np.ndarray, ...]
    starts: np.ndarray
    ends: np.ndarray
    segment_boxes: np.ndarray
    bbox: BoundingBox | None
    advance_width: float = 0.0
    anchors: Mapping[str, tuple[float, float]] = field(default_factory=dict)

    @classmethod
    def from_polylines(
        cls,
        glyph_name: str,
        polylines: Iterable[np.ndarray],
        advance_width: float = 0.0,
        anchors: Mapping[str, tuple[float, float]] | None = None,
    ) -> "FlattenedOutline":
        """Build an outline, deriving segments and boxes from the polylines.

        Empty polylines are dropped.
        """
        kept = tuple(
            _readonly(np.array(line, dtype=float).reshape(-1, 2))
            for line in polylines
            if len(line) > 0
        )

        if kept:
            starts = np.concatenate(kept)
            ends = np.concatenate([np.roll(line, -1, axis=0) for line in kept])
            segment_boxes = np.column_stack(
                (
                    np.minimum(starts[:, 0], ends[:, 0]),
                    np.minimum(starts[:, 1], ends[:, 1]),
                    np.maximum(starts[:, 0], ends[:, 0]),
                    np.maximum(starts[:, 1], ends[:, 1]),
                )
            )
            lo = starts.min(axis=0)
            hi = starts.max(axis=0)
            bbox = BoundingBox(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))
        else:
            starts = np.empty((0, 2))
            ends = np.empty((0, 2))
            segment_boxes = np.empty((0, 4))
            bbox = None

        return cls(
            glyph_name=glyph_name,
            polylines=kept,
            starts=_readonly(starts),
            ends=_readonly(ends),
            segment_boxes=_readonly(segment_boxes),
            bbox=bbox,
            advance_width=float(advance_width),
            anchors=MappingProxyType(dict(anchors or {})),
        )

    @property
    def segment_count(self) -> int:
        return len(self.starts)

    def is_empty(self) -> bool:
        return self.bbox is None

    @property
    def width(self) -> float:
        """Width used for the tuck bound: advance width, else ink extent."""
        if self.advance_width > 0:
            return self.advance_width
        return self.bbox.width if self.bbox is not None else 0.0
