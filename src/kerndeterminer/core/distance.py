"""Distance engine: closest-point distance between two flattened outlines.

The left outline is raised by ``y_offset`` and the right outline is placed
at ``x_offset`` (its pen position relative to the left glyph's origin). Only
the relative placement matters, so the right outline is moved by
``(x_offset, -y_offset)`` and the left one stays put.

The exact distance between two segments is taken over all candidate pairs
with numpy. Candidates are pruned in three passes: segments far from the
other outline's bounding box, pairs whose bounding boxes are farther apart
than an upper bound, and finally pairs sorted by that box gap are evaluated
in chunks until the gap exceeds the best distance found so far.
"""

import numpy as np

from kerndeterminer.domain import FlattenedOutline
from kerndeterminer.exceptions import EmptyOutlineError

CHUNK_SIZE = 256


def _cross(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    """Z component of (b - a) x (c - a), row-wise."""
    return (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])


def point_segment_distances(points: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Row-wise distance from points to segments a-b.

    Zero-length segments degrade to point-to-point distances.
    """
    ab = b - a
    length_sq = np.einsum("ij,ij->i", ab, ab)
    t = np.einsum("ij,ij->i", points - a, ab) / np.where(length_sq > 0.0, length_sq, 1.0)
    t = np.clip(t, 0.0, 1.0)
    offset = points - (a + t[:, None] * ab)
    return np.hypot(offset[:, 0], offset[:, 1])


def segment_distances(
    p0: np.ndarray, p1: np.ndarray, q0: np.ndarray, q1: np.ndarray
) -> np.ndarray:
    """Row-wise minimum distance between segments p0-p1 and q0-q1.

    In the plane two segments that do not cross are closest at an endpoint
    of one of them, so the four endpoint-to-segment distances cover the
    perpendicular-foot case. Crossing segments are at distance 0.
    """
    distances = np.minimum.reduce(
        [
            point_segment_distances(p0, q0, q1),
            point_segment_distances(p1, q0, q1),
            point_segment_distances(q0, p0, p1),
            point_segment_distances(q1, p0, p1),
        ]
    )
    crossing = (_cross(q0, q1, p0) * _cross(q0, q1, p1) < 0.0) & (
        _cross(p0, p1, q0) * _cross(p0, p1, q1) < 0.0
    )
    distances[crossing] = 0.0
    return distances


def _box_gaps(boxes: np.ndarray, box: np.ndarray) -> np.ndarray:
    """Distance between each row of ``boxes`` and a single box."""
    gx = np.maximum(0.0, np.maximum(box[0] - boxes[:, 2], boxes[:, 0] - box[2]))
    gy = np.maximum(0.0, np.maximum(box[1] - boxes[:, 3], boxes[:, 1] - box[3]))
    return np.hypot(gx, gy)


def _pairwise_box_gaps(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """(len(a), len(b)) matrix of distances between boxes."""
    gx = np.maximum(
        0.0, np.maximum(b[None, :, 0] - a[:, None, 2], a[:, None, 0] - b[None, :, 2])
    )
    gy = np.maximum(
        0.0, np.maximum(b[None, :, 1] - a[:, None, 3], a[:, None, 1] - b[None, :, 3])
    )
    return np.hypot(gx, gy)


def winding_number(point: np.ndarray, starts: np.ndarray, ends: np.ndarray) -> int:
    """Winding number of the closed polylines given as segments around a point."""
    x, y = point
    y0 = starts[:, 1]
    y1 = ends[:, 1]
    side = _cross(starts, ends, np.broadcast_to(point, starts.shape))
    upward = (y0 <= y) & (y1 > y) & (side > 0.0)
    downward = (y0 > y) & (y1 <= y) & (side < 0.0)
    return int(np.count_nonzero(upward)) - int(np.count_nonzero(downward))


def _inside(polylines: tuple[np.ndarray, ...], shift: np.ndarray, outline: FlattenedOutline) -> bool:
    """True if any shifted polyline lies in the filled area of ``outline``."""
    bbox = outline.bbox
    for line in polylines:
        x, y = line[0] + shift
        if not (bbox.x_min <= x <= bbox.x_max and bbox.y_min <= y <= bbox.y_max):
            continue
        if winding_number(np.array((x, y)), outline.starts, outline.ends) != 0:
            return True
    return False


def _upper_bound(left_points: np.ndarray, right_points: np.ndarray, lbox, rbox) -> float:
    """Distance between some boundary points of the two outlines."""
    l_index = int(np.argmin(_box_gaps(np.hstack((left_points, left_points)), rbox)))
    r_index = int(np.argmin(_box_gaps(np.hstack((right_points, right_points)), lbox)))
    from_left = np.hypot(*(right_points - left_points[l_index]).T).min()
    from_right = np.hypot(*(left_points - right_points[r_index]).T).min()
    return float(min(from_left, from_right))


def min_distance(
    left: FlattenedOutline,
    right: FlattenedOutline,
    x_offset: float = 0.0,
    y_offset: float = 0.0,
) -> float:
    """Minimum distance between the boundaries of two placed outlines.

    Args:
        left: Left outline, raised by ``y_offset``
        right: Right outline, placed at ``x_offset``
        x_offset: Horizontal position of the right outline
        y_offset: Vertical shift of the left outline

    Returns:
        Non-negative distance in font units; 0 when the outlines touch or
        overlap (including one lying inside the other's filled area)

    Raises:
        EmptyOutlineError: If either outline has no contours
    """
    if left.is_empty():
        raise EmptyOutlineError(left.glyph_name)
    if right.is_empty():
        raise EmptyOutlineError(right.glyph_name)

    shift = np.array((x_offset, -y_offset), dtype=float)
    lbox = np.array(left.bbox.to_tuple())
    rbox = np.array(right.bbox.translate(x_offset, -y_offset).to_tuple())

    right_starts = right.starts + shift
    right_ends = right.ends + shift
    right_boxes = right.segment_boxes + np.concatenate((shift, shift))

    best = _upper_bound(left.starts, right_starts, lbox, rbox)
    if best == 0.0:
        return 0.0

    left_keep = np.nonzero(_box_gaps(left.segment_boxes, rbox) <= best)[0]
    right_keep = np.nonzero(_box_gaps(right_boxes, lbox) <= best)[0]

    if len(left_keep) and len(right_keep):
        gaps = _pairwise_box_gaps(left.segment_boxes[left_keep], right_boxes[right_keep])
        ii, jj = np.nonzero(gaps <= best)
        lower = gaps[ii, jj]
        order = np.argsort(lower, kind="stable")

        for chunk_start in range(0, len(order), CHUNK_SIZE):
            chunk = order[chunk_start : chunk_start + CHUNK_SIZE]
            if lower[chunk[0]] >= best:
                break
            li = left_keep[ii[chunk]]
            ri = right_keep[jj[chunk]]
            found = segment_distances(
                left.starts[li], left.ends[li], right_starts[ri], right_ends[ri]
            ).min()
            best = min(best, float(found))
            if best == 0.0:
                return 0.0

    if _inside(right.polylines, shift, left) or _inside(left.polylines, -shift, right):
        return 0.0

    return best
