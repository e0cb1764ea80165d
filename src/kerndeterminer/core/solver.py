"""Kern solver: finds the kern at which two outlines are a given distance apart.

The right glyph is placed at the left glyph's advance width plus the kern.
Starting with the glyphs' bounding boxes clear of each other, the right
glyph is marched leftwards. Moving an outline by ``s`` changes the distance
between the outlines by at most ``s``, so a step of ``distance - target``
cannot jump over the first place where the outlines come within the target
distance. The march therefore samples the whole approach and stops at the
rightmost crossing even when the distance is not monotonic in the kern
(concave outlines, overhangs). The crossing is then bisected.

The tuck bound is a hard limit: when the target is only reached beyond it,
the bound itself is returned.
"""

import structlog

from kerndeterminer.config import SolverConfig
from kerndeterminer.core.distance import min_distance
from kerndeterminer.domain import FlattenedOutline
from kerndeterminer.exceptions import EmptyOutlineError, NoSolutionError

logger = structlog.get_logger(__name__)


class KernSolver:
    """Solves for kern values using the distance engine as an oracle.

    Args:
        config: Solver tolerances and iteration budgets

    Example:
        solver = KernSolver()
        kern = solver.solve(left, right, target_distance=80, height=0, max_tuck=0.5)
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()

    def effective_height(self, left: FlattenedOutline, height: float) -> float:
        """Vertical shift of the left outline.

        A positive height is measured from the left glyph's exit anchor when
        it has one, so cursive glyphs are compared relative to their joins.
        """
        exit_anchor = left.anchors.get(self.config.exit_anchor)
        if height > 0 and exit_anchor is not None:
            return height - exit_anchor[1]
        return height

    def min_kern(self, left: FlattenedOutline, max_tuck: float) -> float:
        """Most negative kern permitted by the tuck ratio."""
        if max_tuck < 0:
            raise ValueError(f"max_tuck must be >= 0, got {max_tuck}")
        return 0.0 - max_tuck * left.width

    def origin(self, left: FlattenedOutline) -> float:
        """Pen position of the right glyph at zero kern."""
        if left.advance_width > 0:
            return left.advance_width
        return left.bbox.x_max if left.bbox is not None else 0.0

    def distance(
        self, left: FlattenedOutline, right: FlattenedOutline, kern: float, height: float
    ) -> float:
        """Distance between the outlines at a kern, with height already effective."""
        return min_distance(left, right, self.origin(left) + kern, height)

    def solve(
        self,
        left: FlattenedOutline,
        right: FlattenedOutline,
        target_distance: float,
        height: float = 0.0,
        max_tuck: float = 0.0,
    ) -> float:
        """Find the kern that puts the outlines ``target_distance`` apart.

        A negative target asks for overlap: the result is that far to the
        left of the kern at which the outlines first touch.

        Args:
            left: Left glyph outline
            right: Right glyph outline
            target_distance: Desired closest-point distance
            height: Vertical shift of the left glyph
            max_tuck: Max tuck as a ratio of the left glyph's width

        Returns:
            Kern value, never below ``-max_tuck * left.width``

        Raises:
            EmptyOutlineError: If either outline has no contours
            NoSolutionError: If no horizontal offset reaches the target
        """
        if left.is_empty():
            raise EmptyOutlineError(left.glyph_name)
        if right.is_empty():
            raise EmptyOutlineError(right.glyph_name)

        config = self.config
        height = self.effective_height(left, height)
        floor = self.min_kern(left, max_tuck)
        origin = self.origin(left)
        reach = max(target_distance, 0.0)

        left_box = left.bbox.translate(0.0, height)
        right_box = right.bbox
        vertical_gap = left_box.vertical_gap(right_box)
        if vertical_gap > reach:
            logger.info(
                "No kern solution",
                left=left.glyph_name,
                right=right.glyph_name,
                vertical_gap=vertical_gap,
            )
            raise NoSolutionError(
                left.glyph_name,
                right.glyph_name,
                f"outlines are {vertical_gap:.2f} units apart vertically",
            )

        start = left_box.x_max - right_box.x_min - origin + reach + config.min_step
        far_side = left_box.x_min - right_box.x_max - origin - reach - config.min_step

        hi = start
        d_hi = self.distance(left, right, hi, height)
        lo: float | None = None

        for _ in range(config.max_march_steps):
            if hi <= floor:
                break
            candidate = max(hi - max(d_hi - reach, config.min_step), floor)
            d_candidate = self.distance(left, right, candidate, height)
            logger.debug("March step", kern=candidate, distance=d_candidate)
            if d_candidate <= reach:
                lo = candidate
                break
            if candidate < far_side:
                logger.info(
                    "No kern solution",
                    left=left.glyph_name,
                    right=right.glyph_name,
                    kern=candidate,
                )
                raise NoSolutionError(
                    left.glyph_name,
                    right.glyph_name,
                    f"outlines never come within {reach} units",
                )
            hi, d_hi = candidate, d_candidate
        else:
            logger.warning(
                "March budget exhausted",
                left=left.glyph_name,
                right=right.glyph_name,
                kern=hi,
            )
            return hi

        if lo is None:
            logger.info(
                "Kern clamped to tuck bound",
                left=left.glyph_name,
                right=right.glyph_name,
                kern=floor,
            )
            return floor

        for _ in range(config.max_iterations):
            if hi - lo <= config.tolerance:
                break
            mid = (lo + hi) / 2
            if self.distance(left, right, mid, height) <= reach:
                lo = mid
            else:
                hi = mid
        else:
            logger.warning(
                "Bisection budget exhausted",
                left=left.glyph_name,
                right=right.glyph_name,
                bracket=(lo, hi),
            )

        kern = (lo + hi) / 2
        if target_distance < 0:
            kern += target_distance

        if kern < floor:
            logger.info(
                "Kern clamped to tuck bound",
                left=left.glyph_name,
                right=right.glyph_name,
                solution=kern,
                kern=floor,
            )
            return floor
        return kern
