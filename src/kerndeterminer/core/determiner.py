"""Kern determiner: public entry point.

Owns a loaded font and its contour cache and answers kern queries against
it. One instance is meant to serve many queries, from any number of
threads.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import structlog

from kerndeterminer.config import KernSettings, get_default_settings
from kerndeterminer.core.cache import ContourCache
from kerndeterminer.core.solver import KernSolver
from kerndeterminer.domain import Font, KernQuery
from kerndeterminer.io import load_font
from kerndeterminer.utils import configure_logging

logger = structlog.get_logger(__name__)


class KernDeterminer:
    """Determines kern values between glyph pairs of one font.

    Args:
        font_source: Path to a font source, or an already loaded Font
        settings: Library settings (defaults if None)

    Raises:
        FontLoadError: If the font source cannot be loaded

    Example:
        determiner = KernDeterminer("MyFont.designspace")
        kern = determiner.determine_kern("beh.init", "alef.fina", "Regular", 80, 0, 0.5)
    """

    def __init__(self, font_source: str | Path | Font, settings: KernSettings | None = None) -> None:
        self.settings = settings or get_default_settings()

        log_config = self.settings.logging
        if log_config.configure:
            configure_logging(
                log_file=log_config.log_file,
                console_level=log_config.log_level,
                file_level=log_config.file_log_level,
            )

        if isinstance(font_source, Font):
            self.font = font_source
        else:
            self.font = load_font(font_source)

        self.cache = ContourCache(self.font)
        self.solver = KernSolver(self.settings.solver)

    @property
    def masters(self) -> list[str]:
        """Names of the font's masters."""
        return self.font.master_names

    def determine_kern(
        self,
        left_glyph: str,
        right_glyph: str,
        master: str,
        target_distance: float,
        height: float = 0.0,
        max_tuck: float = 0.0,
    ) -> float:
        """Kern value that puts two glyphs ``target_distance`` apart.

        Args:
            left_glyph: Name of the left glyph
            right_glyph: Name of the right glyph
            master: Master name
            target_distance: Desired closest-point distance in font units
            height: Vertical shift of the left glyph
            max_tuck: Max tuck as a ratio of the left glyph's width

        Returns:
            Kern in font units, never below ``-max_tuck`` times the left width

        Raises:
            MasterNotFoundError: If the master does not exist
            GlyphNotFoundError: If either glyph does not exist in the master
            EmptyOutlineError: If either glyph has no contours
            NoSolutionError: If the target distance cannot be reached
        """
        left = self.cache.get_or_build(left_glyph, master)
        right = self.cache.get_or_build(right_glyph, master)
        kern = self.solver.solve(left, right, target_distance, height, max_tuck)

        logger.debug(
            "Kern determined",
            left=left_glyph,
            right=right_glyph,
            master=master,
            target=target_distance,
            height=height,
            max_tuck=max_tuck,
            kern=kern,
        )
        return kern

    def query(self, query: KernQuery) -> float:
        """Run a single KernQuery."""
        return self.determine_kern(
            query.left_glyph,
            query.right_glyph,
            query.master,
            query.target_distance,
            query.height,
            query.max_tuck,
        )

    def determine_kerns(
        self,
        queries: Iterable[KernQuery],
        max_workers: int | None = None,
    ) -> list[float]:
        """Run many queries on a thread pool.

        Args:
            queries: Queries to evaluate
            max_workers: Worker threads (settings default if None)

        Returns:
            Kern values in query order

        Raises:
            The first error raised by any query, as determine_kern does
        """
        if max_workers is None:
            max_workers = self.settings.processing.max_workers

        queries = list(queries)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.query, queries))

    def distance(
        self,
        left_glyph: str,
        right_glyph: str,
        master: str,
        kern: float = 0.0,
        height: float = 0.0,
    ) -> float:
        """Closest-point distance between two glyphs set with a kern.

        Uses the same placement and height handling as determine_kern.
        """
        left = self.cache.get_or_build(left_glyph, master)
        right = self.cache.get_or_build(right_glyph, master)
        return self.solver.distance(
            left, right, kern, self.solver.effective_height(left, height)
        )
