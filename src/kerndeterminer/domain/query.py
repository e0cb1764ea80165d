"""Kern query parameters."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class KernQuery:
    """Input of one kern determination.

    Attributes:
        left_glyph: Name of the left glyph
        right_glyph: Name of the right glyph
        master: Master name
        target_distance: Desired closest-point distance in font units
        height: Vertical shift applied to the left glyph
        max_tuck: Max tuck as a ratio of the left glyph's width
    """

    left_glyph: str
    right_glyph: str
    master: str
    target_distance: float
    height: float = 0.0
    max_tuck: float = 0.0

    def __post_init__(self) -> None:
        if self.max_tuck < 0:
            raise ValueError(f"max_tuck must be >= 0, got {self.max_tuck}")
