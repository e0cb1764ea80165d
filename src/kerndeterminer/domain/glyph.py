"""Glyph representation.

A glyph is a name plus its decomposed outline and the metrics the kern
solver needs: advance width and anchors.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from kerndeterminer.domain.contour import Contour


@dataclass(frozen=True)
class Glyph:
    """A single glyph as drawn in one master.

    Attributes:
        name: Glyph name (e.g., "A", "beh.init")
        contours: Closed contours in font units, components already decomposed
        advance_width: Horizontal advance width in font units (0 if unknown)
        anchors: Anchor name to (x, y) position
    """

    name: str
    contours: tuple[Contour, ...] = ()
    advance_width: float = 0.0
    anchors: Mapping[str, tuple[float, float]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.contours, tuple):
            object.__setattr__(self, "contours", tuple(self.contours))
        object.__setattr__(self, "anchors", MappingProxyType(dict(self.anchors)))

