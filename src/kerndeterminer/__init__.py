"""kerndeterminer - Determine kern values from glyph outline geometry.

Given two glyphs of a font master, kerndeterminer finds the horizontal kern
at which the closest points of their outlines are a target distance apart,
without letting the right glyph tuck under the left one further than a
given fraction of the left glyph's width.

Example:
    >>> from kerndeterminer import KernDeterminer
    >>> determiner = KernDeterminer("MyFont.designspace")
    >>> determiner.determine_kern("beh.init", "alef.fina", "Regular", 80, 0, 0.5)
"""

from kerndeterminer.core import KernDeterminer
from kerndeterminer.domain import KernQuery

__version__ = "0.1.0"

__all__ = ["KernDeterminer", "KernQuery", "__version__"]
