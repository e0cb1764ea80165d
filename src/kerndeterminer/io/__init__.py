"""Font I/O layer for kerndeterminer.

This module loads font sources using fontTools and ufoLib2 and converts
them to domain models.

Key responsibilities:
- Load binary fonts (static and variable), UFOs and designspaces
- Decompose components and convert outlines to domain Contours

Key functions:
- load_font: Open a font source as a domain Font
"""

from kerndeterminer.io.reader import load_font

__all__ = [
    "load_font",
]
