"""Exception hierarchy for kerndeterminer."""


class KernDeterminerError(Exception):
    """Base exception for all kerndeterminer errors."""

    pass


class FontError(KernDeterminerError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font source."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontLoadError):
    """Unsupported or invalid font source format."""

    def __init__(self, path: str, details: str) -> None:
        self.details = details
        super().__init__(path, f"unsupported format: {details}")


class MasterNotFoundError(FontError):
    """Requested master not found in font."""

    def __init__(self, master_name: str, available: list[str] | None = None) -> None:
        self.master_name = master_name
        self.available = list(available or [])
        message = f"Master '{master_name}' not found in font"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class GlyphError(KernDeterminerError):
    """Errors related to glyph lookup."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not found in a master."""

    def __init__(self, glyph_name: str, master_name: str | None = None) -> None:
        self.glyph_name = glyph_name
        self.master_name = master_name
        if master_name is None:
            super().__init__(f"Glyph '{glyph_name}' not found in font")
        else:
            super().__init__(f"Glyph '{glyph_name}' not found in master '{master_name}'")


class GeometryError(KernDeterminerError):
    """Errors in geometric calculations."""

    pass


class EmptyOutlineError(GeometryError):
    """Glyph has no contours, so distance to it is undefined."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' has no outline")


class SolverError(KernDeterminerError):
    """Errors raised while solving for a kern value."""

    pass


class NoSolutionError(SolverError):
    """Target distance cannot be reached at any horizontal offset."""

    def __init__(self, left_glyph: str, right_glyph: str, reason: str) -> None:
        self.left_glyph = left_glyph
        self.right_glyph = right_glyph
        self.reason = reason
        super().__init__(f"No kern for '{left_glyph}' / '{right_glyph}': {reason}")
