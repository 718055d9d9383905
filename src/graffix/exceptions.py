"""Exception hierarchy for Graffix."""


class GraffixError(Exception):
    """Base exception for all Graffix errors."""

    pass


class AssetError(GraffixError):
    """Errors related to resolving or loading glyph assets."""

    pass


class AssetNotFoundError(AssetError):
    """No asset exists for a character in any variant."""

    def __init__(self, character: str) -> None:
        self.character = character
        super().__init__(f"No glyph asset found for character '{character}'")


class AssetFetchError(AssetError):
    """Error reading the bytes of a glyph asset."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to fetch asset '{path}': {reason}")


class GlyphError(GraffixError):
    """Errors related to glyph rasterization."""

    pass


class EmptyGlyphError(GlyphError):
    """A non-space glyph rasterized to zero opaque pixels."""

    def __init__(self, character: str) -> None:
        self.character = character
        super().__init__(f"No visible pixels found in glyph for character '{character}'")


class VectorContentError(GraffixError):
    """Errors in vector (SVG) content."""

    pass


class MalformedVectorContentError(VectorContentError):
    """Vector markup could not be parsed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed vector content: {reason}")
