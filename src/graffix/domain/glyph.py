"""Processed glyph and layout representations.

This module defines the rasterized glyph model produced by the rasterizer
and the layout record produced by the kerning fold.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class Bounds:
    """Ink bounding box of a glyph in raster pixels.

    Attributes:
        left: Leftmost sampled column with ink
        right: Rightmost sampled column with ink
        top: Topmost sampled row with ink
        bottom: Bottommost sampled row with ink
    """

    left: int
    right: int
    top: int
    bottom: int

    @property
    def width(self) -> int:
        """Horizontal ink extent."""
        return self.right - self.left

    @property
    def height(self) -> int:
        """Vertical ink extent."""
        return self.bottom - self.top

    def to_dict(self) -> dict[str, int]:
        return {
            "left": self.left,
            "right": self.right,
            "top": self.top,
            "bottom": self.bottom,
        }


@dataclass(frozen=True, slots=True)
class ColumnRange:
    """Vertical ink extent and density of one raster column.

    Attributes:
        top: First row with ink
        bottom: Last row with ink
        density: Opaque samples relative to the samples spanning top..bottom
    """

    top: int
    bottom: int
    density: float


ColumnProfile = tuple[ColumnRange | None, ...]


@dataclass(frozen=True)
class ProcessedGlyph:
    """A rasterized glyph ready for kerning and compositing.

    Instances are immutable and may be shared between cache hits and
    derived layers. The mask is a read-only boolean array indexed
    ``[y, x]`` with shape ``(height, width)``.

    Attributes:
        content: Serialized SVG markup of the glyph
        width: Raster width in pixels
        height: Raster height in pixels
        bounds: Ink bounding box
        mask: Boolean opacity mask
        profile: Per-column vertical ink extent, None where no ink
        character: Source character
        asset_key: Catalog key of the asset that produced this glyph
        scale: Render scale applied when displaying the glyph
        is_blank: True for the space glyph
    """

    content: str
    width: int
    height: int
    bounds: Bounds
    mask: np.ndarray = field(repr=False, compare=False)
    profile: ColumnProfile = field(repr=False)
    character: str
    asset_key: str
    scale: float = 1.0
    is_blank: bool = False

    @property
    def ink_width(self) -> int:
        """Width of the ink bounding box."""
        return self.bounds.width

    def column(self, x: int) -> ColumnRange | None:
        """Get the profile entry for a column, None outside the raster."""
        if 0 <= x < len(self.profile):
            return self.profile[x]
        return None

    def opaque_pixel_count(self) -> int:
        return int(np.count_nonzero(self.mask))

    def to_dict(self) -> dict[str, Any]:
        """Summarize the glyph for logging and JSON output.

        The mask and profile are omitted.
        """
        return {
            "character": self.character,
            "asset_key": self.asset_key,
            "width": self.width,
            "height": self.height,
            "bounds": self.bounds.to_dict(),
            "scale": self.scale,
            "is_blank": self.is_blank,
        }


@dataclass(frozen=True)
class LayoutResult:
    """Kerned layout of a text, owned by the request that generated it.

    Attributes:
        glyphs: Processed glyphs in input order
        positions: X offset of each glyph box, non-decreasing
        rotations: Rotation of each glyph in degrees
        content_width: Width spanned by all glyph boxes
        content_height: Height of the tallest glyph box
        scale: Suggested display scale
        sequence: Sequence number of the generation request
    """

    glyphs: tuple[ProcessedGlyph, ...]
    positions: tuple[float, ...]
    rotations: tuple[float, ...]
    content_width: float
    content_height: float
    scale: float
    sequence: int = 0

    def __len__(self) -> int:
        return len(self.glyphs)

    def is_empty(self) -> bool:
        return len(self.glyphs) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequence": self.sequence,
            "glyphs": [g.to_dict() for g in self.glyphs],
            "positions": list(self.positions),
            "rotations": list(self.rotations),
            "content_width": self.content_width,
            "content_height": self.content_height,
            "scale": self.scale,
        }
