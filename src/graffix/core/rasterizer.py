"""Glyph rasterization and silhouette extraction.

This module turns a glyph's SVG markup into a ProcessedGlyph:
- Render the glyph into a square RGBA raster with cairosvg
- Sample the alpha channel on a coarse grid into a block-filled opacity mask
- Track the ink bounding box and a per-column vertical extent/density profile
- Fill short gaps in the column profile by linear interpolation

The coarse sampling grid is deliberate: the kerning search only needs a
rough silhouette and runs for every adjacent glyph pair.
"""

import io
import math
from collections.abc import Callable
from dataclasses import dataclass

import cairosvg
import numpy as np
import structlog
from PIL import Image

from graffix.config.settings import RasterConfig
from graffix.core.cache import GlyphCache
from graffix.domain.glyph import Bounds, ColumnProfile, ColumnRange, ProcessedGlyph
from graffix.domain.vector import VectorDocument, parse_document, serialize_document
from graffix.exceptions import EmptyGlyphError, MalformedVectorContentError

logger = structlog.get_logger("graffix.rasterizer")

SPACE = " "


@dataclass(frozen=True)
class Silhouette:
    """Result of sampling an alpha raster.

    Attributes:
        mask: Block-filled boolean opacity mask, indexed [y, x]
        bounds: Ink bounding box, None when nothing was opaque
        profile: Per-column vertical extent, interpolated across short gaps
    """

    mask: np.ndarray
    bounds: Bounds | None
    profile: ColumnProfile

    @property
    def is_empty(self) -> bool:
        return self.bounds is None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _parse_length(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value.strip().removesuffix("px"))
    except ValueError:
        return None


def prepare_for_raster(document: VectorDocument, resolution: int) -> VectorDocument:
    """Size a document's root to a square raster.

    The artwork is fitted and centred with ``xMidYMid meet``. A viewBox is
    derived from the original width/height when the document has none.

    Args:
        document: Parsed glyph document
        resolution: Raster size in pixels

    Returns:
        Document with root width, height and aspect ratio set
    """
    updates = {
        "width": str(resolution),
        "height": str(resolution),
        "preserveAspectRatio": "xMidYMid meet",
    }
    if document.get("viewBox") is None:
        width = _parse_length(document.get("width")) or resolution
        height = _parse_length(document.get("height")) or resolution
        updates["viewBox"] = f"0 0 {width:g} {height:g}"
    return document.with_root_attributes(updates)


def render_alpha(markup: str, resolution: int) -> np.ndarray:
    """Rasterize SVG markup and return its alpha channel.

    Args:
        markup: SVG document sized to resolution
        resolution: Output width and height in pixels

    Returns:
        uint8 array of shape (resolution, resolution), indexed [y, x]

    Raises:
        MalformedVectorContentError: If the markup cannot be rendered
    """
    try:
        png = cairosvg.svg2png(
            bytestring=markup.encode("utf-8"),
            output_width=resolution,
            output_height=resolution,
        )
    except Exception as e:
        raise MalformedVectorContentError(f"could not render glyph: {e}") from e

    image = Image.open(io.BytesIO(png)).convert("RGBA")
    return np.asarray(image)[:, :, 3]


def interpolate_profile(
    profile: list[ColumnRange | None],
    left: int,
    right: int,
    max_gap: int = 10,
) -> list[ColumnRange | None]:
    """Fill short gaps in a column profile, in place.

    A missing column strictly between left and right is filled when its
    nearest populated neighbours, searched within [left, right], are fewer
    than max_gap columns apart. top/bottom are interpolated and rounded,
    density is interpolated linearly. Columns are filled left to right, so
    a filled column serves as neighbour for the next one. Wider gaps and
    gaps touching the bounds stay unset.

    Args:
        profile: Column profile to fill
        left: Left ink bound
        right: Right ink bound
        max_gap: Exclusive limit on the neighbour distance

    Returns:
        The same profile list
    """
    for x in range(len(profile)):
        if profile[x] is not None or not left < x < right:
            continue

        left_idx = x - 1
        while left_idx >= left and profile[left_idx] is None:
            left_idx -= 1
        right_idx = x + 1
        while right_idx <= right and profile[right_idx] is None:
            right_idx += 1

        if left_idx < left or right_idx > right or right_idx - left_idx >= max_gap:
            continue

        before = profile[left_idx]
        after = profile[right_idx]
        if before is None or after is None:
            continue
        progress = (x - left_idx) / (right_idx - left_idx)

        profile[x] = ColumnRange(
            top=_round_half_up(before.top + (after.top - before.top) * progress),
            bottom=_round_half_up(before.bottom + (after.bottom - before.bottom) * progress),
            density=before.density + (after.density - before.density) * progress,
        )

    return profile


def extract_silhouette(
    alpha: np.ndarray,
    stride: int = 2,
    threshold: int = 20,
    max_gap: int = 10,
) -> Silhouette:
    """Sample an alpha raster into a mask, bounds and column profile.

    Every stride-th pixel on both axes is sampled. A sample with alpha above
    threshold is opaque and marks its whole stride×stride block in the mask.
    Each sampled column with ink records its first/last opaque row and a
    density of opaque samples per sample slot between them; the record is
    shared by all columns of the block.

    Args:
        alpha: Alpha channel indexed [y, x]
        stride: Sampling stride in pixels
        threshold: Alpha above which a sample is opaque
        max_gap: Profile gaps narrower than this are interpolated

    Returns:
        Extracted silhouette
    """
    height, width = alpha.shape
    mask = np.zeros((height, width), dtype=bool)
    profile: list[ColumnRange | None] = [None] * width

    left, right, top, bottom = width, 0, height, 0
    found = False

    for x in range(0, width, stride):
        rows = np.nonzero(alpha[0:height:stride, x] > threshold)[0] * stride
        if rows.size == 0:
            continue

        found = True
        for y in rows:
            mask[y:y + stride, x:x + stride] = True

        column_top = int(rows[0])
        column_bottom = int(rows[-1])
        density = rows.size / ((column_bottom - column_top + 1) / stride)

        left = min(left, x)
        right = max(right, x)
        top = min(top, column_top)
        bottom = max(bottom, column_bottom)

        column = ColumnRange(top=column_top, bottom=column_bottom, density=density)
        for dx in range(stride):
            if x + dx < width:
                profile[x + dx] = column

    mask.setflags(write=False)

    if not found:
        return Silhouette(mask=mask, bounds=None, profile=tuple(profile))

    interpolate_profile(profile, left, right, max_gap)
    return Silhouette(
        mask=mask,
        bounds=Bounds(left=left, right=right, top=top, bottom=bottom),
        profile=tuple(profile),
    )


def make_space_glyph(resolution: int = 200, space_width: int = 70) -> ProcessedGlyph:
    """Build the blank glyph used for the space character."""
    document = VectorDocument(
        attributes=(
            ("width", str(resolution)),
            ("height", str(resolution)),
            ("viewBox", f"0 0 {resolution} {resolution}"),
        ),
        children=(),
    )
    mask = np.zeros((resolution, space_width), dtype=bool)
    mask.setflags(write=False)
    return ProcessedGlyph(
        content=serialize_document(document),
        width=space_width,
        height=resolution,
        bounds=Bounds(left=0, right=space_width, top=0, bottom=resolution),
        mask=mask,
        profile=(None,) * space_width,
        character=SPACE,
        asset_key="space",
        is_blank=True,
    )


class GlyphRasterizer:
    """Rasterizes glyph assets into ProcessedGlyph objects.

    The cache is injected so that callers control its lifetime and clock.

    Example:
        rasterizer = GlyphRasterizer(RasterConfig(), GlyphCache())
        glyph = rasterizer.process("a", "a:standard", lambda: loader.fetch("a1.svg"))
    """

    def __init__(self, config: RasterConfig | None = None, cache: GlyphCache | None = None) -> None:
        self.config = config or RasterConfig()
        self.cache = cache if cache is not None else GlyphCache()
        self.space_glyph = make_space_glyph(self.config.resolution, self.config.space_width)

    def process(
        self,
        character: str,
        key: str,
        fetch: Callable[[], bytes],
    ) -> ProcessedGlyph:
        """Get the processed glyph for a character, rasterizing on cache miss.

        Args:
            character: Source character
            key: Cache key (character plus variant)
            fetch: Returns the asset bytes; only called on a cache miss

        Returns:
            The processed glyph

        Raises:
            AssetFetchError: If fetching the asset fails
            MalformedVectorContentError: If the asset cannot be parsed or rendered
            EmptyGlyphError: If the glyph has no opaque pixels
        """
        if character == SPACE:
            return self.space_glyph

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Glyph cache hit", key=key)
            return cached

        logger.debug("Glyph cache miss", key=key)
        glyph = self.rasterize(fetch(), character, key)
        self.cache.set(key, glyph)
        return glyph

    def rasterize(self, markup: str | bytes, character: str, key: str = "") -> ProcessedGlyph:
        """Rasterize SVG markup into a processed glyph, bypassing the cache.

        Raises:
            MalformedVectorContentError: If the markup cannot be parsed or rendered
            EmptyGlyphError: If a non-space glyph has no opaque pixels
        """
        if character == SPACE:
            return self.space_glyph

        resolution = self.config.resolution
        document = prepare_for_raster(parse_document(markup), resolution)
        content = serialize_document(document)

        silhouette = extract_silhouette(
            render_alpha(content, resolution),
            stride=self.config.sampling_stride,
            threshold=self.config.alpha_threshold,
            max_gap=self.config.max_interpolation_gap,
        )
        if silhouette.bounds is None:
            raise EmptyGlyphError(character)

        logger.debug(
            "Glyph rasterized",
            character=character,
            key=key,
            bounds=silhouette.bounds.to_dict(),
        )

        return ProcessedGlyph(
            content=content,
            width=resolution,
            height=resolution,
            bounds=silhouette.bounds,
            mask=silhouette.mask,
            profile=silhouette.profile,
            character=character,
            asset_key=key or character,
        )
