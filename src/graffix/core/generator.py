"""Layout generation: from text to a kerned LayoutResult.

This module coordinates the full layout workflow for one text:
1. Pick the asset for every character (alternates, first/last variants)
2. Fetch and rasterize each asset through the glyph cache
3. Look up each character's rotation from its predecessor
4. Fold the glyphs left to right into kerned positions

Generation is synchronous. Overlapping requests are not serialized; every
request gets a sequence number so callers can drop superseded results.
"""

import time
from functools import partial
from typing import TYPE_CHECKING

import structlog

from graffix.config import STRAIGHT_MODE, GraffixSettings
from graffix.core.cache import GlyphCache
from graffix.core.kerning import content_size, layout_positions, suggest_scale
from graffix.core.rasterizer import SPACE, GlyphRasterizer
from graffix.core.resolver import AssetResolver
from graffix.core.rules import DEFAULT_CATALOG, AssetCatalog, get_rotation, should_use_alternate
from graffix.domain.glyph import LayoutResult, ProcessedGlyph
from graffix.exceptions import GraffixError
from graffix.utils import GenerationLogger, GenerationStats

if TYPE_CHECKING:
    from graffix.io.loader import AssetLoader


class LayoutGenerator:
    """Generates kerned glyph layouts for text.

    Example:
        generator = LayoutGenerator(AssetLoader(Path("assets/letters")))
        layout = generator.generate("hello", mode="straight")
    """

    def __init__(
        self,
        loader: "AssetLoader",
        settings: GraffixSettings | None = None,
        cache: GlyphCache | None = None,
        catalog: AssetCatalog | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            loader: Source of asset bytes
            settings: Application settings (defaults if None)
            cache: Glyph cache shared across requests (new cache if None)
            catalog: Asset catalog (built-in letter set if None)
        """
        self.settings = settings or GraffixSettings()
        self.loader = loader
        self.cache = cache if cache is not None else GlyphCache(self.settings.cache.ttl_seconds)
        self.resolver = AssetResolver(catalog or DEFAULT_CATALOG)
        self.rasterizer = GlyphRasterizer(self.settings.raster, self.cache)
        self.logger = structlog.get_logger("graffix.generator")
        self.last_stats: GenerationStats | None = None
        self._sequence = 0

    @property
    def catalog(self) -> AssetCatalog:
        return self.resolver.catalog

    @property
    def latest_sequence(self) -> int:
        """Sequence number of the most recently started request."""
        return self._sequence

    def is_current(self, result: LayoutResult) -> bool:
        """Check that no request was started after the one producing result."""
        return result.sequence == self._sequence

    def generate(self, text: str, mode: str = STRAIGHT_MODE) -> LayoutResult:
        """Generate the layout of a text.

        Text is stripped and lowercased. Any asset or rasterization error
        aborts the request; no partial layout is returned.

        Args:
            text: Text to lay out
            mode: Style mode id; first/last variants apply outside "straight"

        Returns:
            LayoutResult for the text

        Raises:
            AssetNotFoundError: If a character has no asset
            AssetFetchError: If an asset cannot be read
            MalformedVectorContentError: If an asset cannot be parsed or rendered
            EmptyGlyphError: If an asset has no visible pixels
        """
        self._sequence += 1
        sequence = self._sequence
        generation_logger = GenerationLogger(self.logger.bind(sequence=sequence, mode=mode))
        stats = generation_logger.stats
        stats.start_time = time.time()
        self.last_stats = stats

        text = text.strip().lower()
        characters = list(text)
        hits, misses = self.cache.hits, self.cache.misses

        try:
            glyphs = tuple(self._glyphs(characters, mode, generation_logger))
        except GraffixError as e:
            generation_logger.log_generation_error(text, e)
            raise

        rotations = tuple(
            get_rotation(char, characters[index - 1] if index > 0 else None)
            for index, char in enumerate(characters)
        )

        state = layout_positions(glyphs, self.settings.kerning)
        width, height = content_size(glyphs, state.positions)

        generation_logger.record_cache(self.cache.hits - hits, self.cache.misses - misses)
        generation_logger.log_layout(text, state.positions, state.overlaps)
        stats.end_time = time.time()

        return LayoutResult(
            glyphs=glyphs,
            positions=state.positions,
            rotations=rotations,
            content_width=width,
            content_height=height,
            scale=suggest_scale(width, height, self.settings.layout),
            sequence=sequence,
        )

    def _glyphs(
        self,
        characters: list[str],
        mode: str,
        generation_logger: GenerationLogger,
    ) -> list[ProcessedGlyph]:
        glyphs: list[ProcessedGlyph] = []
        last_index = len(characters) - 1

        for index, char in enumerate(characters):
            if char == SPACE:
                generation_logger.log_space(index)
                glyphs.append(self.rasterizer.space_glyph)
                continue

            asset = self.resolver.resolve(
                char,
                is_first=index == 0,
                is_last=index == last_index,
                is_alternate=should_use_alternate(char, index, characters, self.catalog),
                mode=mode,
            )
            generation_logger.log_glyph_resolved(char, asset.path, asset.variant, index)

            glyphs.append(
                self.rasterizer.process(char, asset.key, partial(self.loader.fetch, asset.path))
            )

        return glyphs
