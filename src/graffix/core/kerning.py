"""Kerning: overlap search between adjacent glyphs and the layout fold.

The overlap search probes candidate overlap fractions from the loosest
(max_overlap) toward the tightest (min_overlap) and stops at the first
fraction where the two column profiles collide: their vertical ranges
intersect and both columns are dense enough. That fraction is the result;
min_overlap is returned when no fraction collides.

Layout is an explicit left-to-right fold, because each glyph's position
depends on the finalized silhouette of the glyph before it.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from functools import reduce

import structlog

from graffix.config.settings import KerningConfig, LayoutConfig
from graffix.core.rules import get_overlap_rule, is_overlap_exception
from graffix.domain.glyph import ProcessedGlyph

logger = structlog.get_logger("graffix.kerning")


def overlap_limits(
    prev_char: str,
    char: str,
    exception_factor: float = 0.7,
) -> tuple[float, float]:
    """Get the (min, max) overlap fractions for a letter pair.

    The max comes from the previous letter's rule, replaced by its special
    case for the current letter when there is one. Exception pairs reduce
    max to max(min, max * exception_factor).
    """
    rule = get_overlap_rule(prev_char)
    min_overlap = rule.min_overlap
    max_overlap = rule.special_cases.get(char.lower(), rule.max_overlap)

    if is_overlap_exception(prev_char, char):
        max_overlap = max(min_overlap, max_overlap * exception_factor)

    return min_overlap, max_overlap


def _collides(
    prev: ProcessedGlyph,
    current: ProcessedGlyph,
    overlap: float,
    stride: int,
    density_threshold: float,
) -> bool:
    start = math.floor(prev.bounds.right - prev.ink_width * overlap)

    for x in range(max(0, start), prev.bounds.right, stride):
        current_x = x - start + current.bounds.left
        if not 0 <= current_x < current.width:
            continue

        prev_range = prev.column(x)
        current_range = current.column(current_x)
        if prev_range is None or current_range is None:
            continue

        intersection = min(prev_range.bottom, current_range.bottom) - max(
            prev_range.top, current_range.top
        )
        if (
            intersection > 0
            and prev_range.density > density_threshold
            and current_range.density > density_threshold
        ):
            return True

    return False


def find_optimal_overlap(
    prev: ProcessedGlyph,
    current: ProcessedGlyph,
    config: KerningConfig | None = None,
) -> float:
    """Find the overlap fraction between two adjacent glyphs.

    Args:
        prev: Glyph on the left
        current: Glyph on the right
        config: Search step, stride and thresholds

    Returns:
        Fraction of prev's ink width that current overlaps. 0 when either
        glyph is blank.
    """
    if prev.is_blank or current.is_blank:
        return 0.0

    config = config or KerningConfig()
    min_overlap, max_overlap = overlap_limits(
        prev.character, current.character, config.exception_factor
    )

    overlap = max_overlap
    while overlap >= min_overlap:
        if _collides(prev, current, overlap, config.collision_stride, config.density_threshold):
            return overlap
        overlap -= config.step

    return min_overlap


@dataclass(frozen=True)
class KerningState:
    """Accumulator of the layout fold.

    Attributes:
        previous: Last glyph placed, None before the first
        offset: Position of the last glyph placed
        positions: Positions of all glyphs placed so far
        overlaps: Overlap fraction chosen before each glyph (0 for the first)
    """

    previous: ProcessedGlyph | None = None
    offset: float = 0.0
    positions: tuple[float, ...] = ()
    overlaps: tuple[float, ...] = ()


def advance(
    state: KerningState,
    glyph: ProcessedGlyph,
    config: KerningConfig | None = None,
) -> KerningState:
    """Place one glyph after the glyphs already in state.

    The glyph's ink starts where the previous glyph's ink ends, pulled left
    by the overlap fraction of the previous ink width. Positions never move
    backwards.

    Returns:
        New state including the glyph
    """
    prev = state.previous
    if prev is None:
        return KerningState(previous=glyph, offset=0.0, positions=(0.0,), overlaps=(0.0,))

    overlap = find_optimal_overlap(prev, glyph, config)
    step = prev.bounds.right - prev.ink_width * overlap - glyph.bounds.left
    offset = state.offset + max(0.0, step)

    logger.debug(
        "Glyph placed",
        prev=prev.character,
        char=glyph.character,
        overlap=round(overlap, 4),
        offset=round(offset, 2),
    )

    return KerningState(
        previous=glyph,
        offset=offset,
        positions=(*state.positions, offset),
        overlaps=(*state.overlaps, overlap),
    )


def layout_positions(
    glyphs: Iterable[ProcessedGlyph],
    config: KerningConfig | None = None,
) -> KerningState:
    """Fold glyphs left to right into their positions."""
    return reduce(lambda state, glyph: advance(state, glyph, config), glyphs, KerningState())


def content_size(glyphs: tuple[ProcessedGlyph, ...], positions: tuple[float, ...]) -> tuple[float, float]:
    """Get the (width, height) spanned by positioned glyph boxes."""
    if not glyphs:
        return 0.0, 0.0
    width = positions[-1] + glyphs[-1].width
    height = max(glyph.height for glyph in glyphs)
    return float(width), float(height)


def suggest_scale(content_width: float, content_height: float, config: LayoutConfig | None = None) -> float:
    """Suggest a display scale fitting the content into the viewport.

    Never scales up; keeps a margin for effect layers drawn outside the
    glyph boxes.
    """
    config = config or LayoutConfig()
    if content_width <= 0 or content_height <= 0:
        return 1.0
    fit = min(config.viewport_width / content_width, config.viewport_height / content_height, 1.0)
    return fit * config.fit_margin
