"""Shared fixtures: synthetic letter assets and hand-built glyphs."""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

from graffix.core.rasterizer import extract_silhouette
from graffix.core.rules import DEFAULT_CATALOG
from graffix.domain.glyph import ProcessedGlyph

RESOLUTION = 200


def glyph_markup(width: float = 100, top: float = 30, bottom: float = 170) -> str:
    """Build a letter asset: a centred block plus shadow and shine sub-paths."""
    left = (RESOLUTION - width) / 2
    right = left + width
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{RESOLUTION}" height="{RESOLUTION}" '
        f'viewBox="0 0 {RESOLUTION} {RESOLUTION}">'
        '<g transform="translate(0,0)">'
        f'<path d="M{left:g} {top:g} H{right:g} V{bottom:g} H{left:g} Z" fill="#222222"/>'
        "</g>"
        f'<path class="shadow-effect" style="display:none" '
        f'd="M{left + 10:g} {top + 10:g} H{right:g} V{bottom:g} H{left + 10:g} Z" fill="#000000"/>'
        f'<path class="shine-effect" style="display:none;opacity:0.5" '
        f'd="M{left + 5:g} {top + 5:g} H{left + 15:g} V{top + 40:g} H{left + 5:g} Z" fill="#ffffff"/>'
        "</svg>"
    )


def block_alpha(
    left: int, right: int, top: int, bottom: int, size: int = RESOLUTION
) -> np.ndarray:
    """Alpha raster with one opaque block; right and bottom are exclusive."""
    alpha = np.zeros((size, size), dtype=np.uint8)
    alpha[top:bottom, left:right] = 255
    return alpha


@pytest.fixture
def markup() -> Callable[..., str]:
    """Factory for letter asset markup."""
    return glyph_markup


@pytest.fixture
def glyph_svg() -> str:
    """Default letter asset markup."""
    return glyph_markup()


@pytest.fixture
def alpha_block() -> Callable[..., np.ndarray]:
    """Factory for alpha rasters holding one opaque block."""
    return block_alpha


@pytest.fixture
def make_glyph() -> Callable[..., ProcessedGlyph]:
    """Factory for processed glyphs built from an alpha raster without rendering."""

    def _make(
        character: str = "a",
        alpha: np.ndarray | None = None,
        content: str | None = None,
        asset_key: str | None = None,
    ) -> ProcessedGlyph:
        if alpha is None:
            alpha = block_alpha(40, 160, 20, 180)
        silhouette = extract_silhouette(alpha)
        assert silhouette.bounds is not None
        return ProcessedGlyph(
            content=content or glyph_markup(),
            width=alpha.shape[1],
            height=alpha.shape[0],
            bounds=silhouette.bounds,
            mask=silhouette.mask,
            profile=silhouette.profile,
            character=character,
            asset_key=asset_key or f"{character}:standard",
        )

    return _make


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Directory with a synthetic asset for every file of the built-in catalog."""
    directory = tmp_path / "letters"
    directory.mkdir()
    tables = (
        DEFAULT_CATALOG.standard,
        DEFAULT_CATALOG.alternate,
        DEFAULT_CATALOG.first,
        DEFAULT_CATALOG.last,
    )
    for table in tables:
        for char, name in table.items():
            width = 60 + (ord(char) - ord("a")) % 5 * 15
            (directory / name).write_text(glyph_markup(width=width), encoding="utf-8")
    return directory
