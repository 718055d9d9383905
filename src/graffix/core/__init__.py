"""Core layout and compositing algorithms for graffix.

This module contains the core algorithms for:

- Letter rules (alternates, rotation, overlap tables)
- Asset resolution (first/last/alternate/standard variants)
- Rasterization and silhouette extraction
- Kerning (collision-driven overlap search, layout fold)
- Compositing (derived effect layers in z-order)
- Glyph caching with lazy expiry

Key functions:
- should_use_alternate: Decide alternate letter variants
- get_rotation: Look up inter-letter rotation
- extract_silhouette: Sample an alpha raster into mask, bounds, profile
- find_optimal_overlap: Overlap fraction between adjacent glyphs
- compose_layers: Derive every layer of a layout

Key classes:
- AssetResolver: Chooses the asset for a character
- GlyphRasterizer: Rasterizes assets into processed glyphs
- GlyphCache: TTL cache of processed glyphs
- LayoutGenerator: Orchestrates text-to-layout generation
"""

from graffix.core.cache import GlyphCache
from graffix.core.compositing import (
    compose_layers,
    render_content,
    render_halo,
    render_outline,
    render_shadow,
    render_shadow_halo,
    render_stamp,
)
from graffix.core.generator import LayoutGenerator
from graffix.core.kerning import (
    KerningState,
    advance,
    find_optimal_overlap,
    layout_positions,
    suggest_scale,
)
from graffix.core.rasterizer import GlyphRasterizer, extract_silhouette, make_space_glyph
from graffix.core.resolver import AssetResolver, ResolvedAsset
from graffix.core.rules import (
    DEFAULT_CATALOG,
    AssetCatalog,
    get_rotation,
    should_use_alternate,
)

__all__ = [
    "DEFAULT_CATALOG",
    # Rules
    "AssetCatalog",
    # Resolver
    "AssetResolver",
    # Cache
    "GlyphCache",
    # Rasterizer
    "GlyphRasterizer",
    # Kerning
    "KerningState",
    # Generator
    "LayoutGenerator",
    "ResolvedAsset",
    "advance",
    # Compositing
    "compose_layers",
    "extract_silhouette",
    "find_optimal_overlap",
    "get_rotation",
    "layout_positions",
    "make_space_glyph",
    "render_content",
    "render_halo",
    "render_outline",
    "render_shadow",
    "render_shadow_halo",
    "render_stamp",
    "should_use_alternate",
    "suggest_scale",
]
