"""Domain models for graffix.

This module contains the core domain models representing processed glyphs,
layouts, layer styles and structured vector content. All models are:

- Immutable (frozen dataclasses)
- Independent of the rasterizer and XML implementation details

Key classes:
- ProcessedGlyph: A rasterized glyph with its silhouette
- LayoutResult: Kerned positions of a text's glyphs
- VectorDocument: Structured SVG geometry
- RenderLayer: A derived layer fragment in the final stack
"""

from graffix.domain.glyph import Bounds, ColumnProfile, ColumnRange, LayoutResult, ProcessedGlyph
from graffix.domain.layers import (
    EMPTY_FRAGMENT,
    ContentStyle,
    HaloStyle,
    LayerKind,
    LayerStyles,
    LayerTransform,
    OutlineStyle,
    RenderLayer,
    ShadowHaloStyle,
    ShadowStyle,
    ShineStyle,
    StrokeStyle,
)
from graffix.domain.vector import (
    PassthroughElement,
    ShapeGroup,
    ShapeRecord,
    VectorDocument,
    parse_document,
    serialize_document,
)

__all__: list[str] = [
    "EMPTY_FRAGMENT",
    # Enums
    "LayerKind",
    # Glyph types
    "Bounds",
    "ColumnProfile",
    "ColumnRange",
    "LayoutResult",
    "ProcessedGlyph",
    # Layer styles
    "ContentStyle",
    "HaloStyle",
    "LayerStyles",
    "LayerTransform",
    "OutlineStyle",
    "RenderLayer",
    "ShadowHaloStyle",
    "ShadowStyle",
    "ShineStyle",
    "StrokeStyle",
    # Vector content
    "PassthroughElement",
    "ShapeGroup",
    "ShapeRecord",
    "VectorDocument",
    "parse_document",
    "serialize_document",
]
