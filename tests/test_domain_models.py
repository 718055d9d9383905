"""Tests for domain models to verify they work correctly."""

from collections.abc import Callable
from dataclasses import FrozenInstanceError

import pytest

from graffix.domain import (
    EMPTY_FRAGMENT,
    Bounds,
    ColumnRange,
    HaloStyle,
    LayerKind,
    LayerTransform,
    LayoutResult,
    OutlineStyle,
    ProcessedGlyph,
    RenderLayer,
)


class TestBounds:
    """Tests for Bounds class."""

    def test_extent(self) -> None:
        """Test width and height."""
        bounds = Bounds(left=40, right=158, top=20, bottom=178)
        assert bounds.width == 118
        assert bounds.height == 158

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        assert Bounds(1, 2, 3, 4).to_dict() == {"left": 1, "right": 2, "top": 3, "bottom": 4}

    def test_immutable(self) -> None:
        """Test that bounds are immutable."""
        bounds = Bounds(1, 2, 3, 4)
        with pytest.raises(FrozenInstanceError):
            bounds.left = 0  # type: ignore[misc]


class TestProcessedGlyph:
    """Tests for ProcessedGlyph class."""

    def test_ink_width(self, make_glyph: Callable[..., ProcessedGlyph]) -> None:
        """Test ink width comes from the bounds."""
        glyph = make_glyph("a")
        assert glyph.ink_width == 118

    def test_column(self, make_glyph: Callable[..., ProcessedGlyph]) -> None:
        """Test profile lookup inside and outside the raster."""
        glyph = make_glyph("a")
        assert isinstance(glyph.column(100), ColumnRange)
        assert glyph.column(10) is None
        assert glyph.column(-1) is None
        assert glyph.column(500) is None

    def test_immutable(self, make_glyph: Callable[..., ProcessedGlyph]) -> None:
        """Test that glyph fields and mask cannot be modified."""
        glyph = make_glyph("a")
        with pytest.raises(FrozenInstanceError):
            glyph.character = "b"  # type: ignore[misc]
        with pytest.raises(ValueError):
            glyph.mask[0, 0] = True

    def test_to_dict(self, make_glyph: Callable[..., ProcessedGlyph]) -> None:
        """Test summary omits the mask and profile."""
        data = make_glyph("a").to_dict()
        assert data["character"] == "a"
        assert data["asset_key"] == "a:standard"
        assert data["bounds"]["left"] == 40
        assert "mask" not in data
        assert "profile" not in data


class TestLayoutResult:
    """Tests for LayoutResult class."""

    def test_empty(self) -> None:
        """Test an empty layout."""
        layout = LayoutResult((), (), (), 0.0, 0.0, 1.0)
        assert layout.is_empty()
        assert len(layout) == 0

    def test_to_dict(self, make_glyph: Callable[..., ProcessedGlyph]) -> None:
        """Test dictionary conversion."""
        layout = LayoutResult(
            glyphs=(make_glyph("a"),),
            positions=(0.0,),
            rotations=(0.0,),
            content_width=200.0,
            content_height=200.0,
            scale=0.8,
            sequence=3,
        )
        data = layout.to_dict()
        assert data["sequence"] == 3
        assert data["positions"] == [0.0]
        assert data["glyphs"][0]["character"] == "a"


class TestLayers:
    """Tests for layer records."""

    def test_z_order_of_kinds(self) -> None:
        """Test base z-indices run from halo to content."""
        assert [kind.name for kind in sorted(LayerKind, key=lambda k: k.value)] == [
            "HALO",
            "SHADOW_HALO",
            "SHADOW",
            "OUTLINE",
            "CONTENT",
        ]

    def test_halo_stroke_width(self) -> None:
        """Test the halo is widened by the outline on both sides."""
        assert HaloStyle("#3f51b5", 15).stroke_width == 15
        assert HaloStyle("#3f51b5", 15, OutlineStyle("#000000", 75)).stroke_width == 105

    def test_transform_about_centre(self) -> None:
        """Test the transform list rotates about the glyph box centre."""
        transform = LayerTransform(scale=1.0, rotation=5.0)
        assert transform.to_svg(10, 200, 200) == (
            "translate(110,100) scale(1) rotate(5) translate(-100,-100)"
        )

    def test_transform_offset(self) -> None:
        """Test the shadow offset is applied in glyph space."""
        transform = LayerTransform(translate_x=-15, translate_y=8)
        assert transform.to_svg(0, 200, 200).endswith("translate(-115,-92)")

    def test_render_layer(self) -> None:
        """Test empty detection and dictionary conversion."""
        layer = RenderLayer(
            kind=LayerKind.SHADOW_HALO,
            glyph_index=2,
            x=12.5,
            z_index=2,
            fragment=EMPTY_FRAGMENT,
            transform=LayerTransform(),
            width=200,
            height=200,
        )
        assert layer.is_empty()
        data = layer.to_dict()
        assert data["kind"] == "shadow_halo"
        assert data["transform"]["scale"] == 1.0
