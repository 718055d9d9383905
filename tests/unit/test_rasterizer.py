"""Unit tests for rasterization and silhouette extraction."""

from collections.abc import Callable
from unittest.mock import Mock

import numpy as np
import pytest

from graffix.config import RasterConfig
from graffix.core.cache import GlyphCache
from graffix.core.rasterizer import (
    SPACE,
    GlyphRasterizer,
    extract_silhouette,
    interpolate_profile,
    make_space_glyph,
    prepare_for_raster,
)
from graffix.domain.glyph import Bounds, ColumnRange
from graffix.domain.vector import parse_document
from graffix.exceptions import EmptyGlyphError, MalformedVectorContentError

EMPTY_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" '
    'viewBox="0 0 200 200"></svg>'
)


class TestExtractSilhouette:
    """Tests for extract_silhouette."""

    def test_block_bounds(self, alpha_block: Callable[..., np.ndarray]) -> None:
        """Test bounds are the outermost sampled opaque pixels."""
        silhouette = extract_silhouette(alpha_block(40, 160, 20, 180), stride=2)
        assert silhouette.bounds == Bounds(left=40, right=158, top=20, bottom=178)
        assert not silhouette.is_empty

    def test_mask_is_block_filled(self, alpha_block: Callable[..., np.ndarray]) -> None:
        """Test every opaque sample marks its whole stride block."""
        silhouette = extract_silhouette(alpha_block(40, 160, 20, 180), stride=2)
        mask = silhouette.mask
        assert mask.shape == (200, 200)
        assert mask[20:180, 40:160].all()
        assert not mask[:20].any()
        assert not mask[:, :40].any()
        assert np.count_nonzero(mask) == 160 * 120

    def test_mask_is_read_only(self, alpha_block: Callable[..., np.ndarray]) -> None:
        """Test the mask cannot be modified."""
        silhouette = extract_silhouette(alpha_block(40, 160, 20, 180))
        with pytest.raises(ValueError):
            silhouette.mask[0, 0] = True

    def test_profile_columns(self, alpha_block: Callable[..., np.ndarray]) -> None:
        """Test each inked column records its vertical extent and density."""
        silhouette = extract_silhouette(alpha_block(40, 160, 20, 180), stride=2)
        column = silhouette.profile[41]
        assert column is not None
        assert column.top == 20
        assert column.bottom == 178
        assert column.density == pytest.approx(80 / 79.5)
        assert silhouette.profile[39] is None
        assert silhouette.profile[160] is None

    def test_sparse_column_density(self) -> None:
        """Test density counts opaque samples between first and last."""
        alpha = np.zeros((200, 200), dtype=np.uint8)
        alpha[10, 100] = 255
        alpha[170, 100] = 255
        silhouette = extract_silhouette(alpha, stride=2)
        column = silhouette.profile[100]
        assert column is not None
        assert column.density == pytest.approx(2 / (161 / 2))

    def test_threshold_is_exclusive(self, alpha_block: Callable[..., np.ndarray]) -> None:
        """Test alpha equal to the threshold is not opaque."""
        alpha = alpha_block(40, 160, 20, 180)
        alpha[alpha > 0] = 20
        silhouette = extract_silhouette(alpha, threshold=20)
        assert silhouette.is_empty
        assert silhouette.bounds is None
        assert not silhouette.mask.any()

    def test_short_gap_interpolated(self) -> None:
        """Test a gap narrower than the limit is filled from its neighbours."""
        alpha = np.zeros((200, 200), dtype=np.uint8)
        alpha[20:100, 40:50] = 255
        alpha[60:140, 56:70] = 255
        silhouette = extract_silhouette(alpha, stride=2)

        gap = silhouette.profile[50:56]
        assert all(column is not None for column in gap)
        assert (gap[0].top, gap[0].bottom) == (26, 104)
        tops = [column.top for column in gap]
        assert tops == sorted(tops)
        assert 20 < tops[0] and tops[-1] < 60

    def test_wide_gap_left_unset(self) -> None:
        """Test gaps at or above the limit are not interpolated."""
        alpha = np.zeros((200, 200), dtype=np.uint8)
        alpha[20:100, 40:50] = 255
        alpha[20:100, 80:100] = 255
        silhouette = extract_silhouette(alpha, stride=2)
        assert all(column is None for column in silhouette.profile[50:80])


class TestInterpolateProfile:
    """Tests for interpolate_profile."""

    def test_linear_fill(self) -> None:
        """Test top, bottom and density are interpolated linearly."""
        profile: list[ColumnRange | None] = [None] * 10
        profile[2] = ColumnRange(top=10, bottom=20, density=1.0)
        profile[6] = ColumnRange(top=30, bottom=40, density=0.5)

        interpolate_profile(profile, left=2, right=6)

        filled = profile[2:7]
        assert [c.top for c in filled] == [10, 15, 20, 25, 30]
        assert [c.bottom for c in filled] == [20, 25, 30, 35, 40]
        assert [c.density for c in filled] == pytest.approx([1.0, 0.875, 0.75, 0.625, 0.5])
        assert profile[:2] == [None, None]
        assert profile[7:] == [None, None, None]

    def test_gap_limit_is_exclusive(self) -> None:
        """Test neighbours exactly max_gap apart are not bridged."""
        profile: list[ColumnRange | None] = [None] * 10
        profile[2] = ColumnRange(top=10, bottom=20, density=1.0)
        profile[6] = ColumnRange(top=30, bottom=40, density=0.5)

        interpolate_profile(profile, left=2, right=6, max_gap=4)

        assert profile[3:6] == [None, None, None]


class TestRasterPreparation:
    """Tests for prepare_for_raster."""

    def test_square_size_and_fit(self, glyph_svg: str) -> None:
        """Test the root is sized to the raster and centred."""
        document = prepare_for_raster(parse_document(glyph_svg), 200)
        assert document.get("width") == "200"
        assert document.get("height") == "200"
        assert document.get("preserveAspectRatio") == "xMidYMid meet"
        assert document.get("viewBox") == "0 0 200 200"

    def test_view_box_from_size(self) -> None:
        """Test a viewBox is derived from the original size when missing."""
        markup = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="100px" height="50">'
            '<path d="M0 0 H10 V10 Z"/></svg>'
        )
        document = prepare_for_raster(parse_document(markup), 200)
        assert document.get("viewBox") == "0 0 100 50"
        assert document.get("width") == "200"


class TestSpaceGlyph:
    """Tests for the blank space glyph."""

    def test_space_glyph(self) -> None:
        """Test the space glyph is blank with a fixed width."""
        glyph = make_space_glyph(200, 70)
        assert glyph.is_blank
        assert glyph.character == SPACE
        assert glyph.width == 70
        assert glyph.height == 200
        assert glyph.bounds == Bounds(left=0, right=70, top=0, bottom=200)
        assert glyph.opaque_pixel_count() == 0
        assert all(column is None for column in glyph.profile)


class TestGlyphRasterizer:
    """Tests for GlyphRasterizer."""

    def test_rasterize(self, glyph_svg: str) -> None:
        """Test a letter asset rasterizes to the expected ink box."""
        glyph = GlyphRasterizer().rasterize(glyph_svg, "a", "a:standard")

        assert glyph.width == 200
        assert glyph.height == 200
        assert glyph.character == "a"
        assert glyph.asset_key == "a:standard"
        assert not glyph.is_blank
        assert glyph.bounds.left == pytest.approx(50, abs=2)
        assert glyph.bounds.right == pytest.approx(148, abs=2)
        assert glyph.bounds.top == pytest.approx(30, abs=2)
        assert glyph.bounds.bottom == pytest.approx(168, abs=2)
        assert glyph.opaque_pixel_count() > 0
        assert 0 <= glyph.bounds.left <= glyph.bounds.right <= glyph.width

    def test_rasterize_bytes(self, glyph_svg: str) -> None:
        """Test raw asset bytes are accepted."""
        glyph = GlyphRasterizer().rasterize(glyph_svg.encode("utf-8"), "b")
        assert glyph.asset_key == "b"

    def test_content_is_sized_markup(self, glyph_svg: str) -> None:
        """Test the glyph content is the prepared document."""
        glyph = GlyphRasterizer(RasterConfig(resolution=120)).rasterize(glyph_svg, "a")
        assert glyph.width == 120
        assert 'width="120"' in glyph.content
        assert "shadow-effect" in glyph.content

    def test_rasterize_basic_shape(self) -> None:
        """Test a letter drawn with a polygon inside a group has ink."""
        markup = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" '
            'viewBox="0 0 200 200"><g fill="#222222">'
            '<polygon points="40,20 160,20 160,180 40,180"/></g></svg>'
        )
        glyph = GlyphRasterizer().rasterize(markup, "i")

        assert glyph.bounds.left == pytest.approx(40, abs=2)
        assert glyph.bounds.right == pytest.approx(159, abs=2)
        assert glyph.bounds.top == pytest.approx(20, abs=2)
        assert glyph.bounds.bottom == pytest.approx(179, abs=2)
        assert "<polygon " in glyph.content

    def test_empty_glyph(self) -> None:
        """Test an asset without visible pixels raises EmptyGlyphError."""
        with pytest.raises(EmptyGlyphError) as exc_info:
            GlyphRasterizer().rasterize(EMPTY_SVG, "q")
        assert exc_info.value.character == "q"

    def test_malformed_markup(self) -> None:
        """Test unparseable markup raises MalformedVectorContentError."""
        with pytest.raises(MalformedVectorContentError):
            GlyphRasterizer().rasterize(b"<svg><path", "a")

    def test_process_uses_cache(self, glyph_svg: str) -> None:
        """Test the asset is fetched and rasterized once per key."""
        cache = GlyphCache()
        rasterizer = GlyphRasterizer(cache=cache)
        fetch = Mock(return_value=glyph_svg.encode("utf-8"))

        first = rasterizer.process("a", "a:standard", fetch)
        second = rasterizer.process("a", "a:standard", fetch)

        fetch.assert_called_once()
        assert second is first
        assert "a:standard" in cache

    def test_process_space(self) -> None:
        """Test the space glyph is returned without fetching."""
        rasterizer = GlyphRasterizer()
        fetch = Mock()
        glyph = rasterizer.process(SPACE, "space", fetch)
        fetch.assert_not_called()
        assert glyph is rasterizer.space_glyph

    def test_process_does_not_cache_failures(self) -> None:
        """Test a failed rasterization leaves no cache entry."""
        cache = GlyphCache()
        rasterizer = GlyphRasterizer(cache=cache)
        with pytest.raises(EmptyGlyphError):
            rasterizer.process("q", "q:standard", lambda: EMPTY_SVG.encode("utf-8"))
        assert len(cache) == 0
