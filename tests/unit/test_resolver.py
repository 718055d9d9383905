"""Unit tests for glyph asset resolution."""

import pytest

from graffix.core.resolver import AssetResolver
from graffix.core.rules import AssetCatalog
from graffix.exceptions import AssetError, AssetNotFoundError


@pytest.fixture
def resolver() -> AssetResolver:
    return AssetResolver()


class TestAssetResolver:
    """Tests for AssetResolver."""

    def test_standard(self, resolver: AssetResolver) -> None:
        """Test a plain letter resolves to its standard asset."""
        asset = resolver.resolve("a")
        assert asset.path == "a1.svg"
        assert asset.variant == "standard"
        assert asset.key == "a:standard"

    def test_straight_mode_ignores_positions(self, resolver: AssetResolver) -> None:
        """Test first/last variants are never used in straight mode."""
        asset = resolver.resolve("c", is_first=True, is_last=True, mode="straight")
        assert asset.variant == "standard"

    def test_first_variant(self, resolver: AssetResolver) -> None:
        """Test the first letter of a styled word uses its first variant."""
        asset = resolver.resolve("c", is_first=True, mode="classic")
        assert asset.path == "c1-first.svg"
        assert asset.key == "c:first"

    def test_last_variant(self, resolver: AssetResolver) -> None:
        """Test the last letter of a styled word uses its last variant."""
        asset = resolver.resolve("t", is_last=True, mode="classic")
        assert asset.path == "t1-last.svg"

    def test_first_wins_over_last(self, resolver: AssetResolver) -> None:
        """Test a single-letter word prefers the first variant."""
        asset = resolver.resolve("y", is_first=True, is_last=True, mode="classic")
        assert asset.variant == "first"

    def test_position_wins_over_alternate(self, resolver: AssetResolver) -> None:
        """Test a last-position variant wins over an alternate."""
        asset = resolver.resolve("o", is_last=True, is_alternate=True, mode="classic")
        assert asset.variant == "last"

    def test_missing_position_variant_falls_back(self, resolver: AssetResolver) -> None:
        """Test letters without a first variant keep the standard asset."""
        asset = resolver.resolve("k", is_first=True, mode="classic")
        assert asset.variant == "standard"

    def test_alternate(self, resolver: AssetResolver) -> None:
        """Test an alternate request uses the alternate asset."""
        asset = resolver.resolve("o", is_alternate=True)
        assert asset.path == "o2.svg"
        assert asset.key == "o:alternate"

    def test_alternate_without_asset(self, resolver: AssetResolver) -> None:
        """Test an alternate request falls back when no alternate exists."""
        asset = resolver.resolve("a", is_alternate=True)
        assert asset.variant == "standard"

    def test_not_found(self, resolver: AssetResolver) -> None:
        """Test an unknown character raises AssetNotFoundError."""
        with pytest.raises(AssetNotFoundError) as exc_info:
            resolver.resolve("1")
        assert exc_info.value.character == "1"
        assert isinstance(exc_info.value, AssetError)

    def test_custom_catalog(self) -> None:
        """Test resolution against a discovered catalog."""
        resolver = AssetResolver(AssetCatalog(standard={"q": "custom-q1.svg"}))
        assert resolver.resolve("q").path == "custom-q1.svg"
        with pytest.raises(AssetNotFoundError):
            resolver.resolve("a")
