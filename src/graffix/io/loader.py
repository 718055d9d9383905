"""Asset loader for reading glyph SVG files.

This module provides the AssetLoader class, the only place where the
core blocks on I/O. Each asset is read once per cache key; the result is
memoized by the rasterizer's cache.
"""

from pathlib import Path

import structlog

from graffix.core.rules import AssetCatalog
from graffix.exceptions import AssetFetchError

logger = structlog.get_logger("graffix.loader")


class AssetLoader:
    """Reads glyph assets from a directory.

    Example:
        loader = AssetLoader(Path("assets/letters"))
        svg_bytes = loader.fetch("a1.svg")
    """

    def __init__(self, asset_dir: Path) -> None:
        """Initialize the loader.

        Args:
            asset_dir: Directory holding the SVG assets
        """
        self._asset_dir = asset_dir

    @property
    def asset_dir(self) -> Path:
        return self._asset_dir

    def fetch(self, relative_path: str) -> bytes:
        """Read the bytes of an asset.

        Failures are not retried.

        Args:
            relative_path: Asset file name relative to the asset directory

        Returns:
            Raw asset bytes

        Raises:
            AssetFetchError: If the asset cannot be read
        """
        path = self._asset_dir / relative_path
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error("Asset fetch failed", path=str(path), error=str(e))
            raise AssetFetchError(str(path), e.strerror or str(e)) from e

        logger.debug("Asset fetched", path=str(path), size=len(data))
        return data

    def discover_catalog(self) -> AssetCatalog:
        """Build a catalog from the files in the asset directory.

        Raises:
            AssetFetchError: If the asset directory does not exist
        """
        if not self._asset_dir.is_dir():
            raise AssetFetchError(str(self._asset_dir), "asset directory not found")
        return AssetCatalog.from_directory(self._asset_dir)
