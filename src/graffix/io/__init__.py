"""Asset and document I/O layer for graffix.

Key responsibilities:
- Read glyph SVG assets from an asset directory
- Discover the asset catalog from file names
- Assemble derived layers into one SVG document and write it

Key classes:
- AssetLoader: Fetch asset bytes
- DocumentWriter: Save assembled documents
"""

from graffix.io.loader import AssetLoader
from graffix.io.writer import DocumentWriter

__all__ = [
    "AssetLoader",
    "DocumentWriter",
]
