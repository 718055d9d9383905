"""Graffix - Lay out and composite graffiti-style glyph artwork.

Graffix turns a text into a row of per-letter SVG glyphs: it picks stylistic
letter variants, rasterizes each glyph into a coarse silhouette, kerns
neighbouring letters by searching for silhouette collisions, and derives the
effect layers (outline, halo, shadow, shine) stacked around every glyph.

Example:
    $ graffix render hello --assets ./letters

This will create hello.svg with the kerned, outlined letters.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
