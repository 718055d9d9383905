"""Document writer for assembled layer stacks.

This module assembles the ordered layers of a layout into one standalone SVG
document and writes it to disk.
"""

import xml.etree.ElementTree as ET
from pathlib import Path

import defusedxml.ElementTree as DefusedET

from graffix.config.settings import StyleConfiguration
from graffix.domain.glyph import LayoutResult
from graffix.domain.layers import RenderLayer
from graffix.domain.vector import SVG_NS
from graffix.exceptions import MalformedVectorContentError


def _strip_namespace(element: ET.Element) -> ET.Element:
    for node in element.iter():
        if isinstance(node.tag, str):
            node.tag = node.tag.rsplit("}", 1)[-1]
    return element


def _fragment_element(fragment: str) -> ET.Element:
    try:
        return _strip_namespace(DefusedET.fromstring(fragment))
    except ET.ParseError as e:
        raise MalformedVectorContentError(str(e)) from e


class DocumentWriter:
    """Assembles render layers into a single SVG document.

    Each non-empty layer becomes a ``<g>`` carrying its transform, wrapping
    the layer's own ``<svg>`` fragment. Layers are written in the order
    given, which must be back to front.

    Example:
        layers = compose_layers(layout, style)
        writer = DocumentWriter(layout, layers, style)
        writer.save(Path("tag.svg"))
    """

    def __init__(
        self,
        layout: LayoutResult,
        layers: list[RenderLayer],
        style: StyleConfiguration | None = None,
    ) -> None:
        self.layout = layout
        self.layers = layers
        self.style = style or StyleConfiguration()

    def build(self) -> ET.Element:
        """Build the document element."""
        width = f"{self.layout.content_width:g}"
        height = f"{self.layout.content_height:g}"
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": width,
                "height": height,
                "viewBox": f"0 0 {width} {height}",
                "overflow": "visible",
            },
        )

        if self.style.background_enabled:
            ET.SubElement(
                root,
                "rect",
                {
                    "x": "0",
                    "y": "0",
                    "width": "100%",
                    "height": "100%",
                    "fill": self.style.background_color,
                },
            )

        for layer in self.layers:
            if layer.is_empty() or self.layout.glyphs[layer.glyph_index].is_blank:
                continue
            group = ET.SubElement(
                root,
                "g",
                {
                    "class": f"layer-{layer.kind.name.lower().replace('_', '-')}",
                    "transform": layer.transform.to_svg(layer.x, layer.width, layer.height),
                },
            )
            group.append(_fragment_element(layer.fragment))

        return root

    def to_string(self) -> str:
        return ET.tostring(self.build(), encoding="unicode")

    def save(self, output_path: Path) -> None:
        """Write the document.

        Args:
            output_path: Destination file
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.to_string(), encoding="utf-8")

    @staticmethod
    def get_output_path(text: str, directory: Path | None = None) -> Path:
        """Derive a default output path from the rendered text.

        Args:
            text: Rendered text
            directory: Output directory (current directory if None)

        Returns:
            Path like ``hello-world.svg``
        """
        stem = "-".join(text.lower().split()) or "graffix"
        return (directory or Path(".")) / f"{stem}.svg"
