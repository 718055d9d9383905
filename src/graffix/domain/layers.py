"""Layer types for the compositing pipeline.

This module defines the closed set of per-layer render-mode variants and the
records describing a derived layer positioned in the final stack.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

EMPTY_FRAGMENT = "<svg></svg>"


class LayerKind(Enum):
    """Kind of derived layer, valued by its base z-index.

    Layers are stacked back-to-front in ascending z-index. Content layers
    add the reversed glyph index on top of their base so that earlier
    glyphs sit above later ones.
    """

    HALO = 1
    SHADOW_HALO = 2
    SHADOW = 3
    OUTLINE = 4
    CONTENT = 5


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    """Stroke painted behind the fill of the content layer."""

    color: str
    width: float


@dataclass(frozen=True, slots=True)
class ShineStyle:
    """Color and opacity revealed on shine sub-paths."""

    color: str
    opacity: float


@dataclass(frozen=True, slots=True)
class ContentStyle:
    """Render mode for the main glyph content.

    Attributes:
        fill_color: Fill applied to regular paths
        stroke: Optional stroke behind the fill
        shine: Shine color/opacity, None keeps shine paths hidden
    """

    fill_color: str
    stroke: StrokeStyle | None = None
    shine: ShineStyle | None = None


@dataclass(frozen=True, slots=True)
class OutlineStyle:
    """Render mode for the outline ("stamp") layer."""

    color: str
    width: float


@dataclass(frozen=True, slots=True)
class HaloStyle:
    """Render mode for the halo ("shield") layer.

    When an outline is present the halo is drawn as a wider stroke with the
    outline stroked concentrically above it.

    Attributes:
        color: Halo stroke color
        width: Halo width on each side of the outline
        outline: Outline drawn above the halo, if enabled
    """

    color: str
    width: float
    outline: OutlineStyle | None = None

    @property
    def stroke_width(self) -> float:
        """Total stroke width of the halo path."""
        if self.outline is None:
            return self.width
        return self.outline.width + self.width * 2


@dataclass(frozen=True, slots=True)
class ShadowStyle:
    """Render mode for the drop shadow layer.

    Attributes:
        color: Shadow fill color (the outline color)
        outline_width: Outline width when the outline is enabled; the shadow
            is stroked at half of it. None leaves the shadow unstroked.
        offset: Extra (dx, dy) translation of the layer
    """

    color: str
    outline_width: float | None
    offset: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True, slots=True)
class ShadowHaloStyle:
    """Render mode for the halo drawn around the drop shadow."""

    color: str
    width: float
    offset: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True, slots=True)
class LayerStyles:
    """Per-layer variants derived from one style configuration.

    A None variant means the layer is not rendered.
    """

    content: ContentStyle
    halo: HaloStyle | None = None
    shadow_halo: ShadowHaloStyle | None = None
    shadow: ShadowStyle | None = None
    outline: OutlineStyle | None = None


@dataclass(frozen=True, slots=True)
class LayerTransform:
    """Transform applied to a layer about the centre of its glyph box.

    Attributes:
        scale: Uniform scale factor
        rotation: Rotation in degrees
        translate_x: Extra horizontal translation (shadow offset)
        translate_y: Extra vertical translation (shadow offset)
    """

    scale: float = 1.0
    rotation: float = 0.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    def to_svg(self, x: float, box_width: float, box_height: float) -> str:
        """Build an SVG transform list placing a glyph box at x.

        The result is equivalent to a CSS ``scale() rotate() translate()``
        with the transform origin at the box centre.

        Args:
            x: Horizontal position of the glyph box
            box_width: Width of the glyph box
            box_height: Height of the glyph box

        Returns:
            Value for an SVG ``transform`` attribute
        """
        cx = box_width / 2
        cy = box_height / 2
        return (
            f"translate({_num(x + cx)},{_num(cy)}) "
            f"scale({_num(self.scale)}) "
            f"rotate({_num(self.rotation)}) "
            f"translate({_num(self.translate_x - cx)},{_num(self.translate_y - cy)})"
        )


@dataclass(frozen=True)
class RenderLayer:
    """A derived layer fragment positioned in the final stack.

    Attributes:
        kind: Which derived layer this is
        glyph_index: Index of the source glyph in the layout
        x: Horizontal position of the glyph box
        z_index: Stacking order, higher is drawn later
        fragment: Serialized SVG fragment
        transform: Scale, rotation and offset of the layer
        width: Width of the glyph box
        height: Height of the glyph box
    """

    kind: LayerKind
    glyph_index: int
    x: float
    z_index: int
    fragment: str
    transform: LayerTransform
    width: int
    height: int

    def is_empty(self) -> bool:
        return self.fragment == EMPTY_FRAGMENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.name.lower(),
            "glyph_index": self.glyph_index,
            "x": self.x,
            "z_index": self.z_index,
            "fragment": self.fragment,
            "transform": {
                "scale": self.transform.scale,
                "rotation": self.transform.rotation,
                "translate_x": self.transform.translate_x,
                "translate_y": self.transform.translate_y,
            },
        }


def _num(value: float) -> str:
    """Format a number for SVG attributes without trailing zeros."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
