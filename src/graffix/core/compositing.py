"""Compositing pipeline: derive effect layers from glyph content.

Each derivation parses the glyph markup into a VectorDocument, applies a
pure transformation for one render mode and serializes the result. The
derivations never share state, so every fragment is an independent copy
of the glyph.

Layers, back to front:
1. Halo ("shield"): wide stroke around the geometry
2. Shadow halo: halo around the pre-authored shadow paths
3. Shadow: pre-authored shadow paths in the outline color
4. Outline ("stamp"): stroke around the geometry
5. Content: filled geometry with optional stroke and shine, later glyphs
   stacked below earlier ones

A fragment whose markup cannot be parsed degrades on its own: the content
layer falls back to the unmodified markup and effect layers to an empty
fragment.
"""

from collections.abc import Callable

import structlog

from graffix.config.settings import StyleConfiguration
from graffix.domain.glyph import LayoutResult
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
)
from graffix.domain.vector import (
    Node,
    PassthroughElement,
    ShapeGroup,
    ShapeRecord,
    VectorDocument,
    parse_document,
    serialize_document,
)
from graffix.exceptions import MalformedVectorContentError

logger = structlog.get_logger("graffix.compositing")

HALO_GROUP_ID = "halo-group"
OUTLINE_GROUP_ID = "outline-group"

_STROKE_PROPERTIES = ("stroke", "stroke-width", "stroke-linejoin", "stroke-linecap", "paint-order")
_HIDDEN = {"display": "none"}
_VISIBLE = {"display": "inline"}


def _num(value: float) -> str:
    return f"{value:g}"


def _round_stroke(color: str, width: float) -> dict[str, str]:
    return {
        "stroke": color,
        "stroke-width": _num(width),
        "stroke-linejoin": "round",
        "stroke-linecap": "round",
    }


def _outline_shape(shape: ShapeRecord, color: str, width: float) -> ShapeRecord:
    return shape.with_style({"fill": "none", **_round_stroke(color, width)})


def _reveal_effect_groups(document: VectorDocument) -> VectorDocument:
    """Show groups carrying an effect class so their shapes decide visibility."""
    return document.map_groups(lambda g: g.with_style(_VISIBLE) if g.is_effect else g)


def _derive(
    markup: str,
    kind: LayerKind,
    build: Callable[[VectorDocument], VectorDocument],
    fallback: str,
) -> str:
    try:
        document = parse_document(markup)
    except MalformedVectorContentError as e:
        logger.warning("Layer degraded", layer=kind.name.lower(), error=e.reason)
        return fallback
    return serialize_document(build(document).with_root_attributes({"overflow": "visible"}))


def render_content(markup: str, is_space: bool, style: ContentStyle) -> str:
    """Derive the main content layer.

    Regular shapes get the fill color and, when configured, a round stroke
    painted behind the fill. Shine shapes are revealed with their own color
    and opacity or hidden. Shadow shapes are hidden.

    Args:
        markup: Glyph SVG markup
        is_space: True for the blank space glyph
        style: Content render mode

    Returns:
        Serialized fragment; the unmodified markup for spaces or on parse failure
    """
    if is_space:
        return markup

    def paint(shape: ShapeRecord) -> ShapeRecord:
        if shape.is_shadow:
            return shape.with_style(_HIDDEN)

        if shape.is_shine:
            if style.shine is None:
                return shape.with_style(_HIDDEN)
            return shape.with_style(
                {
                    **_VISIBLE,
                    "fill": style.shine.color,
                    "fill-opacity": _num(style.shine.opacity),
                }
            )

        shape = shape.with_style({"fill": style.fill_color})
        if style.stroke is None:
            return shape.without_attributes(*_STROKE_PROPERTIES)
        return shape.with_style(
            {
                **_round_stroke(style.stroke.color, style.stroke.width),
                "paint-order": "stroke fill",
            }
        )

    return _derive(
        markup,
        LayerKind.CONTENT,
        lambda doc: _reveal_effect_groups(doc).map_shapes(paint),
        markup,
    )


def render_stamp(
    markup: str,
    is_space: bool,
    outline: OutlineStyle | None = None,
    halo: HaloStyle | None = None,
) -> str:
    """Derive the stroke-only outline/halo layer.

    Effect shapes are dropped and every remaining shape is stroked without
    fill. Groups keep their transforms and stylesheets are carried along.
    With only one of outline or halo, shapes are stroked at that effect's
    own color and width. With both, a halo group stroked at outline width
    + 2 × halo width is emitted first and an outline group above it.

    Args:
        markup: Glyph SVG markup
        is_space: True for the blank space glyph
        outline: Outline render mode, None when disabled
        halo: Halo render mode, None when disabled

    Returns:
        Serialized fragment; the empty fragment for spaces, when both effects
        are disabled, or on parse failure
    """
    if is_space:
        return EMPTY_FRAGMENT

    passes: list[tuple[str | None, str, float]]
    if outline is not None and halo is not None:
        passes = [
            (HALO_GROUP_ID, halo.color, outline.width + halo.width * 2),
            (OUTLINE_GROUP_ID, outline.color, outline.width),
        ]
    elif outline is not None:
        passes = [(None, outline.color, outline.width)]
    elif halo is not None:
        passes = [(None, halo.color, halo.width)]
    else:
        return EMPTY_FRAGMENT

    def stroked(nodes: tuple[Node, ...], color: str, width: float) -> tuple[Node, ...]:
        document = VectorDocument(attributes=(), children=nodes)
        return (
            document.filter_shapes(lambda s: not s.is_effect)
            .map_shapes(lambda s: _outline_shape(s, color, width))
            .children
        )

    def build(document: VectorDocument) -> VectorDocument:
        if len(passes) == 1:
            _, color, width = passes[0]
            return document.with_children(stroked(document.children, color, width))

        geometry = tuple(c for c in document.children if not isinstance(c, PassthroughElement))
        groups = tuple(
            ShapeGroup(attributes=(("id", group_id),), children=stroked(geometry, color, width))
            for group_id, color, width in passes
            if group_id is not None
        )
        return document.with_children((*document.passthrough(), *groups))

    kind = LayerKind.OUTLINE if halo is None else LayerKind.HALO
    return _derive(markup, kind, build, EMPTY_FRAGMENT)


def render_outline(markup: str, is_space: bool, style: OutlineStyle) -> str:
    """Derive the outline layer drawn above shadows."""
    return render_stamp(markup, is_space, outline=style)


def render_halo(markup: str, is_space: bool, style: HaloStyle) -> str:
    """Derive the halo layer, with its concentric outline when enabled."""
    return render_stamp(markup, is_space, outline=style.outline, halo=style)


def _only_shadow(
    document: VectorDocument, shadow: Callable[[ShapeRecord], ShapeRecord]
) -> VectorDocument:
    return _reveal_effect_groups(document).map_shapes(
        lambda s: shadow(s) if s.is_shadow else s.with_style(_HIDDEN)
    )


def render_shadow(markup: str, is_space: bool, style: ShadowStyle) -> str:
    """Derive the drop shadow layer.

    Shadow shapes are revealed and filled with the outline color, stroked at
    half the outline width when the outline is enabled. All other shapes are
    hidden.
    """
    if is_space:
        return EMPTY_FRAGMENT

    def shadow(shape: ShapeRecord) -> ShapeRecord:
        shape = shape.with_style({**_VISIBLE, "fill": style.color})
        if style.outline_width is None:
            return shape.without_attributes("stroke", "stroke-width")
        return shape.with_style(_round_stroke(style.color, style.outline_width * 0.5))

    return _derive(markup, LayerKind.SHADOW, lambda doc: _only_shadow(doc, shadow), EMPTY_FRAGMENT)


def render_shadow_halo(markup: str, is_space: bool, style: ShadowHaloStyle) -> str:
    """Derive the halo drawn around the shadow shapes."""
    if is_space:
        return EMPTY_FRAGMENT

    def shadow(shape: ShapeRecord) -> ShapeRecord:
        return _outline_shape(shape, style.color, style.width).with_style(_VISIBLE)

    return _derive(
        markup, LayerKind.SHADOW_HALO, lambda doc: _only_shadow(doc, shadow), EMPTY_FRAGMENT
    )


def compose_layers(
    layout: LayoutResult,
    style: StyleConfiguration | LayerStyles,
) -> list[RenderLayer]:
    """Derive every layer of a layout, ordered back to front.

    Effect layers skip blank glyphs; content layers include them so their
    positions are kept. Fragments are derived once per asset and layer kind.

    Args:
        layout: Kerned layout
        style: Style configuration or its per-layer variants

    Returns:
        Layers sorted by ascending z-index
    """
    styles = style.layer_styles() if isinstance(style, StyleConfiguration) else style
    count = len(layout.glyphs)
    fragments: dict[tuple[str, LayerKind], str] = {}
    layers: list[RenderLayer] = []

    effects: list[tuple[LayerKind, Callable[[str, bool], str], tuple[float, float]]] = []
    if styles.halo is not None:
        halo = styles.halo
        effects.append((LayerKind.HALO, lambda m, s: render_halo(m, s, halo), (0.0, 0.0)))
    if styles.shadow_halo is not None:
        shadow_halo = styles.shadow_halo
        effects.append(
            (
                LayerKind.SHADOW_HALO,
                lambda m, s: render_shadow_halo(m, s, shadow_halo),
                shadow_halo.offset,
            )
        )
    if styles.shadow is not None:
        shadow = styles.shadow
        effects.append(
            (LayerKind.SHADOW, lambda m, s: render_shadow(m, s, shadow), shadow.offset)
        )
    if styles.outline is not None:
        outline = styles.outline
        effects.append(
            (LayerKind.OUTLINE, lambda m, s: render_outline(m, s, outline), (0.0, 0.0))
        )
    effects.append(
        (LayerKind.CONTENT, lambda m, s: render_content(m, s, styles.content), (0.0, 0.0))
    )

    for kind, render, (dx, dy) in effects:
        for index, glyph in enumerate(layout.glyphs):
            if glyph.is_blank and kind is not LayerKind.CONTENT:
                continue

            cache_key = (glyph.asset_key, kind)
            if cache_key not in fragments:
                fragments[cache_key] = render(glyph.content, glyph.is_blank)

            z_index = kind.value
            if kind is LayerKind.CONTENT:
                z_index += count - index

            layers.append(
                RenderLayer(
                    kind=kind,
                    glyph_index=index,
                    x=layout.positions[index],
                    z_index=z_index,
                    fragment=fragments[cache_key],
                    transform=LayerTransform(
                        scale=glyph.scale,
                        rotation=layout.rotations[index],
                        translate_x=dx,
                        translate_y=dy,
                    ),
                    width=glyph.width,
                    height=glyph.height,
                )
            )

    layers.sort(key=lambda layer: (layer.z_index, layer.glyph_index))
    return layers
