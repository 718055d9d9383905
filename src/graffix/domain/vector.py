"""Structured vector geometry for glyph assets.

SVG markup is parsed once into an immutable VectorDocument: the root
attributes plus an ordered tree of shape records, groups and opaque
passthrough elements. Layer derivation works on this structure with pure
functions and the result is serialized back to markup only at the output
boundary.

- Shapes (``path``, ``rect``, ``circle``, ``ellipse``, ``line``,
  ``polyline``, ``polygon``, ``use``) become ShapeRecords
- Groups (``g``, ``a``, ``switch``, nested ``svg``) become ShapeGroups and
  keep their attributes, so transforms, classes and inherited paint stay in
  effect
- ``style``, ``defs`` and other non-rendered definitions are carried through
  unchanged as PassthroughElements
- Anything else (text, images, metadata, foreign namespaces) is dropped

Inline ``style`` declarations are kept apart from presentation attributes.
Paint set through ``with_style`` therefore wins over class-based CSS rules,
as it does in the markup.

Effect classes (``shadow-effect``, ``shine-effect``) apply to an element and
to everything inside it, so every record also knows the classes of its
ancestor groups.
"""

import copy
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

import defusedxml.ElementTree as DefusedET
from defusedxml import DefusedXmlException
from fontTools.pens.recordingPen import RecordingPen
from fontTools.svgLib.path import parse_path

from graffix.exceptions import MalformedVectorContentError

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
SHADOW_CLASS = "shadow-effect"
SHINE_CLASS = "shine-effect"

SHAPE_TAGS = frozenset({"path", "rect", "circle", "ellipse", "line", "polyline", "polygon", "use"})
GROUP_TAGS = frozenset({"g", "a", "switch", "svg"})
PASSTHROUGH_TAGS = frozenset(
    {
        "style",
        "defs",
        "clipPath",
        "mask",
        "symbol",
        "pattern",
        "marker",
        "linearGradient",
        "radialGradient",
        "filter",
    }
)

ET.register_namespace("xlink", XLINK_NS)

Attributes = tuple[tuple[str, str], ...]


def _local_name(tag: str) -> str | None:
    """Get the SVG element name of a tag, None for foreign namespaces."""
    if tag.startswith("{"):
        namespace, _, name = tag[1:].partition("}")
        return name if namespace == SVG_NS else None
    return tag


def _parse_style(style: str) -> Attributes:
    declarations: dict[str, str] = {}
    for item in style.split(";"):
        name, sep, value = item.partition(":")
        if sep and name.strip():
            declarations[name.strip()] = value.strip()
    return tuple(declarations.items())


def _format_style(style: Attributes) -> str:
    return ";".join(f"{name}:{value}" for name, value in style)


def _lookup(pairs: Attributes, name: str) -> str | None:
    for key, value in pairs:
        if key == name:
            return value
    return None


def _merge(pairs: Attributes, updates: Mapping[str, str]) -> Attributes:
    """Set pairs, keeping existing order and appending new names."""
    remaining = dict(updates)
    merged: list[tuple[str, str]] = []
    for key, value in pairs:
        if key in remaining:
            merged.append((key, remaining.pop(key)))
        else:
            merged.append((key, value))
    merged.extend(remaining.items())
    return tuple(merged)


def _drop(pairs: Attributes, names: tuple[str, ...]) -> Attributes:
    return tuple((k, v) for k, v in pairs if k not in names)


def _validate_path_data(d: str) -> None:
    """Check that path data can be drawn.

    Raises:
        MalformedVectorContentError: If the path data is invalid
    """
    try:
        parse_path(d, RecordingPen())
    except (ValueError, IndexError, TypeError) as e:
        raise MalformedVectorContentError(f"invalid path data: {e}") from e


@dataclass(frozen=True)
class ShapeRecord:
    """A single drawable element with its attributes.

    Attributes:
        attributes: Ordered (name, value) attribute pairs, without ``style``
        tag: Element name
        style: Ordered inline style declarations
        inherited_classes: Classes of the enclosing groups
    """

    attributes: Attributes
    tag: str = "path"
    style: Attributes = ()
    inherited_classes: frozenset[str] = field(default=frozenset(), compare=False)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get the effective value of a property, inline style first."""
        value = _lookup(self.style, name)
        if value is None:
            value = _lookup(self.attributes, name)
        return default if value is None else value

    @property
    def classes(self) -> frozenset[str]:
        return frozenset((_lookup(self.attributes, "class") or "").split())

    def has_class(self, name: str) -> bool:
        """Check the element's own classes and those of its ancestors."""
        return name in self.classes or name in self.inherited_classes

    @property
    def is_shadow(self) -> bool:
        return self.has_class(SHADOW_CLASS)

    @property
    def is_shine(self) -> bool:
        return self.has_class(SHINE_CLASS)

    @property
    def is_effect(self) -> bool:
        """True for pre-authored shadow or shine geometry."""
        return self.is_shadow or self.is_shine

    def with_attributes(self, updates: Mapping[str, str]) -> "ShapeRecord":
        """Return a copy with presentation attributes set."""
        return ShapeRecord(
            _merge(self.attributes, updates), self.tag, self.style, self.inherited_classes
        )

    def with_style(self, updates: Mapping[str, str]) -> "ShapeRecord":
        """Return a copy with inline style declarations set."""
        return ShapeRecord(
            self.attributes, self.tag, _merge(self.style, updates), self.inherited_classes
        )

    def without_attributes(self, *names: str) -> "ShapeRecord":
        """Return a copy with the named properties removed from attributes and style."""
        return ShapeRecord(
            _drop(self.attributes, names),
            self.tag,
            _drop(self.style, names),
            self.inherited_classes,
        )


@dataclass(frozen=True)
class PassthroughElement:
    """A non-rendered element (stylesheet, definitions) kept verbatim.

    Attributes:
        tag: Element name
        markup: Serialized element without the SVG namespace
    """

    tag: str
    markup: str


@dataclass(frozen=True)
class ShapeGroup:
    """A group of nodes emitted as one ``<g>`` element.

    Attributes:
        attributes: Group attributes (id, class, transform, paint), without ``style``
        children: Nested nodes in painting order
        style: Inline style declarations
        inherited_classes: Classes of the enclosing groups
    """

    attributes: Attributes
    children: tuple["Node", ...]
    style: Attributes = ()
    inherited_classes: frozenset[str] = field(default=frozenset(), compare=False)

    def get(self, name: str, default: str | None = None) -> str | None:
        value = _lookup(self.style, name)
        if value is None:
            value = _lookup(self.attributes, name)
        return default if value is None else value

    @property
    def group_id(self) -> str | None:
        return _lookup(self.attributes, "id")

    def has_class(self, name: str) -> bool:
        own = (_lookup(self.attributes, "class") or "").split()
        return name in own or name in self.inherited_classes

    @property
    def is_effect(self) -> bool:
        return self.has_class(SHADOW_CLASS) or self.has_class(SHINE_CLASS)

    def with_style(self, updates: Mapping[str, str]) -> "ShapeGroup":
        return ShapeGroup(
            self.attributes, self.children, _merge(self.style, updates), self.inherited_classes
        )

    def with_children(self, children: tuple["Node", ...]) -> "ShapeGroup":
        return ShapeGroup(self.attributes, children, self.style, self.inherited_classes)


Node = ShapeRecord | ShapeGroup | PassthroughElement


def _map_shapes(
    nodes: tuple[Node, ...], fn: Callable[[ShapeRecord], ShapeRecord]
) -> tuple[Node, ...]:
    mapped: list[Node] = []
    for node in nodes:
        if isinstance(node, ShapeRecord):
            mapped.append(fn(node))
        elif isinstance(node, ShapeGroup):
            mapped.append(node.with_children(_map_shapes(node.children, fn)))
        else:
            mapped.append(node)
    return tuple(mapped)


def _map_groups(
    nodes: tuple[Node, ...], fn: Callable[[ShapeGroup], ShapeGroup]
) -> tuple[Node, ...]:
    return tuple(
        fn(node.with_children(_map_groups(node.children, fn)))
        if isinstance(node, ShapeGroup)
        else node
        for node in nodes
    )


def _filter_shapes(
    nodes: tuple[Node, ...], keep: Callable[[ShapeRecord], bool]
) -> tuple[Node, ...]:
    kept: list[Node] = []
    for node in nodes:
        if isinstance(node, ShapeRecord):
            if keep(node):
                kept.append(node)
        elif isinstance(node, ShapeGroup):
            kept.append(node.with_children(_filter_shapes(node.children, keep)))
        else:
            kept.append(node)
    return tuple(kept)


@dataclass(frozen=True)
class VectorDocument:
    """Immutable structured representation of an SVG glyph.

    Attributes:
        attributes: Root ``<svg>`` attributes
        children: Shapes, groups and passthrough elements in document order
    """

    attributes: Attributes
    children: tuple[Node, ...]

    def get(self, name: str, default: str | None = None) -> str | None:
        value = _lookup(self.attributes, name)
        return default if value is None else value

    def iter_shapes(self) -> Iterator[ShapeRecord]:
        """Iterate over all shapes, including those inside groups."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if isinstance(node, ShapeRecord):
                yield node
            elif isinstance(node, ShapeGroup):
                stack.extend(reversed(node.children))

    def passthrough(self) -> tuple[PassthroughElement, ...]:
        """Top-level passthrough elements."""
        return tuple(c for c in self.children if isinstance(c, PassthroughElement))

    def with_root_attributes(self, updates: Mapping[str, str]) -> "VectorDocument":
        return VectorDocument(attributes=_merge(self.attributes, updates), children=self.children)

    def with_children(self, children: tuple[Node, ...]) -> "VectorDocument":
        return VectorDocument(attributes=self.attributes, children=children)

    def map_shapes(self, fn: Callable[[ShapeRecord], ShapeRecord]) -> "VectorDocument":
        """Apply fn to every shape at any depth, returning a new document."""
        return self.with_children(_map_shapes(self.children, fn))

    def map_groups(self, fn: Callable[[ShapeGroup], ShapeGroup]) -> "VectorDocument":
        """Apply fn to every group, innermost first."""
        return self.with_children(_map_groups(self.children, fn))

    def filter_shapes(self, keep: Callable[[ShapeRecord], bool]) -> "VectorDocument":
        """Drop shapes for which keep returns False, keeping groups and passthrough."""
        return self.with_children(_filter_shapes(self.children, keep))


def parse_document(markup: str | bytes) -> VectorDocument:
    """Parse SVG markup into a VectorDocument.

    Args:
        markup: SVG document text or bytes

    Returns:
        Structured document

    Raises:
        MalformedVectorContentError: If the markup is not a well-formed SVG
            document or contains invalid path data
    """
    try:
        root = DefusedET.fromstring(markup)
    except (ET.ParseError, DefusedXmlException, ValueError) as e:
        raise MalformedVectorContentError(str(e)) from e

    name = _local_name(root.tag)
    if name != "svg":
        raise MalformedVectorContentError(f"root element is <{name or root.tag}>, not <svg>")

    return VectorDocument(
        attributes=tuple((k, v) for k, v in root.attrib.items()),
        children=_collect(root, frozenset()),
    )


def _split_style(element: ET.Element) -> tuple[Attributes, Attributes]:
    attributes = dict(element.attrib)
    style = _parse_style(attributes.pop("style", ""))
    return tuple(attributes.items()), style


def _own_classes(element: ET.Element) -> frozenset[str]:
    return frozenset((element.get("class") or "").split())


def _collect(element: ET.Element, inherited: frozenset[str]) -> tuple[Node, ...]:
    nodes: list[Node] = []
    for child in element:
        if not isinstance(child.tag, str):
            continue
        name = _local_name(child.tag)
        if name is None:
            continue

        if name in PASSTHROUGH_TAGS:
            nodes.append(_passthrough(child, name))
        elif name in SHAPE_TAGS:
            nodes.append(_shape_record(child, name, inherited))
        elif name in GROUP_TAGS:
            attributes, style = _split_style(child)
            nodes.append(
                ShapeGroup(
                    attributes=attributes,
                    children=_collect(child, inherited | _own_classes(child)),
                    style=style,
                    inherited_classes=inherited,
                )
            )
    return tuple(nodes)


def _shape_record(element: ET.Element, name: str, inherited: frozenset[str]) -> ShapeRecord:
    if name == "path":
        d = element.get("d")
        if d:
            _validate_path_data(d)

    attributes, style = _split_style(element)
    return ShapeRecord(attributes=attributes, tag=name, style=style, inherited_classes=inherited)


def _strip_svg_namespace(element: ET.Element) -> ET.Element:
    prefix = f"{{{SVG_NS}}}"
    for node in element.iter():
        if isinstance(node.tag, str) and node.tag.startswith(prefix):
            node.tag = node.tag[len(prefix):]
    return element


def _passthrough(element: ET.Element, name: str) -> PassthroughElement:
    detached = _strip_svg_namespace(copy.deepcopy(element))
    detached.tail = None
    return PassthroughElement(tag=name, markup=ET.tostring(detached, encoding="unicode"))


def serialize_document(document: VectorDocument) -> str:
    """Serialize a VectorDocument to SVG markup."""
    return ET.tostring(to_element(document), encoding="unicode")


def _element_attributes(attributes: Attributes, style: Attributes) -> dict[str, str]:
    values = dict(attributes)
    if style:
        values["style"] = _format_style(style)
    return values


def _append(parent: ET.Element, node: Node) -> None:
    if isinstance(node, PassthroughElement):
        parent.append(DefusedET.fromstring(node.markup))
    elif isinstance(node, ShapeGroup):
        group = ET.SubElement(parent, "g", _element_attributes(node.attributes, node.style))
        for child in node.children:
            _append(group, child)
    else:
        ET.SubElement(parent, node.tag, _element_attributes(node.attributes, node.style))


def to_element(document: VectorDocument) -> ET.Element:
    """Build an ElementTree ``<svg>`` element for a document."""
    root = ET.Element("svg", {"xmlns": SVG_NS})
    for key, value in document.attributes:
        root.set(key, value)

    for child in document.children:
        _append(root, child)

    return root
