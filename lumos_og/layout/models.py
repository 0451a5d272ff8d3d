"""Renderer-agnostic layout tree used to describe an OG card.

A card is a tree of :class:`Container` nodes holding ordered children and
:class:`TextLeaf` nodes holding a single string. Styling lives in an explicit
:class:`Style` record rather than free-form mappings so the renderer can match
on a closed set of node types and attributes.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

Direction = typ.Literal["row", "column"]
Justify = typ.Literal["start", "center", "end", "space-between"]
Align = typ.Literal["stretch", "start", "center", "end"]


@dc.dataclass(frozen=True, slots=True)
class GradientStop:
    """Colour at a relative offset (0.0 to 1.0) along a gradient."""

    offset: float
    color: str
    opacity: float = 1.0


@dc.dataclass(frozen=True, slots=True)
class LinearGradient:
    """CSS-style linear gradient; ``angle`` follows ``linear-gradient`` degrees."""

    angle: float
    stops: tuple[GradientStop, ...]


Paint = str | LinearGradient


@dc.dataclass(frozen=True, slots=True)
class Style:
    """Visual attributes shared by containers and text leaves.

    Attributes
    ----------
    direction : str
        Main axis for container children, ``"row"`` or ``"column"``.
    gap : float
        Space inserted between consecutive children.
    color : str or None
        Text fill colour; inherited from the nearest ancestor when ``None``.
    background : str or LinearGradient or None
        Fill painted behind the node's border box.
    background_opacity : float
        Opacity applied to ``background``.
    padding_x, padding_y : float
        Inner spacing on the horizontal and vertical edges.
    margin_top, margin_bottom : float
        Outer spacing applied when the parent stacks children vertically.
    width, height : float or None
        Fixed border-box dimensions; measured from content when ``None``.
    max_width : float or None
        Upper bound used when wrapping text.
    flex_grow : float
        Share of the parent's free main-axis space claimed by this node.
    justify, align : str
        Main-axis distribution and cross-axis alignment of children.
    font_size, font_weight, line_height, letter_spacing : float/int
        Typography for text leaves; ``line_height`` is a multiplier.
    uppercase : bool
        Render the text upper-cased.
    border_color, border_width, border_radius
        Optional outline and corner rounding for the border box.
    """

    direction: Direction = "column"
    gap: float = 0
    color: str | None = None
    background: Paint | None = None
    background_opacity: float = 1.0
    padding_x: float = 0
    padding_y: float = 0
    margin_top: float = 0
    margin_bottom: float = 0
    width: float | None = None
    height: float | None = None
    max_width: float | None = None
    flex_grow: float = 0
    justify: Justify = "start"
    align: Align = "stretch"
    font_size: float = 16
    font_weight: int = 400
    line_height: float = 1.2
    letter_spacing: float = 0
    uppercase: bool = False
    border_color: str | None = None
    border_width: float = 0
    border_radius: float = 0


def padded(padding: float, **kwargs: typ.Any) -> Style:
    """Return a Style with the same padding on every edge."""
    return Style(padding_x=padding, padding_y=padding, **kwargs)


@dc.dataclass(frozen=True, slots=True)
class TextLeaf:
    """A run of text drawn with its style's typography."""

    text: str
    style: Style = Style()


@dc.dataclass(frozen=True, slots=True)
class Container:
    """An ordered group of child nodes laid out along ``style.direction``."""

    children: tuple[LayoutNode, ...] = ()
    style: Style = Style()


LayoutNode = Container | TextLeaf


def iter_text_leaves(node: LayoutNode) -> typ.Iterator[TextLeaf]:
    """Yield every text leaf below ``node`` in document order."""
    match node:
        case TextLeaf():
            yield node
        case Container(children=children):
            for child in children:
                yield from iter_text_leaves(child)


__all__ = [
    "Align",
    "Container",
    "Direction",
    "GradientStop",
    "Justify",
    "LayoutNode",
    "LinearGradient",
    "Paint",
    "Style",
    "TextLeaf",
    "iter_text_leaves",
    "padded",
]
