"""Lay out a card tree and serialise it as SVG.

Rendering happens in two passes over the layout tree. The measure pass works
out the natural size of every node, wrapping text on word boundaries using the
font's advance widths. The placement pass then positions children with a
small subset of flexbox semantics (direction, gap, padding, vertical margins,
``justify``, ``align`` and ``flex_grow``) and records drawing primitives.
Text is emitted as glyph outlines taken from the registered fonts so the
result looks the same wherever it is rasterised; characters the font lacks
fall back to an SVG ``<text>`` element in a generic family.

Example
-------
>>> from lumos_og.layout import CardDesign, compose_card
>>> renderer = SvgRenderer(fonts)  # doctest: +SKIP
>>> svg = renderer.render(compose_card(record, CardDesign()), 1200, 630)  # doctest: +SKIP
>>> svg.startswith("<svg")  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import math
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from lumos_og.layout.models import Container, LayoutNode, LinearGradient, Style, TextLeaf

if typ.TYPE_CHECKING:
    from .fonts import FontFace, FontSet

MISSING_GLYPH_ADVANCE = 0.6
FALLBACK_FAMILY = "sans-serif"
DEFAULT_TEXT_COLOR = "#000000"
_EPSILON = 1e-6


@dc.dataclass(frozen=True, slots=True)
class Size:
    """Border-box dimensions of a measured node."""

    width: float
    height: float


@dc.dataclass(frozen=True, slots=True)
class SvgGradient:
    """``<linearGradient>`` definition in bounding-box units."""

    id: str
    x1: float
    y1: float
    x2: float
    y2: float
    stops: tuple[tuple[float, str, float], ...]


@dc.dataclass(frozen=True, slots=True)
class SvgRect:
    """Filled and/or stroked rectangle."""

    x: float
    y: float
    width: float
    height: float
    radius: float
    fill: str
    fill_opacity: float
    stroke: str | None
    stroke_width: float
    kind: str = "rect"


@dc.dataclass(frozen=True, slots=True)
class SvgGlyph:
    """Glyph outline offset along its run, in font units."""

    offset: float
    path: str


@dc.dataclass(frozen=True, slots=True)
class SvgGlyphRun:
    """Glyph outlines sharing one baseline, scale, and fill."""

    x: float
    baseline: float
    scale: float
    fill: str
    glyphs: tuple[SvgGlyph, ...]
    kind: str = "glyphs"


@dc.dataclass(frozen=True, slots=True)
class SvgText:
    """Fallback text for characters the registered fonts cannot draw."""

    x: float
    baseline: float
    font_size: float
    font_weight: int
    fill: str
    text: str
    kind: str = "text"


SvgItem = SvgRect | SvgGlyphRun | SvgText


@dc.dataclass(slots=True)
class _Canvas:
    gradients: list[SvgGradient] = dc.field(default_factory=list)
    items: list[SvgItem] = dc.field(default_factory=list)

    def paint(self, paint: str | LinearGradient) -> str:
        """Return an SVG fill value, registering gradients as needed."""
        if isinstance(paint, str):
            return paint
        gradient_id = f"g{len(self.gradients)}"
        self.gradients.append(_gradient(gradient_id, paint))
        return f"url(#{gradient_id})"


def _gradient(gradient_id: str, gradient: LinearGradient) -> SvgGradient:
    """Convert a CSS angle into bounding-box endpoints reaching the corners."""
    radians = math.radians(gradient.angle)
    dx, dy = math.sin(radians), -math.cos(radians)
    reach = abs(dx) + abs(dy)
    half_x, half_y = dx * reach / 2, dy * reach / 2
    return SvgGradient(
        id=gradient_id,
        x1=0.5 - half_x,
        y1=0.5 - half_y,
        x2=0.5 + half_x,
        y2=0.5 + half_y,
        stops=tuple((stop.offset, stop.color, stop.opacity) for stop in gradient.stops),
    )


def _format_number(value: float, digits: int = 3) -> str:
    """Render ``value`` compactly with at most ``digits`` decimals."""
    text = f"{value:.{digits}f}".rstrip("0").rstrip(".")
    return "0" if text in {"", "-0"} else text


class SvgRenderer:
    """Render layout trees to SVG markup using a shared :class:`FontSet`."""

    def __init__(self, fonts: FontSet, *, templates_dir: Path | None = None) -> None:
        """Initialize the renderer and its Jinja environment.

        Parameters
        ----------
        fonts : FontSet
            Faces loaded once for the whole batch; treated as read-only.
        templates_dir : Path, optional
            Directory containing ``card.svg.jinja``. Defaults to the
            package's ``templates`` directory.
        """
        self.fonts = fonts
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["num"] = _format_number
        self.template = self.env.get_template("card.svg.jinja")

    def render(self, node: LayoutNode, width: int, height: int) -> str:
        """Return SVG markup of exactly ``width`` by ``height`` for ``node``."""
        canvas = _Canvas()
        self._place(node, 0, 0, width, height, DEFAULT_TEXT_COLOR, canvas)
        svg = self.template.render(
            width=width,
            height=height,
            gradients=canvas.gradients,
            items=canvas.items,
            fallback_family=FALLBACK_FAMILY,
        )
        return svg if svg.endswith("\n") else svg + "\n"

    # measure pass

    def measure(self, node: LayoutNode, available: float) -> Size:
        """Return the natural border-box size of ``node`` within ``available``."""
        match node:
            case TextLeaf():
                return self._measure_text(node, available)
            case Container():
                return self._measure_container(node, available)
        msg = f"Unsupported layout node: {node!r}"
        raise TypeError(msg)

    def _measure_container(self, node: Container, available: float) -> Size:
        style = node.style
        outer = style.width if style.width is not None else available
        inner = max(outer - 2 * style.padding_x, 0)
        gaps = style.gap * max(len(node.children) - 1, 0)
        if style.direction == "column":
            sizes = [self.measure(child, inner) for child in node.children]
            content_w = max((size.width for size in sizes), default=0)
            content_h = gaps + sum(
                size.height + child.style.margin_top + child.style.margin_bottom
                for child, size in zip(node.children, sizes, strict=True)
            )
        else:
            remaining = inner
            content_w = gaps
            content_h = 0.0
            for child in node.children:
                size = self.measure(child, remaining)
                remaining = max(remaining - size.width - style.gap, 0)
                content_w += size.width
                content_h = max(content_h, size.height)
        return Size(
            width=style.width if style.width is not None else content_w + 2 * style.padding_x,
            height=(
                style.height if style.height is not None else content_h + 2 * style.padding_y
            ),
        )

    def _measure_text(self, leaf: TextLeaf, available: float) -> Size:
        style = leaf.style
        lines = self.wrap(leaf, self._text_width_limit(style, available))
        face = self.fonts.select(style.font_weight)
        widths = [self.text_width(line, face, style) for line in lines]
        line_height = style.font_size * style.line_height
        return Size(
            width=max(widths, default=0) + 2 * style.padding_x,
            height=line_height * len(lines) + 2 * style.padding_y,
        )

    @staticmethod
    def _text_width_limit(style: Style, available: float) -> float:
        limit = available
        if style.max_width is not None:
            limit = min(limit, style.max_width)
        if style.width is not None:
            limit = min(limit, style.width)
        return max(limit - 2 * style.padding_x, 0)

    def text_width(self, text: str, face: FontFace, style: Style) -> float:
        """Return the rendered width of a single line of ``text``."""
        program = face.program
        scale = style.font_size / program.units_per_em
        width = 0.0
        for char in text:
            glyph = program.glyph_name(char)
            if glyph is None:
                width += style.font_size * MISSING_GLYPH_ADVANCE
            else:
                width += program.advance(glyph) * scale
            width += style.letter_spacing
        return width

    def wrap(self, leaf: TextLeaf, max_width: float) -> list[str]:
        """Break the leaf's text into lines no wider than ``max_width``.

        Whitespace collapses as in CSS. Words wider than the line are split
        between characters.
        """
        style = leaf.style
        text = leaf.text.upper() if style.uppercase else leaf.text
        words = text.split()
        if not words:
            return []
        face = self.fonts.select(style.font_weight)
        lines: list[str] = []
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if self.text_width(candidate, face, style) <= max_width + _EPSILON:
                current = candidate
                continue
            if current:
                lines.append(current)
            current = ""
            for piece in self._split_word(word, face, style, max_width):
                if current:
                    lines.append(current)
                current = piece
        if current:
            lines.append(current)
        return lines

    def _split_word(
        self, word: str, face: FontFace, style: Style, max_width: float
    ) -> list[str]:
        if self.text_width(word, face, style) <= max_width + _EPSILON:
            return [word]
        pieces: list[str] = []
        current = ""
        for char in word:
            candidate = current + char
            if current and self.text_width(candidate, face, style) > max_width + _EPSILON:
                pieces.append(current)
                candidate = char
            current = candidate
        if current:
            pieces.append(current)
        return pieces

    # placement pass

    def _place(
        self,
        node: LayoutNode,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str,
        canvas: _Canvas,
    ) -> None:
        style = node.style
        self._paint_box(style, x, y, width, height, canvas)
        inherited = style.color or color
        match node:
            case TextLeaf():
                self._place_text(node, x, y, width, inherited, canvas)
            case Container():
                if style.direction == "column":
                    self._place_column(node, x, y, width, height, inherited, canvas)
                else:
                    self._place_row(node, x, y, width, height, inherited, canvas)

    @staticmethod
    def _paint_box(
        style: Style, x: float, y: float, width: float, height: float, canvas: _Canvas
    ) -> None:
        stroke = style.border_color if style.border_width > 0 else None
        if style.background is None and stroke is None:
            return
        inset = style.border_width / 2 if stroke else 0
        radius = min(style.border_radius, width / 2, height / 2)
        canvas.items.append(
            SvgRect(
                x=x + inset,
                y=y + inset,
                width=max(width - 2 * inset, 0),
                height=max(height - 2 * inset, 0),
                radius=max(radius - inset, 0),
                fill=canvas.paint(style.background) if style.background else "none",
                fill_opacity=style.background_opacity,
                stroke=stroke,
                stroke_width=style.border_width,
            )
        )

    @staticmethod
    def _distribute(
        justify: str, free: float, count: int
    ) -> tuple[float, float]:
        """Return the leading offset and extra spacing for main-axis alignment."""
        if free <= 0 or count == 0:
            return 0.0, 0.0
        match justify:
            case "center":
                return free / 2, 0.0
            case "end":
                return free, 0.0
            case "space-between" if count > 1:
                return 0.0, free / (count - 1)
            case _:
                return 0.0, 0.0

    @staticmethod
    def _cross_offset(align: str, space: float, size: float) -> float:
        match align:
            case "center":
                return (space - size) / 2
            case "end":
                return space - size
            case _:
                return 0.0

    def _place_column(
        self,
        node: Container,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str,
        canvas: _Canvas,
    ) -> None:
        style = node.style
        inner_x, inner_y = x + style.padding_x, y + style.padding_y
        inner_w = max(width - 2 * style.padding_x, 0)
        inner_h = max(height - 2 * style.padding_y, 0)
        children = node.children
        sizes = [self.measure(child, inner_w) for child in children]
        heights = [size.height for size in sizes]
        used = style.gap * max(len(children) - 1, 0) + sum(
            h + child.style.margin_top + child.style.margin_bottom
            for child, h in zip(children, heights, strict=True)
        )
        free = inner_h - used
        grow = sum(child.style.flex_grow for child in children)
        if free > 0 and grow > 0:
            heights = [
                h + free * child.style.flex_grow / grow
                for child, h in zip(children, heights, strict=True)
            ]
            free = 0
        offset, spacing = self._distribute(style.justify, free, len(children))
        cursor = inner_y + offset
        for child, size, child_h in zip(children, sizes, heights, strict=True):
            child_w = size.width
            if style.align == "stretch" and child.style.width is None:
                child_w = inner_w
            child_x = inner_x + self._cross_offset(style.align, inner_w, child_w)
            cursor += child.style.margin_top
            self._place(child, child_x, cursor, child_w, child_h, color, canvas)
            cursor += child_h + child.style.margin_bottom + style.gap + spacing

    def _place_row(
        self,
        node: Container,
        x: float,
        y: float,
        width: float,
        height: float,
        color: str,
        canvas: _Canvas,
    ) -> None:
        style = node.style
        inner_x, inner_y = x + style.padding_x, y + style.padding_y
        inner_w = max(width - 2 * style.padding_x, 0)
        inner_h = max(height - 2 * style.padding_y, 0)
        children = node.children
        sizes: list[Size] = []
        remaining = inner_w
        for child in children:
            size = self.measure(child, remaining)
            sizes.append(size)
            remaining = max(remaining - size.width - style.gap, 0)
        widths = [size.width for size in sizes]
        free = inner_w - sum(widths) - style.gap * max(len(children) - 1, 0)
        grow = sum(child.style.flex_grow for child in children)
        if free > 0 and grow > 0:
            widths = [
                w + free * child.style.flex_grow / grow
                for child, w in zip(children, widths, strict=True)
            ]
            free = 0
        offset, spacing = self._distribute(style.justify, free, len(children))
        cursor = inner_x + offset
        for child, size, child_w in zip(children, sizes, widths, strict=True):
            child_h = size.height
            if style.align == "stretch" and child.style.height is None:
                child_h = inner_h
            child_y = inner_y + self._cross_offset(style.align, inner_h, child_h)
            self._place(child, cursor, child_y, child_w, child_h, color, canvas)
            cursor += child_w + style.gap + spacing

    def _place_text(
        self, leaf: TextLeaf, x: float, y: float, width: float, color: str, canvas: _Canvas
    ) -> None:
        style = leaf.style
        face = self.fonts.select(style.font_weight)
        program = face.program
        scale = style.font_size / program.units_per_em
        line_height = style.font_size * style.line_height
        glyph_height = (program.ascent + program.descent) * scale
        limit = self._text_width_limit(style, width)
        for index, line in enumerate(self.wrap(leaf, limit)):
            top = y + style.padding_y + index * line_height
            baseline = top + (line_height - glyph_height) / 2 + program.ascent * scale
            self._emit_line(line, x + style.padding_x, baseline, face, style, color, canvas)

    def _emit_line(
        self,
        line: str,
        x: float,
        baseline: float,
        face: FontFace,
        style: Style,
        color: str,
        canvas: _Canvas,
    ) -> None:
        program = face.program
        scale = style.font_size / program.units_per_em
        spacing_units = style.letter_spacing / scale
        glyphs: list[SvgGlyph] = []
        offset = 0.0
        for char in line:
            name = program.glyph_name(char)
            if name is None:
                canvas.items.append(
                    SvgText(
                        x=x + offset * scale,
                        baseline=baseline,
                        font_size=style.font_size,
                        font_weight=style.font_weight,
                        fill=color,
                        text=char,
                    )
                )
                offset += style.font_size * MISSING_GLYPH_ADVANCE / scale
            else:
                path = program.outline(name)
                if path:
                    glyphs.append(SvgGlyph(offset=offset, path=path))
                offset += program.advance(name)
            offset += spacing_units
        if glyphs:
            canvas.items.append(
                SvgGlyphRun(
                    x=x, baseline=baseline, scale=scale, fill=color, glyphs=tuple(glyphs)
                )
            )


__all__ = [
    "FALLBACK_FAMILY",
    "MISSING_GLYPH_ADVANCE",
    "Size",
    "SvgGlyph",
    "SvgGlyphRun",
    "SvgGradient",
    "SvgRect",
    "SvgRenderer",
    "SvgText",
]
