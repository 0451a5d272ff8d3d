"""Build the fixed LUMOS card layout for a documentation page.

The card mirrors the docs site's visual identity: a dark gradient canvas with
the brand mark and optional section badge along the top, the page title and
description in the middle separated by an accent bar, and the tagline and
site address in the footer. Titles and descriptions are truncated to fixed
character budgets before the tree is built so the rendered content never
overflows the canvas.

Example
-------
>>> from pathlib import Path
>>> from lumos_og.layout.composer import CardDesign, compose_card
>>> from lumos_og.models import DocumentRecord
>>> record = DocumentRecord(Path("/docs/faq.md"), "faq", "FAQ", "Answers")
>>> tree = compose_card(record, CardDesign())
>>> tree.style.width
1200
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from lumos_og._constants import CANVAS_HEIGHT, CANVAS_WIDTH
from lumos_og.config import BrandConfig, LayoutLimits, PaletteConfig

from .models import Container, GradientStop, LinearGradient, Style, TextLeaf, padded

if typ.TYPE_CHECKING:
    from lumos_og.models import DocumentRecord

ELLIPSIS = "..."
LARGE_TITLE_SIZE = 64
SMALL_TITLE_SIZE = 52
CANVAS_PADDING = 60
DIVIDER_WIDTH = 120
DIVIDER_HEIGHT = 4
DESCRIPTION_MAX_WIDTH = 900


def truncate(text: str, max_length: int) -> str:
    """Return ``text`` cut to ``max_length`` characters including an ellipsis.

    Examples
    --------
    >>> truncate("Quick Start", 60)
    'Quick Start'
    >>> truncate("abcdefghij", 8)
    'abcde...'
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


@dc.dataclass(frozen=True, slots=True)
class CardDesign:
    """Design constants shared by every card."""

    brand: BrandConfig = dc.field(default_factory=BrandConfig)
    palette: PaletteConfig = dc.field(default_factory=PaletteConfig)
    limits: LayoutLimits = dc.field(default_factory=LayoutLimits)
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT

    def title_font_size(self, title: str) -> int:
        """Return the title size, shrinking long titles."""
        if len(title) > self.limits.title_size_threshold:
            return SMALL_TITLE_SIZE
        return LARGE_TITLE_SIZE


def compose_card(record: DocumentRecord, design: CardDesign) -> Container:
    """Return the layout tree for ``record``.

    Parameters
    ----------
    record : DocumentRecord
        Page metadata with defaults already applied.
    design : CardDesign
        Palette, brand copy, budgets, and canvas size.

    Returns
    -------
    Container
        Root node sized to the canvas. The function is pure: the same record
        and design always yield an equal tree.
    """
    palette = design.palette
    background = LinearGradient(
        angle=135,
        stops=(
            GradientStop(0.0, palette.dark_slate),
            GradientStop(0.5, palette.slate800),
            GradientStop(1.0, palette.purple900),
        ),
    )
    return Container(
        children=(
            _header(record, design),
            _body(record, design),
            _footer(design),
        ),
        style=padded(
            CANVAS_PADDING,
            direction="column",
            width=design.width,
            height=design.height,
            background=background,
            color=palette.white,
        ),
    )


def _header(record: DocumentRecord, design: CardDesign) -> Container:
    palette = design.palette
    brand = Container(
        children=(
            TextLeaf(design.brand.glyph, Style(font_size=32, color=palette.gold300)),
            TextLeaf(
                design.brand.name,
                Style(
                    font_size=28,
                    font_weight=700,
                    color=palette.white,
                    letter_spacing=2,
                ),
            ),
        ),
        style=Style(direction="row", align="center", gap=12),
    )
    children: list[Container | TextLeaf] = [brand]
    if record.section:
        children.append(
            TextLeaf(
                record.section,
                Style(
                    font_size=14,
                    font_weight=600,
                    color=palette.purple300,
                    background=palette.purple600,
                    background_opacity=0.2,
                    padding_x=16,
                    padding_y=8,
                    border_radius=20,
                    border_color=palette.purple600,
                    border_width=1,
                    uppercase=True,
                    letter_spacing=1,
                ),
            )
        )
    return Container(
        children=tuple(children),
        style=Style(
            direction="row",
            justify="space-between",
            align="center",
            margin_bottom=40,
        ),
    )


def _body(record: DocumentRecord, design: CardDesign) -> Container:
    palette = design.palette
    limits = design.limits
    title = TextLeaf(
        truncate(record.title, limits.title_max),
        Style(
            font_size=design.title_font_size(record.title),
            font_weight=700,
            color=palette.white,
            line_height=1.2,
            margin_bottom=24,
        ),
    )
    divider = Container(
        style=Style(
            width=DIVIDER_WIDTH,
            height=DIVIDER_HEIGHT,
            border_radius=2,
            margin_bottom=24,
            background=LinearGradient(
                angle=90,
                stops=(
                    GradientStop(0.0, palette.purple600),
                    GradientStop(1.0, palette.gold400),
                ),
            ),
        )
    )
    description = TextLeaf(
        truncate(record.description, limits.description_max),
        Style(
            font_size=24,
            color=palette.gray300,
            line_height=1.5,
            max_width=DESCRIPTION_MAX_WIDTH,
        ),
    )
    return Container(
        children=(title, divider, description),
        style=Style(direction="column", justify="center", align="start", flex_grow=1),
    )


def _footer(design: CardDesign) -> Container:
    palette = design.palette
    return Container(
        children=(
            TextLeaf(
                design.brand.tagline,
                Style(font_size=16, font_weight=500, color=palette.purple400),
            ),
            TextLeaf(
                design.brand.url,
                Style(font_size=16, font_weight=600, color=palette.gold400),
            ),
        ),
        style=Style(
            direction="row",
            justify="space-between",
            align="center",
            margin_top=40,
        ),
    )


__all__ = [
    "CardDesign",
    "ELLIPSIS",
    "LARGE_TITLE_SIZE",
    "SMALL_TITLE_SIZE",
    "compose_card",
    "truncate",
]
