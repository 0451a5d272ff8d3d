"""Typed dataclasses describing OG image generation settings."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from lumos_og._constants import (
    DEFAULT_CONTENT_DIR,
    DEFAULT_OUTPUT_DIR,
    INTER_FONT_URL,
)


class OgConfigError(ValueError):
    """Raised when the OG image configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class PaletteConfig:
    """Brand colours used by the card template."""

    purple900: str = "#581c87"
    purple600: str = "#9333ea"
    purple400: str = "#c084fc"
    purple300: str = "#d8b4fe"
    gold400: str = "#facc15"
    gold300: str = "#fde047"
    dark_slate: str = "#0f172a"
    slate800: str = "#1e293b"
    white: str = "#ffffff"
    gray300: str = "#d1d5db"


@dc.dataclass(frozen=True, slots=True)
class BrandConfig:
    """Fixed copy rendered on every card plus metadata fallbacks."""

    name: str = "LUMOS"
    glyph: str = "✦"
    tagline: str = "Type-safe schemas for Solana"
    url: str = "docs.lumos-lang.org"
    default_title: str = "LUMOS Documentation"
    default_description: str = "Type-safe schema language for Solana development"


@dc.dataclass(frozen=True, slots=True)
class LayoutLimits:
    """Character budgets that keep the card content inside the canvas."""

    title_max: int = 60
    description_max: int = 120
    title_size_threshold: int = 30


@dc.dataclass(frozen=True, slots=True)
class FontSpec:
    """A font face to register with the renderer.

    Attributes
    ----------
    name : str
        Family name referenced by the renderer.
    weight : int
        CSS-style numeric weight (400 regular, 600 semi-bold, 700 bold).
    source : str
        ``http(s)://`` URL or filesystem path to TTF/OTF/WOFF data.
    """

    name: str
    weight: int
    source: str


def _default_fonts() -> tuple[FontSpec, ...]:
    return tuple(
        FontSpec(name="Inter", weight=weight, source=INTER_FONT_URL)
        for weight in (400, 600, 700)
    )


@dc.dataclass(frozen=True, slots=True)
class OgConfig:
    """Resolved settings for one batch run."""

    content_dir: Path = DEFAULT_CONTENT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    workers: int = 1
    brand: BrandConfig = dc.field(default_factory=BrandConfig)
    palette: PaletteConfig = dc.field(default_factory=PaletteConfig)
    limits: LayoutLimits = dc.field(default_factory=LayoutLimits)
    fonts: tuple[FontSpec, ...] = dc.field(default_factory=_default_fonts)


__all__ = [
    "BrandConfig",
    "FontSpec",
    "LayoutLimits",
    "OgConfig",
    "OgConfigError",
    "PaletteConfig",
]
