"""Shared fixtures for the lumos_og test suite.

Real builds fetch Inter from Google Fonts; the tests never touch the network.
Instead a tiny TrueType font is assembled in memory with
``fontTools.fontBuilder``: every printable ASCII character maps to the same
box outline with a 600-unit advance (1000 units per em), so text widths are
easy to predict, and characters outside ASCII are deliberately missing to
exercise the renderer's fallback path.
"""

from __future__ import annotations

import io
import struct
import typing as typ
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from lumos_og.config import FontSpec, OgConfig
from lumos_og.render import FontSet, load_fonts

UNITS_PER_EM = 1000
GLYPH_ADVANCE = 600
SPACE_ADVANCE = 250
FONT_WEIGHTS = (400, 600, 700)


def _box_glyph() -> typ.Any:
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((550, 700))
    pen.lineTo((550, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font(family: str = "Test Sans") -> bytes:
    """Return TTF bytes covering printable ASCII with uniform box glyphs."""
    chars = [chr(code) for code in range(33, 127)]
    char_glyphs = {ord(char): f"uni{ord(char):04X}" for char in chars}
    glyph_order = [".notdef", "space", *char_glyphs.values()]

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({32: "space", **char_glyphs})
    glyphs = {name: _box_glyph() for name in glyph_order}
    glyphs["space"] = TTGlyphPen(None).glyph()
    fb.setupGlyf(glyphs)
    glyph_table = fb.font["glyf"]
    metrics = {
        name: (
            SPACE_ADVANCE if name == "space" else GLYPH_ADVANCE,
            getattr(glyph_table[name], "xMin", 0),
        )
        for name in glyph_order
    }
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(
        sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200
    )
    fb.setupPost()
    buffer = io.BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


def png_size(data: bytes) -> tuple[int, int]:
    """Return ``(width, height)`` from a PNG's IHDR chunk."""
    assert data[:8] == b"\x89PNG\r\n\x1a\n", "expected PNG signature"
    width, height = struct.unpack(">II", data[16:24])
    return width, height


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    """Return the generated test font."""
    return build_test_font()


@pytest.fixture
def font_file(tmp_path: Path, font_bytes: bytes) -> Path:
    """Write the test font to disk and return its path."""
    path = tmp_path / "fonts" / "test-sans.ttf"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(font_bytes)
    return path


@pytest.fixture
def font_specs(font_file: Path) -> tuple[FontSpec, ...]:
    """Return regular, semi-bold, and bold specs sharing the test font."""
    return tuple(
        FontSpec(name="Test Sans", weight=weight, source=str(font_file))
        for weight in FONT_WEIGHTS
    )


@pytest.fixture
def font_set(font_specs: tuple[FontSpec, ...]) -> FontSet:
    """Return a FontSet loaded from the local test font."""
    return load_fonts(font_specs)


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Return an empty documentation root."""
    root = tmp_path / "src" / "content" / "docs"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def og_config(
    tmp_path: Path, content_root: Path, font_specs: tuple[FontSpec, ...]
) -> OgConfig:
    """Return settings pointing at the temporary content and output roots."""
    return OgConfig(
        content_dir=content_root,
        output_dir=tmp_path / "public" / "og",
        fonts=font_specs,
    )


def write_doc(
    root: Path,
    relative: str,
    *,
    title: str | None = None,
    description: str | None = None,
    body: str = "Body text.\n",
) -> Path:
    """Create a documentation page with optional front matter."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    header: list[str] = []
    if title is not None:
        header.append(f'title: "{title}"')
    if description is not None:
        header.append(f'description: "{description}"')
    front = "---\n" + "\n".join(header) + "\n---\n" if header else ""
    path.write_text(front + body, encoding="utf-8")
    return path


@pytest.fixture
def doc_writer() -> typ.Callable[..., Path]:
    """Expose :func:`write_doc` to tests outside this module."""
    return write_doc


@pytest.fixture
def read_png_size() -> typ.Callable[[bytes], tuple[int, int]]:
    """Expose :func:`png_size` to tests outside this module."""
    return png_size
