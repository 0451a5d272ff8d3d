"""Unit tests for loading font faces once per batch."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
import requests

from lumos_og.config import FontSpec
from lumos_og.render import FontLoadError, FontSet, load_fonts

FONT_URL = "https://fonts.example.invalid/inter.woff"


class _RecordingSession:
    """Stub ``requests.Session`` that counts GETs and serves fixed bytes."""

    def __init__(self, payload: bytes, *, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code
        self.calls: list[str] = []

    def get(self, url: str, timeout: float) -> SimpleNamespace:
        self.calls.append(url)
        status_code = self.status_code

        def _raise_for_status() -> None:
            if status_code >= 400:
                msg = f"{status_code} error for {url}"
                raise requests.HTTPError(msg)

        return SimpleNamespace(content=self.payload, raise_for_status=_raise_for_status)


def _specs(source: str) -> list[FontSpec]:
    return [FontSpec("Inter", weight, source) for weight in (400, 600, 700)]


def test_remote_font_fetched_once_for_all_weights(font_bytes: bytes) -> None:
    """Three weights sharing one URL trigger a single download."""
    session = _RecordingSession(font_bytes)
    fonts = load_fonts(_specs(FONT_URL), session=session)  # type: ignore[arg-type]
    assert session.calls == [FONT_URL]
    assert fonts.weights == (400, 600, 700)
    programs = {id(face.program) for face in fonts.faces}
    assert len(programs) == 1, "expected weights to share one parsed program"


def test_http_failure_raises_font_load_error(font_bytes: bytes) -> None:
    """A failed font download aborts loading."""
    session = _RecordingSession(font_bytes, status_code=404)
    with pytest.raises(FontLoadError, match="Failed to fetch font"):
        load_fonts(_specs(FONT_URL), session=session)  # type: ignore[arg-type]


def test_missing_local_file_raises(tmp_path: Path) -> None:
    """Unreadable font files are fatal."""
    with pytest.raises(FontLoadError, match="Failed to read font file"):
        load_fonts(_specs(str(tmp_path / "absent.ttf")))


def test_non_font_bytes_raise(tmp_path: Path) -> None:
    """Bytes that are not a font are rejected up front."""
    bogus = tmp_path / "bogus.woff"
    bogus.write_bytes(b"<html>not a font</html>")
    with pytest.raises(FontLoadError, match="not a readable font"):
        load_fonts(_specs(str(bogus)))


def test_empty_spec_list_is_rejected() -> None:
    """At least one face must be registered."""
    with pytest.raises(FontLoadError):
        load_fonts([])


def test_select_prefers_exact_then_nearest_weight(font_set: FontSet) -> None:
    """Exact weights win; other weights fall back to the nearest face."""
    assert font_set.select(600).weight == 600
    assert font_set.select(500).weight == 600
    assert font_set.select(300).weight == 400
    assert font_set.select(900).weight == 700


def test_program_exposes_metrics_and_outlines(font_set: FontSet) -> None:
    """Glyph lookup, advances, and outlines come from the font data."""
    program = font_set.select(400).program
    glyph = program.glyph_name("A")
    assert glyph is not None
    assert program.advance(glyph) == 600
    assert program.units_per_em == 1000
    assert program.outline(glyph).startswith("M")
    assert program.glyph_name("✦") is None
