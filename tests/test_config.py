"""Tests for loading ``og.yaml`` settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from lumos_og._constants import DEFAULT_CONTENT_DIR, DEFAULT_OUTPUT_DIR, INTER_FONT_URL
from lumos_og.config import OgConfigError, load_og_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "og.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file() -> None:
    """No path yields the built-in LUMOS settings."""
    config = load_og_config()
    assert config.content_dir == DEFAULT_CONTENT_DIR
    assert config.output_dir == DEFAULT_OUTPUT_DIR
    assert config.workers == 1
    assert config.brand.name == "LUMOS"
    assert config.limits.title_max == 60
    assert config.limits.description_max == 120
    assert [font.weight for font in config.fonts] == [400, 600, 700]
    assert {font.source for font in config.fonts} == {INTER_FONT_URL}


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    """An empty document is treated as an empty mapping."""
    assert load_og_config(_write(tmp_path, "")) == load_og_config()


def test_overrides_are_merged(tmp_path: Path) -> None:
    """Configured values replace defaults; omitted keys keep them."""
    path = _write(
        tmp_path,
        """
content_dir: docs
output_dir: build/og
workers: 4
brand:
  tagline: Schemas everywhere
palette:
  gold400: "#ffaa00"
limits:
  title_max: 40
fonts:
  - source: fonts/inter.ttf
    weight: 700
""",
    )
    config = load_og_config(path)
    assert config.content_dir == Path("docs")
    assert config.output_dir == Path("build/og")
    assert config.workers == 4
    assert config.brand.tagline == "Schemas everywhere"
    assert config.brand.name == "LUMOS"
    assert config.palette.gold400 == "#ffaa00"
    assert config.palette.purple600 == "#9333ea"
    assert config.limits.title_max == 40
    assert config.limits.description_max == 120
    assert len(config.fonts) == 1
    assert config.fonts[0].name == "Inter"
    assert config.fonts[0].weight == 700


def test_missing_explicit_file(tmp_path: Path) -> None:
    """An explicit path that does not exist is an error."""
    with pytest.raises(FileNotFoundError):
        load_og_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("- just\n- a list\n", "must be a mapping"),
        ("workers: 0\n", "at least 1"),
        ("workers: true\n", "must be an integer"),
        ("brand: nope\n", "'brand' must be a mapping"),
        ("brand:\n  logo: x\n", "Unknown brand key 'logo'"),
        ("limits:\n  title_max: 2\n", "'title_max' must be at least 3"),
        ("fonts: []\n", "non-empty list"),
        ("fonts:\n  - weight: 400\n", "missing 'source'"),
        ("fonts:\n  - source: a.ttf\n    weight: bold\n", "must be an integer"),
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, text: str, message: str) -> None:
    """Invalid settings raise OgConfigError naming the problem."""
    with pytest.raises(OgConfigError, match=message):
        load_og_config(_write(tmp_path, text))
