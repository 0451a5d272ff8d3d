"""Tests for PNG rasterisation and atomic image writes."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

import pytest

from lumos_og.layout import CardDesign, compose_card
from lumos_og.models import DocumentRecord
from lumos_og.render import (
    FontSet,
    RenderedAsset,
    SvgRenderer,
    WriteError,
    output_path_for,
    rasterize,
    write_asset,
)


@pytest.mark.parametrize(
    ("slug", "expected"),
    [
        ("getting-started/quick-start", "getting-started/quick-start.png"),
        ("api/types", "api/types.png"),
        ("faq", "faq.png"),
        ("", "index.png"),
        ("guides/v1.2", "guides/v1.2.png"),
    ],
)
def test_output_path_mirrors_slug(tmp_path: Path, slug: str, expected: str) -> None:
    """Image paths mirror the slug below the output directory."""
    assert output_path_for(slug, tmp_path) == tmp_path / expected


def test_rasterize_produces_canvas_sized_png(
    font_set: FontSet, read_png_size: typ.Callable[[bytes], tuple[int, int]]
) -> None:
    """A full card rasterises to exactly 1200x630 pixels."""
    record = DocumentRecord(
        source_path=Path("/docs/faq.md"), slug="faq", title="FAQ", description="Answers"
    )
    design = CardDesign()
    svg = SvgRenderer(font_set).render(compose_card(record, design), design.width, design.height)
    png = rasterize(svg, design.width)
    assert read_png_size(png) == (1200, 630)


def test_write_creates_parents_and_overwrites(tmp_path: Path) -> None:
    """Existing images are replaced and missing directories are created."""
    target = tmp_path / "og" / "api" / "types.png"
    write_asset(RenderedAsset(data=b"first", output_path=target))
    written = write_asset(RenderedAsset(data=b"second", output_path=target))
    assert written == target
    assert target.read_bytes() == b"second"
    assert sorted(p.name for p in target.parent.iterdir()) == ["types.png"]
    assert (target.stat().st_mode & 0o777) == 0o644


def test_failed_write_leaves_no_partial_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A failure during the final move removes the temporary file."""
    target = tmp_path / "og" / "faq.png"

    def _fail(src: os.PathLike[str], dst: os.PathLike[str]) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", _fail)
    with pytest.raises(WriteError, match="Cannot write"):
        write_asset(RenderedAsset(data=b"png", output_path=target))
    assert list(target.parent.iterdir()) == []


def test_unwritable_directory_raises_write_error(tmp_path: Path) -> None:
    """A file blocking the destination directory is reported as WriteError."""
    blocker = tmp_path / "og"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(WriteError, match="Cannot prepare"):
        write_asset(RenderedAsset(data=b"png", output_path=blocker / "faq.png"))
