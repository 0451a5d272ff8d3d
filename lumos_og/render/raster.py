"""Rasterize card SVG to PNG and persist it beside the page it describes.

Writes are atomic: bytes land in a temporary file inside the destination
directory and are moved over the final path with :func:`os.replace`, so an
interrupted or failed write never leaves a truncated image behind. Existing
images are overwritten unconditionally.
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import os
import tempfile
from pathlib import Path

import cairosvg

from lumos_og._constants import INDEX_IMAGE_NAME

_OUTPUT_FILE_MODE = 0o644


class WriteError(OSError):
    """Raised when a rendered image cannot be written to disk."""


@dc.dataclass(frozen=True, slots=True)
class RenderedAsset:
    """PNG bytes paired with their destination."""

    data: bytes
    output_path: Path


def output_path_for(slug: str, output_dir: Path) -> Path:
    """Return the image path for ``slug``; the root page maps to ``index.png``.

    Examples
    --------
    >>> from pathlib import Path
    >>> output_path_for("api/types", Path("public/og")).as_posix()
    'public/og/api/types.png'
    >>> output_path_for("", Path("public/og")).as_posix()
    'public/og/index.png'
    """
    if not slug:
        return output_dir / INDEX_IMAGE_NAME
    page = output_dir.joinpath(*slug.split("/"))
    return page.with_name(f"{page.name}.png")


def rasterize(svg: str, width: int) -> bytes:
    """Return PNG bytes for ``svg`` scaled to ``width`` pixels wide."""
    png = cairosvg.svg2png(bytestring=svg.encode("utf-8"), output_width=width)
    if not isinstance(png, bytes):  # pragma: no cover - cairosvg API guard
        msg = "cairosvg did not return PNG bytes."
        raise TypeError(msg)
    return png


def write_asset(asset: RenderedAsset) -> Path:
    """Atomically write ``asset`` to its output path and return that path.

    Raises
    ------
    WriteError
        If the directory cannot be created or the file cannot be written.
    """
    target = asset.output_path
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.stem}-", suffix=".png.tmp", dir=target.parent
        )
    except OSError as exc:
        msg = f"Cannot prepare '{target}': {exc.strerror or exc}"
        raise WriteError(msg) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(asset.data)
        os.chmod(tmp_path, _OUTPUT_FILE_MODE)
        os.replace(tmp_path, target)
    except OSError as exc:
        with contextlib.suppress(FileNotFoundError):
            tmp_path.unlink()
        msg = f"Cannot write '{target}': {exc.strerror or exc}"
        raise WriteError(msg) from exc
    return target


__all__ = ["RenderedAsset", "WriteError", "output_path_for", "rasterize", "write_asset"]
