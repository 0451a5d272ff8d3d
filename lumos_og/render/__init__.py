"""Turn layout trees into SVG markup and PNG files on disk."""

from .fonts import FontFace, FontLoadError, FontProgram, FontSet, load_fonts
from .raster import RenderedAsset, WriteError, output_path_for, rasterize, write_asset
from .svg import SvgRenderer

__all__ = [
    "FontFace",
    "FontLoadError",
    "FontProgram",
    "FontSet",
    "RenderedAsset",
    "SvgRenderer",
    "WriteError",
    "load_fonts",
    "output_path_for",
    "rasterize",
    "write_asset",
]
