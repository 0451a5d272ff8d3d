"""Common literal values used across lumos_og.

These constants keep canvas dimensions, default locations, and recognised
file extensions centralized so the composer, renderer, and tests can import
the same values without drifting. Intended for internal use within the
lumos_og package.

Examples
--------
>>> from lumos_og import _constants
>>> (_constants.CANVAS_WIDTH, _constants.CANVAS_HEIGHT)
(1200, 630)
>>> ".mdx" in _constants.RECOGNIZED_EXTENSIONS
True
"""

from pathlib import Path

CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 630

DEFAULT_CONTENT_DIR = Path("src/content/docs")
DEFAULT_OUTPUT_DIR = Path("public/og")
DEFAULT_CONFIG_PATH = Path("config/og.yaml")

RECOGNIZED_EXTENSIONS = (".md", ".mdx")
INDEX_SEGMENT = "index"
INDEX_IMAGE_NAME = "index.png"

INTER_FONT_URL = (
    "https://fonts.gstatic.com/s/inter/v13/"
    "UcCO3FwrK3iLTeHuS_fvQtMwCp50KnMw2boKoduKmMEVuLyfAZ9hjp-Ek-_EeA.woff"
)
