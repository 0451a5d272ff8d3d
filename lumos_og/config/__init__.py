"""Load and validate OG image configuration for the LUMOS docs build.

This subpackage parses the optional ``og.yaml`` file, merges brand copy,
palette overrides, truncation budgets, and font sources with built-in
defaults, and produces frozen dataclasses (:class:`OgConfig` and friends)
that the composer, font loader, and batch orchestrator consume. The primary
entry point is :func:`load_og_config`.

Examples
--------
>>> from pathlib import Path
>>> from lumos_og.config import load_og_config
>>> config = load_og_config(Path("config/og.yaml"))  # doctest: +SKIP
>>> config.limits.title_max  # doctest: +SKIP
60
"""

from .loader import load_og_config
from .models import (
    BrandConfig,
    FontSpec,
    LayoutLimits,
    OgConfig,
    OgConfigError,
    PaletteConfig,
)

__all__ = [
    "BrandConfig",
    "FontSpec",
    "LayoutLimits",
    "OgConfig",
    "OgConfigError",
    "PaletteConfig",
    "load_og_config",
]
