"""Load OG image configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_brand,
    _build_fonts,
    _build_limits,
    _build_palette,
    _coerce_int,
    _optional_str,
    _require_mapping,
)
from .models import OgConfig, OgConfigError


def load_og_config(path: Path | None = None) -> OgConfig:
    """Load the YAML configuration describing brand, palette, and fonts.

    Parameters
    ----------
    path : Path or None, optional
        Filesystem path to the YAML file (for example, ``config/og.yaml``).
        When ``None`` the built-in LUMOS defaults are returned.

    Returns
    -------
    OgConfig
        Settings with every omitted key filled from the defaults.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    OgConfigError
        If the YAML is not a mapping or a section holds invalid values.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from lumos_og.config import load_og_config
    >>> load_og_config().brand.name
    'LUMOS'
    """
    if path is None:
        return OgConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise OgConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base = OgConfig()
    content_dir = _optional_str(raw.get("content_dir"))
    output_dir = _optional_str(raw.get("output_dir"))
    workers = _coerce_int(raw.get("workers", base.workers), "workers")
    if workers < 1:
        msg = f"'workers' must be at least 1, got {workers}."
        raise OgConfigError(msg)
    fonts = _build_fonts(raw.get("fonts"))

    return OgConfig(
        content_dir=Path(content_dir) if content_dir else base.content_dir,
        output_dir=Path(output_dir) if output_dir else base.output_dir,
        workers=workers,
        brand=_build_brand(_require_mapping(raw.get("brand"), "brand")),
        palette=_build_palette(_require_mapping(raw.get("palette"), "palette")),
        limits=_build_limits(_require_mapping(raw.get("limits"), "limits")),
        fonts=fonts if fonts is not None else base.fonts,
    )


__all__ = ["load_og_config"]
