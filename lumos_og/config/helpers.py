"""Utility helpers shared by the OG configuration loader."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .models import (
    BrandConfig,
    FontSpec,
    LayoutLimits,
    OgConfigError,
    PaletteConfig,
)

MIN_BUDGET = 3


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_mapping(value: object, label: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case dict():
            return value
        case _:
            msg = f"'{label}' must be a mapping, got {type(value).__name__}."
            raise OgConfigError(msg)


def _coerce_int(value: object, label: str) -> int:
    """Return ``value`` as an int, rejecting booleans and non-numeric text."""
    if isinstance(value, bool):
        msg = f"'{label}' must be an integer, got {value!r}."
        raise OgConfigError(msg)
    try:
        return int(typ.cast("typ.Any", value))
    except (TypeError, ValueError) as exc:
        msg = f"'{label}' must be an integer, got {value!r}."
        raise OgConfigError(msg) from exc


def _merge_strings(base: typ.Any, payload: typ.Mapping[str, typ.Any], label: str) -> typ.Any:
    """Override string fields of a frozen dataclass from ``payload``."""
    known = {field.name for field in dc.fields(base)}
    updates: dict[str, str] = {}
    for key, value in payload.items():
        if key not in known:
            msg = f"Unknown {label} key '{key}'."
            raise OgConfigError(msg)
        text = _optional_str(value)
        if text is not None:
            updates[key] = text
    return dc.replace(base, **updates)


def _build_brand(payload: typ.Mapping[str, typ.Any]) -> BrandConfig:
    """Build a BrandConfig from the ``brand`` mapping."""
    return _merge_strings(BrandConfig(), payload, "brand")


def _build_palette(payload: typ.Mapping[str, typ.Any]) -> PaletteConfig:
    """Build a PaletteConfig from the ``palette`` mapping."""
    return _merge_strings(PaletteConfig(), payload, "palette")


def _build_limits(payload: typ.Mapping[str, typ.Any]) -> LayoutLimits:
    """Build LayoutLimits, enforcing the minimum truncation budget."""
    base = LayoutLimits()
    title_max = _coerce_int(payload.get("title_max", base.title_max), "title_max")
    description_max = _coerce_int(
        payload.get("description_max", base.description_max), "description_max"
    )
    threshold = _coerce_int(
        payload.get("title_size_threshold", base.title_size_threshold),
        "title_size_threshold",
    )
    for label, budget in (("title_max", title_max), ("description_max", description_max)):
        if budget < MIN_BUDGET:
            msg = f"'{label}' must be at least {MIN_BUDGET}, got {budget}."
            raise OgConfigError(msg)
    return LayoutLimits(
        title_max=title_max,
        description_max=description_max,
        title_size_threshold=threshold,
    )


def _build_fonts(payload: object) -> tuple[FontSpec, ...] | None:
    """Return FontSpecs from the ``fonts`` list, or None when not configured."""
    if payload is None:
        return None
    if not isinstance(payload, list) or not payload:
        msg = "'fonts' must be a non-empty list."
        raise OgConfigError(msg)
    fonts: list[FontSpec] = []
    for idx, entry in enumerate(payload):
        item = _require_mapping(entry, f"fonts[{idx}]")
        source = _optional_str(item.get("source"))
        if not source:
            msg = f"Font entry {idx} is missing 'source'."
            raise OgConfigError(msg)
        fonts.append(
            FontSpec(
                name=_optional_str(item.get("name")) or "Inter",
                weight=_coerce_int(item.get("weight", 400), f"fonts[{idx}].weight"),
                source=source,
            )
        )
    return tuple(fonts)


__all__ = [
    "MIN_BUDGET",
    "_build_brand",
    "_build_fonts",
    "_build_limits",
    "_build_palette",
    "_coerce_int",
    "_optional_str",
    "_require_mapping",
]
