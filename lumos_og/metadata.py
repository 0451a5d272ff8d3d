r"""Extract card metadata from a document's YAML front matter.

Only ``title`` and ``description`` are read; every other key is ignored.
Metadata quality is not something the build enforces, so a missing or
malformed header silently degrades to the configured fallbacks.

Example
-------
>>> from lumos_og.metadata import MetadataDefaults, extract_metadata
>>> text = "---\ntitle: Quick Start\n---\n# Body\n"
>>> meta = extract_metadata(text, MetadataDefaults("Docs", "About"))
>>> (meta.title, meta.description)
('Quick Start', 'About')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*\r?$", re.DOTALL | re.MULTILINE
)


@dc.dataclass(frozen=True, slots=True)
class MetadataDefaults:
    """Fallback copy applied when a document omits a field."""

    title: str
    description: str


@dc.dataclass(frozen=True, slots=True)
class PageMetadata:
    """Title and description resolved for a single page."""

    title: str
    description: str


def extract_metadata(text: str, defaults: MetadataDefaults) -> PageMetadata:
    """Return the page title and description, falling back to ``defaults``.

    Parameters
    ----------
    text : str
        Raw document content, possibly starting with a ``---`` delimited YAML
        block.
    defaults : MetadataDefaults
        Values used for any field that is absent, blank, or unreadable.

    Returns
    -------
    PageMetadata
        Always populated; this function never raises on bad front matter.
    """
    header = _parse_front_matter(text)
    return PageMetadata(
        title=_field(header, "title") or defaults.title,
        description=_field(header, "description") or defaults.description,
    )


def _parse_front_matter(text: str) -> typ.Mapping[str, typ.Any]:
    """Return the front matter mapping, or an empty mapping when unusable."""
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return {}
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(match.group(1))
    except (YAMLError, ValueError, TypeError, RecursionError) as exc:
        logger.debug("ignoring malformed front matter: %s", exc)
        return {}
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _field(header: typ.Mapping[str, typ.Any], key: str) -> str | None:
    value = header.get(key)
    if value is None or isinstance(value, dict | list):
        return None
    text = str(value).strip()
    return text or None


__all__ = ["MetadataDefaults", "PageMetadata", "extract_metadata"]
