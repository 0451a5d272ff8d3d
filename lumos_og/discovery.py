r"""Locate documentation sources and derive their routing slugs.

The docs site serves every Markdown/MDX file under the content root at a URL
mirroring its relative path, with ``index`` pages collapsing onto their
directory. This module walks that tree and reproduces the same slug so each
OG image lands beside the page it describes.

Example
-------
>>> from pathlib import Path
>>> from lumos_og.discovery import derive_slug
>>> root = Path("/site/src/content/docs")
>>> derive_slug(root / "getting-started" / "quick-start.md", root)
'getting-started/quick-start'
>>> derive_slug(root / "index.mdx", root)
''
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from lumos_og._constants import INDEX_SEGMENT, RECOGNIZED_EXTENSIONS

logger = logging.getLogger(__name__)


class DiscoveryError(RuntimeError):
    """Raised when the content root cannot be traversed."""


def discover_documents(
    root: Path, extensions: typ.Iterable[str] = RECOGNIZED_EXTENSIONS
) -> list[Path]:
    """Return every documentation source below ``root``.

    Parameters
    ----------
    root : Path
        Content directory to walk recursively.
    extensions : Iterable[str], optional
        Suffixes (including the dot) that mark a documentation file, matched
        case-sensitively. Defaults to ``.md`` and ``.mdx``.

    Returns
    -------
    list[Path]
        Absolute paths in depth-first order. Entries within a directory are
        sorted by name so log output is stable across runs.

    Raises
    ------
    DiscoveryError
        If ``root`` does not exist or is not a directory.
    """
    if not root.is_dir():
        msg = f"Content directory '{root}' does not exist or is not a directory."
        raise DiscoveryError(msg)

    suffixes = tuple(extensions)
    found: list[Path] = []
    _walk(root.resolve(), suffixes, found)
    logger.debug("discovered %d documents under %s", len(found), root)
    return found


def _walk(directory: Path, suffixes: tuple[str, ...], found: list[Path]) -> None:
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if entry.is_dir():
            _walk(entry, suffixes, found)
        elif entry.is_file() and entry.name.endswith(suffixes):
            found.append(entry)


def derive_slug(source_path: Path, root: Path) -> str:
    """Return the routing slug for ``source_path`` relative to ``root``.

    The extension is dropped, a trailing ``index`` segment collapses onto its
    parent directory, and any trailing separator is removed. A root-level
    ``index.md`` therefore yields an empty slug.
    """
    relative = source_path.resolve().relative_to(root.resolve()).as_posix()
    for suffix in RECOGNIZED_EXTENSIONS:
        if relative.endswith(suffix):
            relative = relative[: -len(suffix)]
            break
    segments = relative.split("/")
    if segments and segments[-1] == INDEX_SEGMENT:
        segments = segments[:-1]
    return "/".join(segments).rstrip("/")


def derive_section(slug: str) -> str | None:
    """Return the human-readable section for ``slug`` or None for top-level pages.

    Examples
    --------
    >>> derive_section("getting-started/quick-start")
    'getting started'
    >>> derive_section("faq") is None
    True
    """
    parts = slug.split("/")
    if len(parts) > 1 and parts[0]:
        return parts[0].replace("-", " ")
    return None


__all__ = ["DiscoveryError", "derive_section", "derive_slug", "discover_documents"]
