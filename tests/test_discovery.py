"""Unit tests for documentation discovery and slug derivation."""

from __future__ import annotations

from pathlib import Path

import pytest

from lumos_og.discovery import (
    DiscoveryError,
    derive_section,
    derive_slug,
    discover_documents,
)


def _touch(root: Path, relative: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("# page\n", encoding="utf-8")
    return path


def test_discover_finds_nested_markdown_and_mdx(content_root: Path) -> None:
    """Markdown and MDX files are found at any depth; other suffixes are skipped."""
    expected = {
        _touch(content_root, "index.mdx"),
        _touch(content_root, "getting-started/quick-start.md"),
        _touch(content_root, "api/deep/nested/types.md"),
    }
    _touch(content_root, "assets/logo.png")
    _touch(content_root, "notes.txt")
    _touch(content_root, "legacy/README.MD")

    found = discover_documents(content_root)

    assert set(found) == {path.resolve() for path in expected}
    assert all(path.is_absolute() for path in found)


def test_discover_missing_root_raises(tmp_path: Path) -> None:
    """A missing content root fails fast with DiscoveryError."""
    with pytest.raises(DiscoveryError, match="does not exist"):
        discover_documents(tmp_path / "missing")


def test_discover_rejects_file_root(tmp_path: Path) -> None:
    """A file passed as the root is not traversable."""
    root = _touch(tmp_path, "index.md")
    with pytest.raises(DiscoveryError):
        discover_documents(root)


@pytest.mark.parametrize(
    ("relative", "expected"),
    [
        ("index.md", ""),
        ("index.mdx", ""),
        ("getting-started/quick-start.md", "getting-started/quick-start"),
        ("guide/index.mdx", "guide"),
        ("guide/deep/index.md", "guide/deep"),
        ("reindex.md", "reindex"),
        ("api/types.mdx", "api/types"),
    ],
)
def test_derive_slug(content_root: Path, relative: str, expected: str) -> None:
    """Slugs drop the extension and a trailing ``index`` segment."""
    path = _touch(content_root, relative)
    assert derive_slug(path, content_root) == expected


def test_derive_slug_is_deterministic(content_root: Path) -> None:
    """The same source path always yields the same slug."""
    path = _touch(content_root, "api/cli-commands.md")
    slugs = {derive_slug(path, content_root) for _ in range(5)}
    assert slugs == {"api/cli-commands"}


@pytest.mark.parametrize(
    ("slug", "expected"),
    [
        ("getting-started/quick-start", "getting started"),
        ("api/types", "api"),
        ("guide", None),
        ("", None),
    ],
)
def test_derive_section(slug: str, expected: str | None) -> None:
    """Sections come from the first slug segment with hyphens as spaces."""
    assert derive_section(slug) == expected
