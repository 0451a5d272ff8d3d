"""Shared dataclasses passed between the OG image pipeline stages."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(frozen=True, slots=True)
class DocumentRecord:
    """Everything the card template needs to know about one page.

    Attributes
    ----------
    source_path : Path
        Absolute path of the Markdown/MDX source.
    slug : str
        Routing slug; empty for the root index page.
    title : str
        Page title with the default already applied.
    description : str
        Page description with the default already applied.
    section : str or None
        Human-readable first slug segment, ``None`` for top-level pages.
    """

    source_path: Path
    slug: str
    title: str
    description: str
    section: str | None = None


@dc.dataclass(slots=True)
class BatchFailure:
    """A document that could not be turned into an image."""

    source_path: Path
    message: str


@dc.dataclass(slots=True)
class BatchSummary:
    """Counts accumulated over one batch run."""

    generated: int = 0
    errors: int = 0
    failures: list[BatchFailure] = dc.field(default_factory=list)
    written: list[Path] = dc.field(default_factory=list)

    def record_success(self, path: Path) -> None:
        """Count a written image."""
        self.generated += 1
        self.written.append(path)

    def record_failure(self, source_path: Path, message: str) -> None:
        """Count a document whose image could not be produced."""
        self.errors += 1
        self.failures.append(BatchFailure(source_path=source_path, message=message))

    @property
    def ok(self) -> bool:
        """Return True when no document failed."""
        return self.errors == 0


__all__ = ["BatchFailure", "BatchSummary", "DocumentRecord"]
