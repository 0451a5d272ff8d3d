"""High-level orchestration for OG image generation.

This module coordinates the per-page stages: it discovers documentation
sources, reads their front matter, composes the card layout, renders it to
SVG with the shared fonts, rasterizes it to PNG, and writes the image under
the output directory at a path mirroring the page slug. It exposes
:class:`OgImageGenerator`, whose ``run`` method returns a
:class:`~lumos_og.models.BatchSummary`.

A failure in any stage of one page is logged and counted without stopping the
batch; each page gets exactly one attempt per run. Only a missing content
directory aborts the run, before any page is processed.

Example
-------
>>> from lumos_og.config import load_og_config
>>> from lumos_og.pipeline import OgImageGenerator
>>> from lumos_og.render import load_fonts
>>> config = load_og_config()
>>> generator = OgImageGenerator(config, load_fonts(config.fonts))  # doctest: +SKIP
>>> summary = generator.run()  # doctest: +SKIP
>>> (summary.generated, summary.errors)  # doctest: +SKIP
(42, 0)
"""

from __future__ import annotations

import concurrent.futures as cf
import logging
import typing as typ
from pathlib import Path

from lumos_og.discovery import derive_section, derive_slug, discover_documents
from lumos_og.layout import CardDesign, compose_card
from lumos_og.metadata import MetadataDefaults, extract_metadata
from lumos_og.models import BatchSummary, DocumentRecord
from lumos_og.render import (
    RenderedAsset,
    SvgRenderer,
    output_path_for,
    rasterize,
    write_asset,
)

if typ.TYPE_CHECKING:
    from lumos_og.config import OgConfig
    from lumos_og.render import FontSet

logger = logging.getLogger(__name__)


class OgImageGenerator:
    """Render one social-preview image per documentation page."""

    def __init__(
        self,
        config: OgConfig,
        fonts: FontSet,
        *,
        content_dir: Path | None = None,
        output_dir: Path | None = None,
        workers: int | None = None,
        renderer: SvgRenderer | None = None,
    ) -> None:
        """Initialize the generator with settings and preloaded fonts.

        Parameters
        ----------
        config : OgConfig
            Brand copy, palette, budgets, and default locations.
        fonts : FontSet
            Faces loaded once before the batch and shared read-only.
        content_dir : Path, optional
            Override for the documentation root; defaults to the config value.
        output_dir : Path, optional
            Override for the image output root; defaults to the config value.
        workers : int, optional
            Number of pages rendered concurrently; ``1`` processes pages
            strictly in sequence. Defaults to the config value.
        renderer : SvgRenderer, optional
            Pre-built renderer; one bound to ``fonts`` is created when omitted.
        """
        self.config = config
        self.content_dir = content_dir or config.content_dir
        self.output_dir = output_dir or config.output_dir
        self.workers = max(workers or config.workers, 1)
        self.design = CardDesign(
            brand=config.brand, palette=config.palette, limits=config.limits
        )
        self.defaults = MetadataDefaults(
            title=config.brand.default_title,
            description=config.brand.default_description,
        )
        self.renderer = renderer or SvgRenderer(fonts)

    def run(self) -> BatchSummary:
        """Generate images for every discovered page.

        Returns
        -------
        BatchSummary
            Counts of written images and failed pages, plus failure details.

        Raises
        ------
        DiscoveryError
            If the content directory does not exist; no page is processed.
        """
        sources = discover_documents(self.content_dir)
        logger.info("found %d documentation files in %s", len(sources), self.content_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        summary = BatchSummary()
        if self.workers == 1:
            for source in sources:
                self._record(summary, source, self._attempt(source))
        else:
            with cf.ThreadPoolExecutor(max_workers=self.workers) as pool:
                futures = {pool.submit(self._attempt, source): source for source in sources}
                for future in cf.as_completed(futures):
                    self._record(summary, futures[future], future.result())

        logger.info(
            "summary: %d generated, %d errors (output: %s)",
            summary.generated,
            summary.errors,
            self.output_dir,
        )
        return summary

    def _attempt(self, source: Path) -> Path | Exception:
        """Run every stage for ``source``, returning the image path or the error."""
        try:
            return self.process(source)
        except Exception as exc:  # noqa: BLE001 - one bad page must not stop the batch
            return exc

    def _record(
        self, summary: BatchSummary, source: Path, outcome: Path | Exception
    ) -> None:
        if isinstance(outcome, Exception):
            logger.error("failed to generate image for %s: %s", source, outcome)
            summary.record_failure(source, str(outcome) or type(outcome).__name__)
            return
        logger.info("generated %s", _relative_to(outcome, self.output_dir))
        summary.record_success(outcome)

    def process(self, source: Path) -> Path:
        """Render and write the image for a single page, returning its path."""
        record = self.build_record(source)
        svg = self.render_svg(record)
        data = rasterize(svg, self.design.width)
        asset = RenderedAsset(data=data, output_path=output_path_for(record.slug, self.output_dir))
        return write_asset(asset)

    def build_record(self, source: Path) -> DocumentRecord:
        """Read ``source`` and return its metadata with defaults applied."""
        text = source.read_text(encoding="utf-8")
        metadata = extract_metadata(text, self.defaults)
        slug = derive_slug(source, self.content_dir)
        return DocumentRecord(
            source_path=source,
            slug=slug,
            title=metadata.title,
            description=metadata.description,
            section=derive_section(slug),
        )

    def render_svg(self, record: DocumentRecord) -> str:
        """Return the card SVG for ``record``."""
        tree = compose_card(record, self.design)
        return self.renderer.render(tree, self.design.width, self.design.height)


def _relative_to(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` when possible for log output."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:  # pragma: no cover - paths outside the output root
        return str(path)


__all__ = ["BatchSummary", "DocumentRecord", "OgImageGenerator"]
