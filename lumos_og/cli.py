"""Cyclopts CLI entrypoint for generating the docs social-preview images.

The ``og-images`` console script defined here walks ``src/content/docs``,
renders a 1200×630 card for every Markdown/MDX page, and writes the PNGs to
``public/og`` so the site can reference them from its Open Graph tags. It is
meant to run as a build step before the static site is bundled, locally or in
CI, and needs no arguments.

Examples
--------
Generate every image with the default locations:

>>> from lumos_og.cli import main
>>> main()  # doctest: +SKIP

Fail the build when any page could not be rendered:

>>> from lumos_og.cli import app
>>> app(["generate", "--strict", "--workers", "4"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_CONFIG_PATH
from .config import OgConfigError, load_og_config
from .discovery import DiscoveryError
from .pipeline import OgImageGenerator
from .render import FontLoadError, load_fonts

EXIT_BATCH_ERRORS = 1
EXIT_FATAL = 2

app = App(name="og-images", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger(__name__)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config_path(config: Path | None) -> Path | None:
    """Return the explicit config path, or the default file when it exists."""
    if config is not None:
        return config
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


@app.command(help="Render one OG image per documentation page.")
def generate(
    *,
    content_dir: typ.Annotated[
        Path | None,
        Parameter(help="Documentation root to scan", env_var="INPUT_CONTENT_DIR"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory receiving the PNG files", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to og.yaml", env_var="INPUT_CONFIG"),
    ] = None,
    workers: typ.Annotated[
        int | None,
        Parameter(help="Pages rendered concurrently", env_var="INPUT_WORKERS"),
    ] = None,
    strict: typ.Annotated[
        bool,
        Parameter(help="Exit non-zero when any page fails", env_var="INPUT_STRICT"),
    ] = False,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Generate social-preview images for every documentation page.

    Parameters
    ----------
    content_dir : Path or None, optional
        Override the documentation root (``src/content/docs`` by default).
    output_dir : Path or None, optional
        Override the image output root (``public/og`` by default).
    config : Path or None, optional
        YAML settings file; ``config/og.yaml`` is used when present and no
        path is given.
    workers : int or None, optional
        Number of pages rendered concurrently; defaults to sequential.
    strict : bool, optional
        When ``True`` the command exits with status 1 if any page failed.
        Otherwise per-page failures are reported but the exit status is 0.
    verbose : bool, optional
        Log at DEBUG instead of INFO.

    Returns
    -------
    None
        Writes PNG files and prints one line per page plus a summary.

    Raises
    ------
    SystemExit
        With status 2 when the settings, content root, or fonts are unusable,
        and with status 1 in strict mode when any page failed.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = load_og_config(_resolve_config_path(config))
        fonts = load_fonts(settings.fonts)
        generator = OgImageGenerator(
            settings,
            fonts,
            content_dir=content_dir,
            output_dir=output_dir,
            workers=workers,
        )
        summary = generator.run()
    except (
        DiscoveryError,
        FontLoadError,
        OgConfigError,
        FileNotFoundError,
        YAMLError,
    ) as exc:
        logger.error("%s", exc)  # noqa: TRY400 - message is the user-facing report
        raise SystemExit(EXIT_FATAL) from exc

    for path in sorted(summary.written):
        print(f"wrote {_format_path(path)}")
    for failure in summary.failures:
        print(f"failed {_format_path(failure.source_path)}: {failure.message}")
    print(f"Summary: {summary.generated} generated, {summary.errors} errors")
    print(f"Output: {_format_path(generator.output_dir)}")
    if strict and not summary.ok:
        raise SystemExit(EXIT_BATCH_ERRORS)


app.default(generate)


def main() -> None:
    """Invoke the Cyclopts application that powers the `og-images` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
