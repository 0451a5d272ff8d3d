"""Generate social-preview (Open Graph) images for the LUMOS documentation.

This package exposes the CLI entry point used by the docs build to render one
1200×630 PNG card per Markdown/MDX page under ``public/og``.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from lumos_og import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
