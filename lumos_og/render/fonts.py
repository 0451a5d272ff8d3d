"""Load font data once per batch and expose glyph metrics and outlines.

Every card draws its text from the same few font faces, so the faces are
fetched and parsed exactly once before the batch starts and handed to the
renderer as an explicit :class:`FontSet`. Sources may be HTTPS URLs (fetched
through a retrying ``requests`` session) or local font files, which keeps
offline builds and tests independent of the network.

Example
-------
>>> from lumos_og.config import load_og_config
>>> from lumos_og.render.fonts import load_fonts
>>> fonts = load_fonts(load_og_config().fonts)  # doctest: +SKIP
>>> fonts.select(700).weight  # doctest: +SKIP
700
"""

from __future__ import annotations

import dataclasses as dc
import io
import logging
import threading
import typing as typ
from pathlib import Path

import requests
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.ttLib import TTFont, TTLibError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

if typ.TYPE_CHECKING:
    from lumos_og.config import FontSpec

logger = logging.getLogger(__name__)

_REMOTE_PREFIXES = ("http://", "https://")


class FontLoadError(RuntimeError):
    """Raised when a font source cannot be fetched or parsed."""


class FontProgram:
    """Parsed font data shared by every face registered from the same source.

    Glyph outlines are converted to SVG path data on first use and cached.
    fontTools expands tables lazily, so all access to the underlying
    ``TTFont`` is serialised with a lock to allow concurrent renders.
    """

    def __init__(self, data: bytes, *, label: str = "<memory>") -> None:
        """Parse ``data`` as TTF, OTF, or WOFF.

        Raises
        ------
        FontLoadError
            If the bytes are not a usable font or carry no Unicode cmap.
        """
        try:
            font = TTFont(io.BytesIO(data), lazy=False)
        except (TTLibError, AssertionError, ValueError, EOFError) as exc:
            msg = f"Font data from '{label}' is not a readable font: {exc}"
            raise FontLoadError(msg) from exc
        cmap = font.getBestCmap()
        if not cmap:
            msg = f"Font data from '{label}' has no Unicode character map."
            raise FontLoadError(msg)
        self.label = label
        self.units_per_em: int = font["head"].unitsPerEm
        self.ascent: int = font["hhea"].ascent
        self.descent: int = abs(font["hhea"].descent)
        self._cmap: dict[int, str] = dict(cmap)
        self._advances: dict[str, int] = {
            name: metrics[0] for name, metrics in font["hmtx"].metrics.items()
        }
        self._glyph_set = font.getGlyphSet()
        self._font = font
        self._outlines: dict[str, str] = {}
        self._lock = threading.Lock()

    def glyph_name(self, char: str) -> str | None:
        """Return the glyph mapped to ``char`` or None when the font lacks it."""
        return self._cmap.get(ord(char))

    def advance(self, glyph_name: str) -> int:
        """Return the horizontal advance of ``glyph_name`` in font units."""
        return self._advances.get(glyph_name, 0)

    def outline(self, glyph_name: str) -> str:
        """Return SVG path data for ``glyph_name`` in font units (y up)."""
        with self._lock:
            cached = self._outlines.get(glyph_name)
            if cached is None:
                pen = SVGPathPen(self._glyph_set)
                self._glyph_set[glyph_name].draw(pen)
                cached = pen.getCommands()
                self._outlines[glyph_name] = cached
            return cached


@dc.dataclass(frozen=True, slots=True)
class FontFace:
    """A font program registered under a family name and weight."""

    name: str
    weight: int
    program: FontProgram


@dc.dataclass(frozen=True, slots=True)
class FontSet:
    """Read-only collection of faces available to the renderer."""

    faces: tuple[FontFace, ...]

    def __post_init__(self) -> None:
        """Reject empty sets; the renderer needs at least one face."""
        if not self.faces:
            msg = "At least one font face is required."
            raise FontLoadError(msg)

    @property
    def weights(self) -> tuple[int, ...]:
        """Return the registered weights in ascending order."""
        return tuple(sorted({face.weight for face in self.faces}))

    def select(self, weight: int) -> FontFace:
        """Return the face for ``weight``, substituting the nearest weight.

        Ties prefer the heavier face, matching the CSS fallback for weights
        above the regular weight.
        """
        for face in self.faces:
            if face.weight == weight:
                return face
        nearest = min(
            self.faces, key=lambda face: (abs(face.weight - weight), -face.weight)
        )
        logger.debug(
            "font weight %s not registered; substituting %s", weight, nearest.weight
        )
        return nearest


def _build_session() -> requests.Session:
    """Return a session that retries transient font CDN failures."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def fetch_font_bytes(
    source: str, *, session: requests.Session, timeout: float = 30
) -> bytes:
    """Return raw font bytes from a URL or a local file path.

    Raises
    ------
    FontLoadError
        If the download fails or the file cannot be read.
    """
    if source.startswith(_REMOTE_PREFIXES):
        try:
            resp = session.get(source, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            msg = f"Failed to fetch font from '{source}': {exc}"
            raise FontLoadError(msg) from exc
        return resp.content
    try:
        return Path(source).read_bytes()
    except OSError as exc:
        msg = f"Failed to read font file '{source}': {exc}"
        raise FontLoadError(msg) from exc


def load_fonts(
    specs: typ.Iterable[FontSpec],
    *,
    session: requests.Session | None = None,
    timeout: float = 30,
) -> FontSet:
    """Fetch and parse every configured face, once per distinct source.

    Parameters
    ----------
    specs : Iterable[FontSpec]
        Faces to register; several weights may share one source.
    session : requests.Session, optional
        Session used for remote sources. A retrying session is created (and
        closed afterwards) when omitted.
    timeout : float, optional
        Per-request timeout in seconds.

    Returns
    -------
    FontSet
        Faces ready to be shared read-only across the batch.

    Raises
    ------
    FontLoadError
        If any source is unavailable or unreadable; the batch should not start.
    """
    owned = session is None
    http = session or _build_session()
    programs: dict[str, FontProgram] = {}
    faces: list[FontFace] = []
    try:
        for spec in specs:
            program = programs.get(spec.source)
            if program is None:
                data = fetch_font_bytes(spec.source, session=http, timeout=timeout)
                program = FontProgram(data, label=spec.source)
                programs[spec.source] = program
                logger.info("loaded font %s (%d bytes)", spec.source, len(data))
            faces.append(FontFace(name=spec.name, weight=spec.weight, program=program))
    finally:
        if owned:
            http.close()
    return FontSet(tuple(faces))


__all__ = [
    "FontFace",
    "FontLoadError",
    "FontProgram",
    "FontSet",
    "fetch_font_bytes",
    "load_fonts",
]
