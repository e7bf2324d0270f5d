"""Test helpers: parser and source stubs, identity and font file builders."""

import io
import threading
import time
from dataclasses import dataclass
from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from typestore.core.exceptions import FontPreviewError
from typestore.fonts import FontIdentity, PreviewFontInfo


@dataclass(frozen=True)
class StubTypeface:
    """Stands in for a parsed font."""

    data: bytes


class CountingParser:
    """Parser stub that counts full parses.

    Font bytes are ``b"Family|Subfamily"``; bytes starting with ``b"corrupt"``
    fail to parse.
    """

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.full_calls = 0
        self.preview_calls = 0
        self.parsed: list[bytes] = []
        self._lock = threading.Lock()

    def parse_preview(self, stream):
        with self._lock:
            self.preview_calls += 1
        data = stream.read()
        family, _, subfamily = data.decode("utf-8", errors="replace").partition("|")
        if not family or data.startswith(b"corrupt"):
            raise FontPreviewError(getattr(stream, "name", "<stream>"), "no family name")
        return PreviewFontInfo(family_name=family, subfamily_name=subfamily or "Regular")

    def parse_full(self, stream):
        data = stream.read()
        with self._lock:
            self.full_calls += 1
            self.parsed.append(data)
        if self.delay:
            time.sleep(self.delay)
        if data.startswith(b"corrupt"):
            raise ValueError("bad glyph table")
        return StubTypeface(data)


class MemoryFontSource:
    """Font source provider serving bytes from a dict."""

    def __init__(self, files: dict[str, bytes] | None = None):
        self.files = dict(files or {})
        self.opened: list[io.BytesIO] = []

    def open_stream(self, locator: str):
        if locator not in self.files:
            raise FileNotFoundError(locator)
        stream = io.BytesIO(self.files[locator])
        stream.name = locator
        self.opened.append(stream)
        return stream


def make_identity(family: str, subfamily: str = "Regular", locator: str | None = None):
    """Create a FontIdentity with a locator derived from its names."""
    if locator is None:
        locator = f"/fonts/{family.replace(' ', '')}-{subfamily.replace(' ', '')}.ttf"
    return FontIdentity(family_name=family, subfamily_name=subfamily, source_locator=locator)


def build_test_font(path: Path, family: str, style: str = "Regular") -> Path:
    """Write a minimal TrueType font with the given names."""

    def square():
        pen = TTGlyphPen(None)
        pen.moveTo((0, 0))
        pen.lineTo((0, 500))
        pen.lineTo((500, 500))
        pen.lineTo((500, 0))
        pen.closePath()
        return pen.glyph()

    fb = FontBuilder(unitsPerEm=1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A"])
    fb.setupCharacterMap({ord("A"): "A"})
    fb.setupGlyf({".notdef": square(), "A": square()})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "A": (500, 0)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": style})
    fb.setupOS2()
    fb.setupPost()
    fb.save(str(path))
    return path
