"""
Font Sources and Parsers
========================

Byte stream providers for font files and the fontTools-backed parser that
turns those streams into names (preview) or a full in-memory typeface.
"""

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO, Protocol

from fontTools.ttLib import TTFont

from ..core.exceptions import FontPreviewError, TypefaceParseError
from .models import PreviewFontInfo

logger = logging.getLogger(__name__)

# OpenType name table IDs
FAMILY_NAME_ID = 1
SUBFAMILY_NAME_ID = 2

ENGLISH_LANG_IDS = (0x409, 0)


class FontSourceProvider(Protocol):
    """Opens the byte stream behind a source locator."""

    def open_stream(self, locator: str) -> BinaryIO: ...


class FontParser(Protocol):
    """Parses font byte streams."""

    def parse_preview(self, stream: BinaryIO) -> PreviewFontInfo: ...

    def parse_full(self, stream: BinaryIO) -> Any: ...


class FileFontSource:
    """Font source provider reading font files from the local filesystem."""

    def open_stream(self, locator: str) -> BinaryIO:
        return Path(locator).open("rb")


def _get_font_name(name_table, name_id: int) -> str | None:
    """Extract a name record, preferring English entries."""
    record = name_table.getName(name_id, 3, 1, 0x409) or name_table.getName(name_id, 1, 0, 0)
    if record is not None:
        return record.toUnicode().strip()

    for record in name_table.names:
        if record.nameID == name_id and record.langID in ENGLISH_LANG_IDS:
            return record.toUnicode().strip()

    # Fallback to any available name
    for record in name_table.names:
        if record.nameID == name_id:
            return record.toUnicode().strip()

    return None


class FontToolsParser:
    """
    Font parser built on fontTools.

    The preview reads only the ``name`` table. The full parse loads every
    table into memory so the returned TTFont never reads from the stream
    after the caller has closed it.
    """

    def __init__(self, font_number: int = 0):
        self.font_number = font_number

    def parse_preview(self, stream: BinaryIO) -> PreviewFontInfo:
        locator = getattr(stream, "name", "<stream>")
        try:
            font = TTFont(stream, lazy=True, fontNumber=self.font_number)
            name_table = font["name"]
            family = _get_font_name(name_table, FAMILY_NAME_ID)
            subfamily = _get_font_name(name_table, SUBFAMILY_NAME_ID)
        except Exception as e:
            raise FontPreviewError(str(locator), str(e)) from e

        if not family:
            raise FontPreviewError(str(locator), "no family name")

        return PreviewFontInfo(family_name=family, subfamily_name=subfamily or "Regular")

    def parse_full(self, stream: BinaryIO) -> TTFont:
        locator = getattr(stream, "name", "<stream>")
        try:
            data = io.BytesIO(stream.read())
            font = TTFont(data, lazy=False, fontNumber=self.font_number)
        except Exception as e:
            raise TypefaceParseError(str(locator), str(e)) from e

        logger.debug(f"Parsed {len(font.keys())} tables from {locator}")
        return font
