"""
System Font Discovery
=====================

Populates a font catalog from font files found in directories.
Each file is preview-parsed for its family and subfamily names; files that
cannot be previewed are skipped without aborting the walk.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ..core.config import FontStoreConfig
from ..core.exceptions import FontPreviewError
from .catalog import FontCatalog
from .models import FontIdentity
from .sources import FileFontSource, FontParser, FontSourceProvider, FontToolsParser

logger = logging.getLogger(__name__)

DEFAULT_FONT_EXTENSIONS = (".ttf", ".otf")


def add_typeface_source(
    catalog: FontCatalog,
    locator: str,
    parser: FontParser | None = None,
    source: FontSourceProvider | None = None,
) -> bool:
    """
    Preview a font source and register it in the catalog.

    Args:
        catalog: Catalog to register into
        locator: Font source locator (file path)
        parser: Font parser used for the preview
        source: Provider opening the locator's byte stream

    Returns:
        True if registered, False if the preview failed or the font was skipped
    """
    parser = parser or FontToolsParser()
    source = source or FileFontSource()

    try:
        with source.open_stream(locator) as stream:
            preview = parser.parse_preview(stream)
    except FontPreviewError as e:
        logger.debug(f"Skipping font {locator}: {e}")
        return False
    except Exception as e:
        logger.warning(f"Failed to read font {locator}: {e}")
        return False

    if not preview.family_name:
        logger.debug(f"Skipping font {locator}: no family name")
        return False

    return catalog.register(
        FontIdentity(
            family_name=preview.family_name,
            subfamily_name=preview.subfamily_name,
            source_locator=locator,
        )
    )


def load_fonts_from_folder(
    catalog: FontCatalog,
    folder: str | Path,
    parser: FontParser | None = None,
    source: FontSourceProvider | None = None,
    extensions: Iterable[str] = DEFAULT_FONT_EXTENSIONS,
    recursive: bool = True,
) -> int:
    """
    Register every font file in a folder, then in its subfolders.

    Args:
        catalog: Catalog to register into
        folder: Directory to scan; a missing directory is ignored
        parser: Font parser used for previews
        source: Provider opening font byte streams
        extensions: Accepted file extensions (case-insensitive)
        recursive: Descend into subdirectories

    Returns:
        Number of fonts registered
    """
    folder = Path(folder)
    parser = parser or FontToolsParser()
    source = source or FileFontSource()
    extensions = {ext.lower() for ext in extensions}

    try:
        entries = sorted(folder.iterdir())
    except FileNotFoundError:
        return 0
    except (NotADirectoryError, PermissionError) as e:
        logger.debug(f"Cannot scan font directory {folder}: {e}")
        return 0

    registered = 0
    for entry in entries:
        if entry.is_file() and entry.suffix.lower() in extensions:
            if add_typeface_source(catalog, str(entry), parser, source):
                registered += 1

    # Fonts on Linux are organised in subdirectories
    if recursive:
        for entry in entries:
            if entry.is_dir():
                registered += load_fonts_from_folder(
                    catalog, entry, parser, source, extensions, recursive
                )

    return registered


def load_system_fonts(
    catalog: FontCatalog,
    config: FontStoreConfig | None = None,
    parser: FontParser | None = None,
    source: FontSourceProvider | None = None,
) -> int:
    """Register fonts from every configured font directory."""
    config = config or FontStoreConfig()
    parser = parser or FontToolsParser()
    source = source or FileFontSource()

    registered = 0
    for font_dir in config.font_directories:
        count = load_fonts_from_folder(
            catalog,
            font_dir,
            parser,
            source,
            extensions=config.font_extensions,
            recursive=config.recursive,
        )
        if count:
            logger.debug(f"Registered {count} fonts from {font_dir}")
        registered += count

    logger.info(f"Loaded {registered} system fonts ({len(catalog)} in catalog)")
    return registered
