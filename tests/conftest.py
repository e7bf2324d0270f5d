"""
Pytest configuration and fixtures for typeface store tests.
"""

import pytest
from helpers import CountingParser, MemoryFontSource, build_test_font, make_identity

from typestore.core.config import FontStoreConfig
from typestore.fonts import FontCatalog, TypefaceCache, TypefaceStore


@pytest.fixture
def parser():
    """Counting stub parser."""
    return CountingParser()


@pytest.fixture
def catalog():
    """Fresh, non-shared font catalog."""
    return FontCatalog()


@pytest.fixture
def sample_fonts():
    """Identities and font bytes for Tahoma, Tahoma Bold and Arial."""
    identities = [
        make_identity("Tahoma", "Regular"),
        make_identity("Tahoma", "Bold"),
        make_identity("Arial", "Regular"),
    ]
    files = {i.source_locator: f"{i.family_name}|{i.subfamily_name}".encode() for i in identities}
    return identities, files


@pytest.fixture
def store(parser, sample_fonts):
    """Typeface store over the sample fonts with a counting parser."""
    identities, files = sample_fonts
    font_catalog = FontCatalog()
    cache = TypefaceCache(parser=parser, source=MemoryFontSource(files))
    typeface_store = TypefaceStore(
        catalog=font_catalog, cache=cache, config=FontStoreConfig(_env_file=None)
    )
    # Registered after construction, through the injected catalog
    for identity in identities:
        font_catalog.register(identity)
    return typeface_store


@pytest.fixture
def fonts_dir(tmp_path):
    """Directory of real TrueType fonts, with a nested subdirectory."""
    fonts = tmp_path / "fonts"
    nested = fonts / "truetype" / "arial"
    nested.mkdir(parents=True)
    build_test_font(fonts / "Tahoma.ttf", "Tahoma", "Regular")
    build_test_font(fonts / "TahomaBold.TTF", "Tahoma", "Bold")
    build_test_font(nested / "Arial.ttf", "Arial", "Regular")
    (fonts / "readme.txt").write_text("not a font")
    (fonts / "broken.ttf").write_bytes(b"\x00\x01garbage")
    return fonts
