"""Font Management Module
======================

Typeface catalog, resolution and caching: fonts are discovered and indexed
by family and style, requests are resolved through style fallback and a
pluggable not-found resolver, and parsed typefaces are cached per font.
"""

from .cache import CacheStats, TypefaceCache
from .catalog import (
    DuplicateDecisionPolicy,
    FontCatalog,
    StyleGroup,
    get_shared_font_catalog,
    keep_existing,
    policy_for,
    replace_existing,
)
from .models import (
    BOLD_ITALIC,
    DuplicateDecision,
    FontIdentity,
    PreviewFontInfo,
    TypefaceStyle,
    get_wellknown_style,
)
from .resolver import DefaultFontNotFoundResolver, FontNotFoundResolver
from .sources import FileFontSource, FontParser, FontSourceProvider, FontToolsParser
from .store import TypefaceStore, get_shared_typeface_store
from .system import add_typeface_source, load_fonts_from_folder, load_system_fonts

__all__ = [
    "BOLD_ITALIC",
    "CacheStats",
    "DefaultFontNotFoundResolver",
    "DuplicateDecision",
    "DuplicateDecisionPolicy",
    "FileFontSource",
    "FontCatalog",
    "FontIdentity",
    "FontNotFoundResolver",
    "FontParser",
    "FontSourceProvider",
    "FontToolsParser",
    "PreviewFontInfo",
    "StyleGroup",
    "TypefaceCache",
    "TypefaceStore",
    "TypefaceStyle",
    "add_typeface_source",
    "get_shared_font_catalog",
    "get_shared_typeface_store",
    "get_wellknown_style",
    "keep_existing",
    "load_fonts_from_folder",
    "load_system_fonts",
    "policy_for",
    "replace_existing",
]
