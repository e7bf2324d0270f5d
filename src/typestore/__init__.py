"""Typestore: typeface catalog, resolution and caching."""

from .core.config import FontStoreConfig
from .core.exceptions import (
    ConfigurationError,
    DefaultFontNotRegisteredError,
    FallbackLoopError,
    TypefaceParseError,
    TypestoreError,
    UnsupportedPolicyOutcomeError,
)
from .fonts import FontCatalog, FontIdentity, TypefaceCache, TypefaceStore, TypefaceStyle

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DefaultFontNotRegisteredError",
    "FallbackLoopError",
    "FontCatalog",
    "FontIdentity",
    "FontStoreConfig",
    "TypefaceCache",
    "TypefaceParseError",
    "TypefaceStore",
    "TypefaceStyle",
    "TypestoreError",
    "UnsupportedPolicyOutcomeError",
    "__version__",
]
