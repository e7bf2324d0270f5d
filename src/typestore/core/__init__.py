"""Core components for the typeface catalog and store."""

from .config import FontStoreConfig, load_config_from_yaml
from .exceptions import (
    ConfigurationError,
    DefaultFontNotRegisteredError,
    FallbackLoopError,
    FontError,
    FontPreviewError,
    TypefaceParseError,
    TypestoreError,
    UnsupportedPolicyOutcomeError,
)

__all__ = [
    "ConfigurationError",
    "DefaultFontNotRegisteredError",
    "FallbackLoopError",
    "FontError",
    "FontPreviewError",
    "FontStoreConfig",
    "TypefaceParseError",
    "TypestoreError",
    "UnsupportedPolicyOutcomeError",
    "load_config_from_yaml",
]
