"""Custom exceptions for the typeface catalog and store."""

from typing import Any


class TypestoreError(Exception):
    """Base exception for all typestore errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(TypestoreError):
    """Exception raised for configuration errors."""


class FontError(TypestoreError):
    """Exception raised for font data errors."""


# Specific exception classes for TRY003 compliance
class UnsupportedPolicyOutcomeError(ConfigurationError):
    """Exception raised when a policy answers with an unsupported outcome."""

    def __init__(self, policy_kind: str, outcome: Any):
        super().__init__(
            f"Unsupported {policy_kind} outcome: {outcome!r}",
            details={"policy": policy_kind, "outcome": outcome},
        )
        self.outcome = outcome


class FallbackLoopError(ConfigurationError):
    """Exception raised when font fallback would resolve a family back to itself."""

    def __init__(self, family_name: str):
        super().__init__(
            f"Font fallback for family '{family_name}' resolves back to the same family"
        )
        self.family_name = family_name


class DefaultFontNotRegisteredError(ConfigurationError):
    """Exception raised when the designated default font family is not installed."""

    def __init__(self, family_name: str):
        super().__init__(f"Default font family '{family_name}' is not registered")
        self.family_name = family_name


class FontPreviewError(FontError):
    """Exception raised when a font file's preview yields no usable names."""

    def __init__(self, locator: str, reason: str):
        super().__init__(f"Failed to preview font {locator}: {reason}")
        self.locator = locator


class TypefaceParseError(FontError):
    """Exception raised when a font file cannot be opened or parsed."""

    def __init__(self, locator: str, reason: str):
        super().__init__(f"Failed to parse typeface {locator}: {reason}")
        self.locator = locator


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")
