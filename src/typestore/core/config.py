"""Configuration management for the typeface catalog and store."""

import os
import platform
from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
)


def default_font_directories() -> list[Path]:
    """Get the usual font directories for the running operating system."""
    system = platform.system().lower()

    if system == "windows":
        return [
            Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts",
            Path(os.environ.get("LOCALAPPDATA", "")) / "Microsoft" / "Windows" / "Fonts",
        ]

    if system == "darwin":  # macOS
        return [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            Path.home() / "Library" / "Fonts",
        ]

    # Linux and other Unix-like systems
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("/usr/share/wine/fonts"),
        Path("/usr/share/texlive/texmf-dist/fonts"),
        Path("/usr/share/texmf/fonts"),
        Path.home() / ".fonts",
        Path.home() / ".local" / "share" / "fonts",
    ]


class FontStoreConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TYPESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Typeface catalog, resolution and discovery configuration."""

    default_family: str = Field("Tahoma", description="Family used as the last fallback")
    bold_alias_label: str = Field("Gras", description="Regional subfamily label for bold")
    generic_family_map: dict[str, str] = Field(
        default_factory=lambda: {"MONOSPACE": "Courier New", "HELVETICA": "Arial"},
        description="Generic family name -> installed family",
    )
    duplicate_decision: Literal["skip", "replace"] = Field(
        "skip", description="What to do when a family is registered twice"
    )
    font_directories: list[Path] = Field(
        default_factory=default_font_directories, description="Directories to scan"
    )
    font_extensions: list[str] = Field(
        default_factory=lambda: [".ttf", ".otf"], description="Font file extensions"
    )
    recursive: bool = Field(True, description="Descend into subdirectories")
    preload_workers: int = Field(2, ge=1, description="Threads used when preloading")

    @field_validator("default_family", "bold_alias_label")
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("generic_family_map")
    @classmethod
    def validate_generic_family_map(cls, v):
        return {key.upper(): value for key, value in v.items()}

    @field_validator("font_extensions")
    @classmethod
    def validate_font_extensions(cls, v):
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            raise ValueError("at least one font extension is required")
        return normalized

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontStoreConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str = ".env"
    ) -> "FontStoreConfig":
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        # Load from environment variables/.env file
        return cls(_env_file=env_file if Path(env_file).exists() else None)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            raise EmptyConfigFileError(str(config_path))

        if issubclass(config_class, BaseSettings):
            # YAML-based configs must not pick up values from .env
            class TempConfig(config_class):
                model_config = SettingsConfigDict(
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return TempConfig(**config_data)
        return config_class(**config_data)

    except ConfigurationError:
        raise
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
