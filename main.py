#!/usr/bin/env python3
"""
Main CLI for the Typeface Store
===============================

This CLI lists installed fonts and shows how font requests resolve.
"""

import logging
import sys
from pathlib import Path

import click

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

try:
    from typestore.core.config import FontStoreConfig
    from typestore.core.exceptions import TypestoreError
    from typestore.fonts import (
        BOLD_ITALIC,
        TypefaceStore,
        TypefaceStyle,
        load_fonts_from_folder,
        load_system_fonts,
    )
except ImportError as e:
    logger.exception(f"Import failed: {e}")
    logger.exception(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)

STYLE_CHOICES = {
    "normal": TypefaceStyle.NORMAL,
    "bold": TypefaceStyle.BOLD,
    "italic": TypefaceStyle.ITALIC,
    "bold-italic": BOLD_ITALIC,
}


def _build_store(config_path: Path | None, font_dirs: tuple[Path, ...]) -> TypefaceStore:
    """Create a store and populate its catalog from the given or configured directories."""
    config = FontStoreConfig.from_env_and_yaml(yaml_path=config_path)
    store = TypefaceStore(config=config)

    if font_dirs:
        count = 0
        for font_dir in font_dirs:
            count += load_fonts_from_folder(
                store.font_catalog,
                font_dir,
                extensions=config.font_extensions,
                recursive=config.recursive,
            )
        logger.info(f"Loaded {count} fonts from {len(font_dirs)} directories")
    else:
        load_system_fonts(store.font_catalog, config)

    return store


def catalog_options(func):
    """Options shared by every command that needs a populated catalog."""
    func = click.option(
        "--dir",
        "-d",
        "font_dirs",
        multiple=True,
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        help="Font directory to scan instead of the system directories (repeatable)",
    )(func)
    return click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(exists=True, path_type=Path),
        help="Path to configuration YAML file",
    )(func)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose):
    """Typeface Store CLI."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command(name="list")
@catalog_options
def list_fonts(config_path, font_dirs):
    """List installed fonts."""
    try:
        store = _build_store(config_path, font_dirs)
        fonts = sorted(
            store.get_all_installed(),
            key=lambda f: (f.family_name.upper(), f.subfamily_name.upper()),
        )
        if not fonts:
            click.echo("No fonts found.")
            return

        for font in fonts:
            click.echo(f"{font.family_name}\t{font.subfamily_name}\t{font.source_locator}")
        click.echo(f"{len(fonts)} fonts")
    except TypestoreError as e:
        logger.exception(f"Listing fonts failed: {e}")
        sys.exit(1)


@cli.command(name="families")
@catalog_options
def list_families(config_path, font_dirs):
    """List font families."""
    try:
        store = _build_store(config_path, font_dirs)
        families = store.font_catalog.families()
        click.echo(f"Found {len(families)} font families:")
        for family in families:
            click.echo(f"   {family}")
    except TypestoreError as e:
        logger.exception(f"Listing families failed: {e}")
        sys.exit(1)


@cli.command(name="resolve")
@click.argument("family")
@click.option(
    "--style",
    "-s",
    type=click.Choice(list(STYLE_CHOICES), case_sensitive=False),
    default="normal",
    help="Canonical style to resolve (default: normal)",
)
@click.option("--label", "-l", help="Exact subfamily label, overrides --style")
@click.option("--load", is_flag=True, help="Also parse the resolved font")
@catalog_options
def resolve(family, style, label, load, config_path, font_dirs):
    """Show which installed font a request resolves to."""
    try:
        store = _build_store(config_path, font_dirs)
        style_or_label = label if label else STYLE_CHOICES[style.lower()]
        identity = store.resolve(family, style_or_label)
        if identity is None:
            click.echo(f"Font not found: {family}")
            sys.exit(2)

        click.echo(f"{family} -> {identity} ({identity.source_locator})")
        if load:
            typeface = store.get_typeface_for(identity)
            click.echo(f"Loaded {type(typeface).__name__}")
    except TypestoreError as e:
        logger.exception(f"Resolving font failed: {e}")
        sys.exit(1)


@cli.command(name="info")
@click.argument("family")
@catalog_options
def font_info(family, config_path, font_dirs):
    """Show every installed style of a font family."""
    try:
        store = _build_store(config_path, font_dirs)
        fonts = [
            f for f in store.get_all_installed() if f.family_name.upper() == family.upper()
        ]
        if not fonts:
            click.echo(f"Font family not found: {family}")
            sys.exit(2)

        click.echo(f"Font family: {fonts[0].family_name}")
        for font in sorted(fonts, key=lambda f: f.subfamily_name.upper()):
            click.echo(f"   {font.subfamily_name} ({font.style.name}) - {font.filename}")
    except TypestoreError as e:
        logger.exception(f"Font info failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
