"""
Font data models and types.
"""

from dataclasses import dataclass, field
from enum import Enum, Flag
from pathlib import Path


class TypefaceStyle(Flag):
    """Canonical style classification; BOLD and ITALIC compose."""

    OTHERS = 0
    NORMAL = 1
    BOLD = 1 << 2
    ITALIC = 1 << 3


BOLD_ITALIC = TypefaceStyle.BOLD | TypefaceStyle.ITALIC

# Subfamily labels (uppercase) with a well-known classification
WELLKNOWN_STYLE_LABELS: dict[str, TypefaceStyle] = {
    "NORMAL": TypefaceStyle.NORMAL,
    "REGULAR": TypefaceStyle.NORMAL,
    "BOLD": TypefaceStyle.BOLD,
    "ITALIC": TypefaceStyle.ITALIC,
    "ITALIQUE": TypefaceStyle.ITALIC,
    "BOLD ITALIC": BOLD_ITALIC,
}


def get_wellknown_style(subfamily_name: str) -> TypefaceStyle:
    """Map a free-form subfamily label to its canonical style, OTHERS if unknown."""
    return WELLKNOWN_STYLE_LABELS.get(subfamily_name.upper(), TypefaceStyle.OTHERS)


class DuplicateDecision(Enum):
    """Outcome of a duplicate family name registration."""

    SKIP = "skip"  # keep existing, discard incoming
    REPLACE = "replace"  # discard existing, keep incoming


@dataclass(frozen=True)
class FontIdentity:
    """One discoverable font file.

    Identities compare and hash by family name and source locator only, so a
    re-registered file with different subfamily metadata is the same entity.
    """

    family_name: str
    subfamily_name: str = field(compare=False)
    source_locator: str

    @property
    def style(self) -> TypefaceStyle:
        """Get the canonical style of the subfamily label."""
        return get_wellknown_style(self.subfamily_name)

    @property
    def filename(self) -> str:
        """Get the font filename."""
        return Path(self.source_locator).name

    @property
    def extension(self) -> str:
        """Get the font file extension."""
        return Path(self.source_locator).suffix.lower()

    def __str__(self) -> str:
        return f"{self.family_name} {self.subfamily_name}"


@dataclass
class PreviewFontInfo:
    """Names read from a font file without a full parse."""

    family_name: str
    subfamily_name: str
