"""
Font Not-Found Resolvers
========================

Strategies consulted when a requested family has no match in the catalog.
"""

import logging
from typing import Protocol

from ..core.exceptions import DefaultFontNotRegisteredError, FallbackLoopError
from .catalog import FontCatalog
from .models import FontIdentity, TypefaceStyle

logger = logging.getLogger(__name__)


class FontNotFoundResolver(Protocol):
    """Maps a missing family to another installed font, or None."""

    def __call__(
        self,
        catalog: FontCatalog,
        family_name: str,
        subfamily_name: str | None,
        style: TypefaceStyle,
    ) -> FontIdentity | None: ...


class DefaultFontNotFoundResolver:
    """
    Reference fallback policy.

    Generic names (e.g. ``monospace``) map to a concrete installed family and
    everything else maps to the default family. The default family itself
    must be installed: asking for it here raises instead of looping.
    """

    def __init__(
        self,
        default_family: str = "Tahoma",
        family_map: dict[str, str] | None = None,
    ):
        self.default_family = default_family
        if family_map is None:
            family_map = {"MONOSPACE": "Courier New", "HELVETICA": "Arial"}
        self.family_map = {name.upper(): target for name, target in family_map.items()}

    def __call__(
        self,
        catalog: FontCatalog,
        family_name: str,
        subfamily_name: str | None,
        style: TypefaceStyle,
    ) -> FontIdentity | None:
        requested = family_name.upper()
        if requested == self.default_family.upper():
            raise FallbackLoopError(family_name)

        target = self.family_map.get(requested, self.default_family)
        if style == TypefaceStyle.OTHERS and subfamily_name is not None:
            found = catalog.resolve_label(target, subfamily_name)
        else:
            found = catalog.resolve_style(target, style)
        if (
            found is None
            and target.upper() == self.default_family.upper()
            and catalog.resolve_style(self.default_family, TypefaceStyle.NORMAL) is None
        ):
            raise DefaultFontNotRegisteredError(self.default_family)

        if found is not None:
            logger.info(f"Using fallback font {found} for {family_name}")
        return found
