"""
Typeface Store
==============

Resolution-by-name façade combining the font catalog, the not-found resolver
and the typeface cache.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from ..core.config import FontStoreConfig
from ..core.exceptions import FallbackLoopError, UnsupportedPolicyOutcomeError
from .cache import TypefaceCache
from .catalog import DuplicateDecisionPolicy, FontCatalog, get_shared_font_catalog, policy_for
from .models import FontIdentity, TypefaceStyle, get_wellknown_style
from .resolver import DefaultFontNotFoundResolver, FontNotFoundResolver

logger = logging.getLogger(__name__)


class TypefaceStore:
    """
    Resolves font requests to parsed typefaces.

    A request is looked up in the catalog first. On a miss the not-found
    resolver gets one chance to map it to another installed font, and the
    resolved identity is then loaded through the typeface cache.
    """

    def __init__(
        self,
        catalog: FontCatalog | None = None,
        cache: TypefaceCache | None = None,
        resolver: FontNotFoundResolver | None = None,
        config: FontStoreConfig | None = None,
    ):
        """
        Initialize typeface store.

        Args:
            catalog: Font catalog; a new one is built from config if not given
            cache: Typeface cache; a fontTools-backed one if not given
            resolver: Not-found resolver; the default policy if not given
            config: Store configuration
        """
        self.config = config if config is not None else FontStoreConfig()
        if catalog is None:
            catalog = FontCatalog(
                duplicate_policy=policy_for(self.config.duplicate_decision),
                bold_alias_label=self.config.bold_alias_label,
            )
        self.font_catalog = catalog
        self.cache = cache if cache is not None else TypefaceCache()
        if resolver is None:
            resolver = DefaultFontNotFoundResolver(
                default_family=self.config.default_family,
                family_map=self.config.generic_family_map,
            )
        self._resolver: FontNotFoundResolver = resolver
        self._lock = threading.Lock()
        self._local = threading.local()

    def set_font_not_found_resolver(self, resolver: FontNotFoundResolver) -> None:
        """Set the resolver consulted when a family is not in the catalog."""
        with self._lock:
            self._resolver = resolver

    def set_duplicate_decision_policy(self, policy: DuplicateDecisionPolicy) -> None:
        """Set the catalog's duplicate family policy."""
        self.font_catalog.set_duplicate_decision_policy(policy)

    def resolve(
        self,
        family_name: str,
        style_or_label: TypefaceStyle | str = TypefaceStyle.NORMAL,
    ) -> FontIdentity | None:
        """
        Resolve a font request to an installed font.

        Args:
            family_name: Font family name
            style_or_label: Canonical style, or an exact subfamily label

        Returns:
            FontIdentity if found directly or through the resolver, None otherwise

        Raises:
            FallbackLoopError: If fallback leads back to a family being resolved
            UnsupportedPolicyOutcomeError: If the resolver returns a non-identity
        """
        found = self.font_catalog.resolve(family_name, style_or_label)
        if found is not None:
            return found

        if isinstance(style_or_label, TypefaceStyle):
            subfamily_name, style = None, style_or_label
        else:
            subfamily_name, style = style_or_label, get_wellknown_style(style_or_label)

        return self._resolve_not_found(family_name, subfamily_name, style)

    def _resolve_not_found(
        self, family_name: str, subfamily_name: str | None, style: TypefaceStyle
    ) -> FontIdentity | None:
        active = self._active_families()
        key = family_name.upper()
        if key in active:
            raise FallbackLoopError(family_name)

        with self._lock:
            resolver = self._resolver

        active.add(key)
        try:
            found = resolver(self.font_catalog, family_name, subfamily_name, style)
        finally:
            active.discard(key)

        if found is not None and not isinstance(found, FontIdentity):
            raise UnsupportedPolicyOutcomeError("font not found resolver", found)

        if found is None:
            logger.warning(f"Font not found: {family_name} {subfamily_name or style.name}")
        return found

    def _active_families(self) -> set[str]:
        # Families whose not-found resolution is running on this thread
        active = getattr(self._local, "active", None)
        if active is None:
            active = self._local.active = set()
        return active

    def get_typeface(
        self,
        family_name: str,
        style_or_label: TypefaceStyle | str = TypefaceStyle.NORMAL,
    ) -> Any | None:
        """
        Get a parsed typeface by family name and style.

        Args:
            family_name: Font family name
            style_or_label: Canonical style, or an exact subfamily label

        Returns:
            The cached typeface, or None if no font could be resolved

        Raises:
            TypefaceParseError: If the resolved font cannot be parsed
        """
        identity = self.resolve(family_name, style_or_label)
        if identity is None:
            return None
        return self.cache.get_or_load(identity)

    def get_typeface_for(self, identity: FontIdentity) -> Any:
        """Get the parsed typeface of an already resolved font."""
        return self.cache.get_or_load(identity)

    def get_all_installed(self) -> Iterator[FontIdentity]:
        """Yield every installed font."""
        return self.font_catalog.get_all_installed()

    def preload(self, identities: Iterable[FontIdentity] | None = None) -> int:
        """Parse fonts ahead of use; all installed fonts if none are given."""
        if identities is None:
            identities = self.get_all_installed()
        return self.cache.preload(identities, max_concurrent=self.config.preload_workers)


_shared_store: TypefaceStore | None = None
_shared_store_lock = threading.Lock()


def get_shared_typeface_store(
    init_callback: Callable[[FontCatalog], None] | None = None,
) -> TypefaceStore:
    """Get the process-wide typeface store over the shared font catalog."""
    global _shared_store

    with _shared_store_lock:
        if _shared_store is None:
            _shared_store = TypefaceStore(catalog=get_shared_font_catalog(init_callback))
        return _shared_store
