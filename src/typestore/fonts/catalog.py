"""
Font Catalog
============

Index of installed fonts grouped by subfamily label, with case-insensitive
family lookups and the style fallback ladder used to resolve well-known styles.
"""

import logging
import threading
from collections.abc import Callable, Iterator
from typing import Protocol

from ..core.exceptions import UnsupportedPolicyOutcomeError
from .models import BOLD_ITALIC, DuplicateDecision, FontIdentity, TypefaceStyle, get_wellknown_style

logger = logging.getLogger(__name__)


class DuplicateDecisionPolicy(Protocol):
    """Decides what happens when a family is registered twice in one group."""

    def __call__(self, existing: FontIdentity, incoming: FontIdentity) -> DuplicateDecision: ...


def keep_existing(existing: FontIdentity, incoming: FontIdentity) -> DuplicateDecision:
    """Keep the first registered font and discard the incoming one."""
    return DuplicateDecision.SKIP


def replace_existing(existing: FontIdentity, incoming: FontIdentity) -> DuplicateDecision:
    """Discard the registered font and keep the incoming one."""
    return DuplicateDecision.REPLACE


def policy_for(decision: DuplicateDecision | str) -> DuplicateDecisionPolicy:
    """Get the constant policy for a decision (or its config value)."""
    decision = DuplicateDecision(decision)
    if decision is DuplicateDecision.REPLACE:
        return replace_existing
    return keep_existing


class StyleGroup:
    """Fonts sharing one style classification, keyed by uppercase family name."""

    def __init__(self, style: TypefaceStyle = TypefaceStyle.OTHERS):
        self.style = style
        self._members: dict[str, FontIdentity] = {}

    def get(self, family_name: str) -> FontIdentity | None:
        return self._members.get(family_name.upper())

    def add(self, identity: FontIdentity) -> None:
        self._members[identity.family_name.upper()] = identity

    def __iter__(self) -> Iterator[FontIdentity]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, family_name: str) -> bool:
        return family_name.upper() in self._members


class FontCatalog:
    """
    Catalog of installed fonts.

    Holds the four canonical style groups (normal, italic, bold, bold italic)
    and creates a private group for every subfamily label it does not know.
    All group maps are guarded by a single lock per catalog instance.
    """

    def __init__(
        self,
        duplicate_policy: DuplicateDecisionPolicy | None = None,
        bold_alias_label: str = "Gras",
    ):
        """
        Initialize font catalog.

        Args:
            duplicate_policy: Policy called when a family name collides; keeps
                the existing font when not given
            bold_alias_label: Regional subfamily label tried when bold is missing
        """
        self._lock = threading.RLock()
        self._duplicate_policy: DuplicateDecisionPolicy = duplicate_policy or keep_existing
        self.bold_alias_label = bold_alias_label

        self._label_to_group: dict[str, StyleGroup] = {}
        self._groups: list[StyleGroup] = []

        self._normal = self._create_group(TypefaceStyle.NORMAL, "regular", "normal")
        self._italic = self._create_group(TypefaceStyle.ITALIC, "italic", "italique")
        self._bold = self._create_group(TypefaceStyle.BOLD, "bold")
        self._bold_italic = self._create_group(BOLD_ITALIC, "bold italic")

        self._canonical_groups = {
            TypefaceStyle.NORMAL: self._normal,
            TypefaceStyle.ITALIC: self._italic,
            TypefaceStyle.BOLD: self._bold,
            BOLD_ITALIC: self._bold_italic,
        }

    def _create_group(self, style: TypefaceStyle, *labels: str) -> StyleGroup:
        group = StyleGroup(style)
        for label in labels:
            # One label must never map to two groups
            key = label.upper()
            if key in self._label_to_group:
                raise ValueError(f"Subfamily label already registered: {label}")
            self._label_to_group[key] = group
        self._groups.append(group)
        return group

    def set_duplicate_decision_policy(self, policy: DuplicateDecisionPolicy) -> None:
        """Set the policy used when a family name is registered twice."""
        with self._lock:
            self._duplicate_policy = policy

    def get_wellknown_style(self, subfamily_name: str) -> TypefaceStyle:
        """Get the canonical style for a subfamily label."""
        return get_wellknown_style(subfamily_name)

    def register(self, identity: FontIdentity) -> bool:
        """
        Register a font in the group of its subfamily label.

        Args:
            identity: Font to register

        Returns:
            True if the font was added or replaced an existing one, False if skipped

        Raises:
            UnsupportedPolicyOutcomeError: If the duplicate policy answers with
                anything but SKIP or REPLACE
        """
        with self._lock:
            label = identity.subfamily_name.upper()
            group = self._label_to_group.get(label)
            if group is None:
                # Unknown label gets its own group, still addressable by label
                group = self._create_group(TypefaceStyle.OTHERS, label)
                logger.debug(f"Created style group for subfamily '{identity.subfamily_name}'")

            existing = group.get(identity.family_name)
            if existing is None:
                group.add(identity)
                logger.debug(f"Registered font: {identity} ({identity.source_locator})")
                return True

            decision = self._duplicate_policy(existing, identity)
            if decision is DuplicateDecision.SKIP:
                logger.debug(
                    f"Skipped duplicate font {identity} from {identity.source_locator}, "
                    f"keeping {existing.source_locator}"
                )
                return False
            if decision is DuplicateDecision.REPLACE:
                group.add(identity)
                logger.debug(
                    f"Replaced font {existing} from {existing.source_locator} "
                    f"with {identity.source_locator}"
                )
                return True

            raise UnsupportedPolicyOutcomeError("duplicate decision", decision)

    def resolve_label(self, family_name: str, subfamily_name: str) -> FontIdentity | None:
        """Exact lookup by family name and subfamily label, without fallback."""
        with self._lock:
            group = self._label_to_group.get(subfamily_name.upper())
            if group is None:
                return None
            return group.get(family_name)

    def resolve_style(self, family_name: str, style: TypefaceStyle) -> FontIdentity | None:
        """
        Look up a family by canonical style, walking the fallback ladder on a miss.

        Bold falls back to the regional bold label group; italic falls back to
        the upright face, which the renderer is expected to slant.

        Args:
            family_name: Font family name
            style: Canonical style

        Returns:
            FontIdentity if found, None otherwise
        """
        with self._lock:
            group = self._canonical_groups.get(style)
            if group is None:
                return None

            found = group.get(family_name)
            if found is not None:
                return found

            if style == TypefaceStyle.BOLD:
                alias_group = self._label_to_group.get(self.bold_alias_label.upper())
                if alias_group is not None:
                    return alias_group.get(family_name)
            elif style == TypefaceStyle.ITALIC:
                return self._normal.get(family_name)

            return None

    def resolve(
        self, family_name: str, style_or_label: TypefaceStyle | str
    ) -> FontIdentity | None:
        """Resolve by canonical style (with fallback) or by exact subfamily label."""
        if isinstance(style_or_label, TypefaceStyle):
            return self.resolve_style(family_name, style_or_label)
        return self.resolve_label(family_name, style_or_label)

    def get_all_installed(self) -> Iterator[FontIdentity]:
        """Yield every registered font; order is unspecified."""
        with self._lock:
            groups = list(self._groups)
        for group in groups:
            with self._lock:
                members = list(group)
            yield from members

    def families(self) -> list[str]:
        """List all registered family names."""
        return sorted({identity.family_name for identity in self.get_all_installed()})

    def __len__(self) -> int:
        with self._lock:
            return sum(len(group) for group in self._groups)

    def __contains__(self, identity: FontIdentity) -> bool:
        with self._lock:
            group = self._label_to_group.get(identity.subfamily_name.upper())
            return group is not None and group.get(identity.family_name) == identity


_shared_catalog: FontCatalog | None = None
_shared_catalog_lock = threading.Lock()


def get_shared_font_catalog(
    init_callback: Callable[[FontCatalog], None] | None = None,
) -> FontCatalog:
    """
    Get the process-wide font catalog, creating it on first use.

    Args:
        init_callback: Called once with the new catalog when it is created,
            e.g. to load system fonts

    Returns:
        The shared FontCatalog
    """
    global _shared_catalog

    with _shared_catalog_lock:
        if _shared_catalog is None:
            catalog = FontCatalog()
            if init_callback is not None:
                init_callback(catalog)
            _shared_catalog = catalog
            logger.info(f"Shared font catalog created with {len(catalog)} fonts")
        return _shared_catalog
