"""
Typeface Store Tests
====================

Tests for resolution by name, the not-found resolver hook and typeface loading.
"""

import pytest
from helpers import MemoryFontSource, StubTypeface, make_identity

from typestore.core.config import FontStoreConfig
from typestore.core.exceptions import (
    FallbackLoopError,
    TypefaceParseError,
    UnsupportedPolicyOutcomeError,
)
from typestore.fonts import catalog as catalog_module
from typestore.fonts import store as store_module
from typestore.fonts.cache import TypefaceCache
from typestore.fonts.catalog import FontCatalog, replace_existing
from typestore.fonts.models import TypefaceStyle
from typestore.fonts.store import TypefaceStore, get_shared_typeface_store


class TestConstruction:
    """Test that injected collaborators are used as given."""

    def test_empty_collaborators_are_kept(self, parser):
        """Test that empty catalogs and caches are not replaced by defaults."""
        catalog = FontCatalog()
        cache = TypefaceCache(parser=parser, source=MemoryFontSource())

        def resolver(catalog, family_name, subfamily_name, style):
            return None

        store = TypefaceStore(
            catalog=catalog, cache=cache, resolver=resolver, config=FontStoreConfig(_env_file=None)
        )

        assert len(catalog) == 0
        assert len(cache) == 0
        assert store.font_catalog is catalog
        assert store.cache is cache
        assert store.resolve("Unknown") is None

    def test_fonts_registered_after_construction(self, parser):
        """Test that the store sees fonts added to the injected catalog later."""
        catalog = FontCatalog()
        verdana = make_identity("Verdana", "Regular")
        cache = TypefaceCache(
            parser=parser, source=MemoryFontSource({verdana.source_locator: b"Verdana|Regular"})
        )
        store = TypefaceStore(catalog=catalog, cache=cache, config=FontStoreConfig(_env_file=None))

        catalog.register(verdana)

        assert store.resolve("verdana") == verdana
        assert store.get_typeface("Verdana") == StubTypeface(b"Verdana|Regular")
        assert parser.full_calls == 1
        assert cache.is_loaded(verdana)

    def test_shared_store_uses_empty_shared_catalog(self, monkeypatch):
        """Test that the shared store sits on the shared catalog even before fonts load."""
        monkeypatch.setattr(catalog_module, "_shared_catalog", None)
        monkeypatch.setattr(store_module, "_shared_store", None)

        store = get_shared_typeface_store()
        shared_catalog = catalog_module.get_shared_font_catalog()

        assert len(shared_catalog) == 0
        assert store.font_catalog is shared_catalog
        shared_catalog.register(make_identity("Verdana", "Regular"))
        assert store.resolve("Verdana").family_name == "Verdana"


class TestEndToEnd:
    """Register Tahoma, Tahoma Bold and Arial, then request typefaces."""

    def test_exact_match(self, store, parser):
        """Test a direct catalog hit."""
        typeface = store.get_typeface("Tahoma", TypefaceStyle.NORMAL)

        assert typeface == StubTypeface(b"Tahoma|Regular")
        assert parser.full_calls == 1

    def test_italic_falls_back_to_regular(self, store):
        """Test that a missing italic loads the upright face."""
        regular = store.get_typeface("Tahoma", TypefaceStyle.NORMAL)

        assert store.get_typeface("Tahoma", TypefaceStyle.ITALIC) is regular

    def test_helvetica_resolves_to_arial(self, store):
        """Test the generic family mapping of the default resolver."""
        typeface = store.get_typeface("Helvetica", TypefaceStyle.NORMAL)

        assert typeface == StubTypeface(b"Arial|Regular")

    def test_unknown_resolves_to_default_family(self, store):
        """Test that unknown families fall back to the default family."""
        unknown = store.get_typeface("Unknown", TypefaceStyle.NORMAL)

        assert unknown is store.get_typeface("Tahoma", TypefaceStyle.NORMAL)

    def test_each_font_parsed_once(self, store, parser):
        """Test that all routes to one font share a single parse."""
        store.get_typeface("Tahoma", TypefaceStyle.NORMAL)
        store.get_typeface("tahoma", TypefaceStyle.ITALIC)
        store.get_typeface("Unknown", TypefaceStyle.NORMAL)
        store.get_typeface("Tahoma", "Regular")

        assert parser.full_calls == 1

    def test_label_request(self, store):
        """Test requests by exact subfamily label."""
        assert store.get_typeface("Tahoma", "bold") == StubTypeface(b"Tahoma|Bold")

    def test_default_style_is_normal(self, store):
        """Test the default style argument."""
        assert store.resolve("Arial").subfamily_name == "Regular"


class TestNotFoundResolution:
    """Test the not-found resolver hook."""

    def test_resolution_miss_returns_none(self, store):
        """Test that a resolver returning None yields not-found."""
        store.set_font_not_found_resolver(lambda catalog, name, label, style: None)

        assert store.resolve("Unknown", TypefaceStyle.NORMAL) is None
        assert store.get_typeface("Unknown", TypefaceStyle.NORMAL) is None

    def test_resolver_receives_request(self, store):
        """Test the arguments passed to the resolver."""
        calls = []

        def resolver(catalog, family_name, subfamily_name, style):
            calls.append((catalog, family_name, subfamily_name, style))

        store.set_font_not_found_resolver(resolver)
        store.resolve("Verdana", TypefaceStyle.BOLD)
        store.resolve("Verdana", "Italique")

        assert calls == [
            (store.font_catalog, "Verdana", None, TypefaceStyle.BOLD),
            (store.font_catalog, "Verdana", "Italique", TypefaceStyle.ITALIC),
        ]

    def test_resolver_not_called_on_hit(self, store):
        """Test that catalog hits bypass the resolver."""

        def resolver(catalog, family_name, subfamily_name, style):
            raise AssertionError("resolver must not be called")

        store.set_font_not_found_resolver(resolver)

        assert store.resolve("Tahoma", TypefaceStyle.BOLD) is not None

    def test_custom_resolver(self, store):
        """Test a host-supplied resolver."""
        arial = store.font_catalog.resolve_style("Arial", TypefaceStyle.NORMAL)
        store.set_font_not_found_resolver(lambda catalog, name, label, style: arial)

        assert store.resolve("Anything", TypefaceStyle.BOLD) is arial

    def test_invalid_resolver_result(self, store):
        """Test that a resolver returning a non-identity is fatal."""
        store.set_font_not_found_resolver(lambda catalog, name, label, style: "Arial")

        with pytest.raises(UnsupportedPolicyOutcomeError):
            store.get_typeface("Unknown", TypefaceStyle.NORMAL)

    def test_default_resolver_loop_guard(self, parser):
        """Test that an unregistered default family fails fast."""
        store = TypefaceStore(
            catalog=FontCatalog(),
            cache=TypefaceCache(parser=parser, source=MemoryFontSource()),
            config=FontStoreConfig(_env_file=None),
        )

        with pytest.raises(FallbackLoopError):
            store.get_typeface("Tahoma", TypefaceStyle.NORMAL)
        assert parser.full_calls == 0

    def test_self_referencing_resolver_loop_guard(self, parser):
        """Test a resolver that maps the default family back to itself."""
        store = TypefaceStore(
            catalog=FontCatalog(),
            cache=TypefaceCache(parser=parser, source=MemoryFontSource()),
        )
        store.font_catalog.register(make_identity("Arial", "Regular"))
        store.set_font_not_found_resolver(
            lambda catalog, name, label, style: store.resolve("Tahoma", style)
        )

        with pytest.raises(FallbackLoopError) as exc_info:
            store.get_typeface("Tahoma", TypefaceStyle.NORMAL)
        assert exc_info.value.family_name == "Tahoma"

        # Unknown names map to Tahoma, which is missing and maps to itself
        with pytest.raises(FallbackLoopError):
            store.get_typeface("Unknown", TypefaceStyle.NORMAL)

        # The guard is released after the failure
        store.set_font_not_found_resolver(lambda catalog, name, label, style: None)
        assert store.resolve("Tahoma", TypefaceStyle.NORMAL) is None


class TestLoading:
    """Test typeface loading through the store."""

    def test_parse_error_propagates(self, parser):
        """Test that parse failures reach the caller and are not cached."""
        broken = make_identity("Broken", "Regular")
        source = MemoryFontSource({broken.source_locator: b"corrupt"})
        store = TypefaceStore(catalog=FontCatalog(), cache=TypefaceCache(parser, source))
        store.font_catalog.register(broken)

        with pytest.raises(TypefaceParseError):
            store.get_typeface("Broken", TypefaceStyle.NORMAL)
        with pytest.raises(TypefaceParseError):
            store.get_typeface("Broken", TypefaceStyle.NORMAL)

        assert parser.full_calls == 2

    def test_get_typeface_for_identity(self, store, sample_fonts):
        """Test loading an already resolved identity."""
        identities, _ = sample_fonts

        assert store.get_typeface_for(identities[2]) == StubTypeface(b"Arial|Regular")

    def test_get_all_installed(self, store, sample_fonts):
        """Test listing installed fonts through the store."""
        identities, _ = sample_fonts

        assert set(store.get_all_installed()) == set(identities)

    def test_preload_all_installed(self, store, parser):
        """Test preloading every installed font."""
        assert store.preload() == 3
        assert parser.full_calls == 3

        store.get_typeface("Arial", TypefaceStyle.NORMAL)
        assert parser.full_calls == 3


class TestConfiguration:
    """Test store construction from configuration."""

    def test_duplicate_decision_from_config(self):
        """Test that the configured duplicate decision reaches the catalog."""
        store = TypefaceStore(config=FontStoreConfig(_env_file=None, duplicate_decision="replace"))
        store.font_catalog.register(make_identity("Tahoma", "Regular", "/a/tahoma.ttf"))
        store.font_catalog.register(make_identity("Tahoma", "Regular", "/b/tahoma.ttf"))

        assert store.resolve("Tahoma").source_locator == "/b/tahoma.ttf"

    def test_set_duplicate_decision_policy(self):
        """Test replacing the duplicate policy through the store."""
        store = TypefaceStore(config=FontStoreConfig(_env_file=None))
        store.set_duplicate_decision_policy(replace_existing)
        store.font_catalog.register(make_identity("Tahoma", "Regular", "/a/tahoma.ttf"))
        store.font_catalog.register(make_identity("Tahoma", "Regular", "/b/tahoma.ttf"))

        assert store.resolve("Tahoma").source_locator == "/b/tahoma.ttf"

    def test_default_family_from_config(self):
        """Test that the default resolver uses the configured default family."""
        store = TypefaceStore(config=FontStoreConfig(_env_file=None, default_family="Arial"))
        store.font_catalog.register(make_identity("Arial", "Regular"))

        assert store.resolve("Unknown").family_name == "Arial"
        with pytest.raises(FallbackLoopError):
            store.resolve("Arial", TypefaceStyle.BOLD)

    def test_shared_store_created_once(self, monkeypatch):
        """Test the process-wide store."""
        monkeypatch.setattr(catalog_module, "_shared_catalog", None)
        monkeypatch.setattr(store_module, "_shared_store", None)

        first = get_shared_typeface_store()
        second = get_shared_typeface_store()

        assert first is second
        assert first.font_catalog is catalog_module.get_shared_font_catalog()
