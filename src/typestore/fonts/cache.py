"""Typeface Cache
==============

Lazily populated, unbounded cache from a resolved FontIdentity to its fully
parsed typeface:
- Each identity is parsed at most once for the lifetime of the cache
- Concurrent requests for the same identity wait on the single in-flight parse
- Requests for different identities never block each other while parsing
- Failed parses are not cached, so a later request may retry
"""

import concurrent.futures
import logging
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..core.exceptions import TypefaceParseError
from .models import FontIdentity
from .sources import FileFontSource, FontParser, FontSourceProvider, FontToolsParser

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Statistics for typeface cache performance."""

    hits: int = 0
    misses: int = 0
    loads: int = 0
    failures: int = 0
    total_load_seconds: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return (self.hits / total * 100.0) if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "loads": self.loads,
            "failures": self.failures,
            "hit_rate_percent": self.hit_rate,
            "total_load_seconds": self.total_load_seconds,
        }


class TypefaceCache:
    """Thread-safe cache of parsed typefaces keyed by FontIdentity."""

    def __init__(
        self,
        parser: FontParser | None = None,
        source: FontSourceProvider | None = None,
    ):
        self.parser = parser or FontToolsParser()
        self.source = source or FileFontSource()

        self._loaded: dict[FontIdentity, Any] = {}
        self._pending: dict[FontIdentity, concurrent.futures.Future] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def get_or_load(self, identity: FontIdentity) -> Any:
        """Get a parsed typeface from cache or load it.

        Args:
            identity: Resolved font identity

        Returns:
            The cached typeface object, shared with every other caller

        Raises:
            TypefaceParseError: If the font source cannot be read or parsed
        """
        with self._lock:
            if identity in self._loaded:
                self._stats.hits += 1
                logger.debug(f"Cache hit for typeface {identity}")
                return self._loaded[identity]

            self._stats.misses += 1
            pending = self._pending.get(identity)
            if pending is None:
                # This caller owns the load; others subscribe to the marker
                pending = concurrent.futures.Future()
                self._pending[identity] = pending
                is_owner = True
            else:
                is_owner = False

        if not is_owner:
            logger.debug(f"Waiting for in-flight load of typeface {identity}")
            return pending.result()

        try:
            typeface = self._load(identity)
        except BaseException as e:
            with self._lock:
                del self._pending[identity]
                self._stats.failures += 1
            pending.set_exception(e)
            raise

        with self._lock:
            self._loaded[identity] = typeface
            del self._pending[identity]
        pending.set_result(typeface)
        return typeface

    def _load(self, identity: FontIdentity) -> Any:
        locator = identity.source_locator
        logger.info(f"Cache miss for typeface {identity}, loading {locator}...")

        start_time = time.time()
        try:
            with self.source.open_stream(locator) as stream:
                typeface = self.parser.parse_full(stream)
        except TypefaceParseError:
            logger.exception(f"Failed to parse typeface {locator}")
            raise
        except Exception as e:
            logger.exception(f"Failed to load typeface {locator}")
            raise TypefaceParseError(locator, str(e)) from e

        if typeface is None:
            raise TypefaceParseError(locator, "parser returned no typeface")

        load_time = time.time() - start_time
        with self._lock:
            self._stats.loads += 1
            self._stats.total_load_seconds += load_time

        logger.info(f"Loaded and cached typeface {identity} in {load_time:.3f}s")
        return typeface

    def is_loaded(self, identity: FontIdentity) -> bool:
        """Check whether an identity has a parsed typeface cached."""
        with self._lock:
            return identity in self._loaded

    def preload(
        self,
        identities: Iterable[FontIdentity],
        max_concurrent: int = 2,
    ) -> int:
        """Load many typefaces into cache concurrently.

        Args:
            identities: Fonts to load
            max_concurrent: Maximum number of concurrent loads

        Returns:
            Number of typefaces available in cache afterwards
        """
        identities = list(identities)
        logger.info(
            f"Preloading {len(identities)} typefaces with max_concurrent={max_concurrent}"
        )

        successful = 0
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_concurrent) as executor:
            futures = {
                executor.submit(self.get_or_load, identity): identity for identity in identities
            }
            for future in concurrent.futures.as_completed(futures):
                try:
                    future.result()
                    successful += 1
                except TypefaceParseError as e:
                    logger.warning(f"Failed to preload typeface {futures[future]}: {e}")

        logger.info(f"Preloading complete: {successful}/{len(identities)} typefaces loaded")
        return successful

    def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                loads=self._stats.loads,
                failures=self._stats.failures,
                total_load_seconds=self._stats.total_load_seconds,
            )

    def __len__(self) -> int:
        """Get number of cached typefaces."""
        with self._lock:
            return len(self._loaded)

    def __contains__(self, identity: FontIdentity) -> bool:
        return self.is_loaded(identity)
