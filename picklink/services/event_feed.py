"""Event feed service.

Fetches events from an ordered provider chain behind an in-memory TTL
cache. The first provider that returns events for a sport wins; the
result is cached under the sport (or "all") for the TTL.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from picklink.core import Event, EventProvider
from picklink.core.sports import normalize_sport
from picklink.providers.mock import MockProvider

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300.0


@dataclass
class _CacheEntry:
    events: list[Event]
    provider: str
    fetched_at: float


class EventFeedService:
    """Provider chain with TTL caching.

    Thread-safe: the cache is guarded by a lock, providers are called
    outside it.
    """

    def __init__(
        self,
        providers: list[EventProvider],
        cache_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._providers = list(providers)
        self._cache_ttl = cache_ttl
        self._clock = clock
        self._cache: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()
        self._mock = MockProvider()

    @property
    def provider_names(self) -> list[str]:
        return [p.name for p in self._providers]

    def get_events(self, sport: str | None = None, force_mock: bool = False) -> list[Event]:
        """Get upcoming events for a sport (None = all sports).

        Args:
            sport: Sport name in any format; normalized before lookup
            force_mock: Skip live providers and the cache

        Returns:
            Events from the first provider that had any; empty if none did
        """
        sport = normalize_sport(sport)

        if force_mock:
            return self._mock.get_events(sport)

        cache_key = sport or "all"
        cached = self._get_cached(cache_key)
        if cached is not None:
            logger.debug(
                "[FEED] Cache hit for %s (%d events from %s)",
                cache_key,
                len(cached.events),
                cached.provider,
            )
            return cached.events

        for provider in self._providers:
            if not provider.supports_sport(sport):
                continue

            try:
                events = provider.get_events(sport)
            except Exception as e:
                logger.warning("[FEED] Provider %s failed for %s: %s", provider.name, cache_key, e)
                continue

            if events:
                logger.info("[FEED] %d %s events from %s", len(events), cache_key, provider.name)
                self._set_cached(cache_key, events, provider.name)
                return events

            logger.debug("[FEED] Provider %s returned no %s events", provider.name, cache_key)

        logger.warning("[FEED] No provider returned %s events", cache_key)
        return []

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _get_cached(self, key: str) -> _CacheEntry | None:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if self._clock() - entry.fetched_at >= self._cache_ttl:
                del self._cache[key]
                return None
            return entry

    def _set_cached(self, key: str, events: list[Event], provider: str) -> None:
        with self._lock:
            self._cache[key] = _CacheEntry(events=events, provider=provider, fetched_at=self._clock())
