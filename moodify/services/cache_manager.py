"""
Cache Management System

Disk-backed caching with TTL for playlist provider results.
Mood queries are stable strings and are kept longer than free-text searches.
"""

import hashlib
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
from diskcache import Cache

from ..classifier.search_queries import mood_for_query
from ..models.media_models import MediaItem
from .playlist_provider import PlaylistProvider

logger = structlog.get_logger(__name__)


class CacheManager:
    """
    File-based cache manager with TTL support.

    Handles caching for:
    - Playlists fetched with a fixed mood query
    - Playlists fetched with free-text searches
    """

    def __init__(
        self,
        cache_dir: str = "data/cache",
        mood_ttl: int = 24 * 3600,
        search_ttl: int = 3600
    ):
        """
        Initialize cache manager.

        Args:
            cache_dir: Directory for cache storage
            mood_ttl: Default TTL in seconds for mood playlists
            search_ttl: Default TTL in seconds for free-text searches
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self.caches = {
            "moods": Cache(str(self.cache_dir / "moods")),
            "searches": Cache(str(self.cache_dir / "searches")),
        }

        self.default_ttl = {
            "moods": mood_ttl,
            "searches": search_ttl,
        }

        logger.info(
            "Cache manager initialized",
            cache_dir=str(self.cache_dir),
            cache_types=list(self.caches.keys())
        )

    @staticmethod
    def generate_key(query: str) -> str:
        """Generate cache key from a search query."""
        return hashlib.md5(query.strip().lower().encode()).hexdigest()

    def get(self, cache_type: str, key: str, default: Any = None) -> Any:
        """
        Get value from cache.

        Args:
            cache_type: Type of cache (moods, searches)
            key: Cache key
            default: Default value if not found

        Returns:
            Cached value or default
        """
        if cache_type not in self.caches:
            logger.warning("Invalid cache type", cache_type=cache_type)
            return default

        try:
            value = self.caches[cache_type].get(key, default)
            logger.debug(
                "Cache hit" if value is not default else "Cache miss",
                cache_type=cache_type,
                key=key[:16] + "..."
            )
            return value

        except Exception as e:
            logger.error(
                "Cache get failed",
                cache_type=cache_type,
                key=key[:16] + "...",
                error=str(e)
            )
            return default

    def set(self, cache_type: str, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            cache_type: Type of cache
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (uses default if None)

        Returns:
            True if successful
        """
        if cache_type not in self.caches:
            logger.warning("Invalid cache type", cache_type=cache_type)
            return False

        try:
            if ttl is None:
                ttl = self.default_ttl[cache_type]

            self.caches[cache_type].set(key, value, expire=ttl or None)

            logger.debug(
                "Cache set",
                cache_type=cache_type,
                key=key[:16] + "...",
                ttl=ttl
            )
            return True

        except Exception as e:
            logger.error(
                "Cache set failed",
                cache_type=cache_type,
                key=key[:16] + "...",
                error=str(e)
            )
            return False

    def get_playlist(self, query: str) -> Optional[List[MediaItem]]:
        """Get a cached playlist for a query, or None."""
        cached = self.get(self._cache_type_for(query), self.generate_key(query))
        if cached is None:
            return None
        return [MediaItem(**item) for item in cached]

    def set_playlist(self, query: str, items: List[MediaItem], ttl: Optional[int] = None) -> bool:
        """Cache a playlist for a query."""
        serialized = [item.model_dump() for item in items]
        return self.set(self._cache_type_for(query), self.generate_key(query), serialized, ttl)

    def clear(self, cache_type: Optional[str] = None) -> bool:
        """
        Clear cache(s).

        Args:
            cache_type: Specific cache to clear (all if None)

        Returns:
            True if successful
        """
        try:
            if cache_type:
                if cache_type not in self.caches:
                    logger.warning("Invalid cache type", cache_type=cache_type)
                    return False
                self.caches[cache_type].clear()
                logger.info("Cache cleared", cache_type=cache_type)
                return True

            for cache in self.caches.values():
                cache.clear()
            logger.info("All caches cleared")
            return True

        except Exception as e:
            logger.error("Cache clear failed", error=str(e))
            return False

    def get_stats(self) -> Dict[str, Dict[str, Any]]:
        """Get size and disk usage per cache."""
        stats = {}
        for cache_name, cache in self.caches.items():
            try:
                stats[cache_name] = {
                    "size": len(cache),
                    "volume": cache.volume(),
                    "directory": str(cache.directory)
                }
            except Exception as e:
                logger.error("Failed to get cache stats", cache_name=cache_name, error=str(e))
                stats[cache_name] = {"error": str(e)}
        return stats

    def close(self) -> None:
        for cache in self.caches.values():
            cache.close()
        logger.debug("Cache manager closed")

    @staticmethod
    def _cache_type_for(query: str) -> str:
        return "moods" if mood_for_query(query) is not None else "searches"


class CachedPlaylistProvider(PlaylistProvider):
    """
    Provider decorator that caches successful searches.

    Failures are never cached, so a later call retries the wrapped provider.
    """

    def __init__(self, provider: PlaylistProvider, cache_manager: CacheManager):
        self.provider = provider
        self.cache_manager = cache_manager
        self.service_name = f"cached-{provider.service_name}"
        self.logger = logger.bind(component="CachedPlaylistProvider", provider=provider.service_name)

    async def search(self, query: str) -> List[MediaItem]:
        cached = self.cache_manager.get_playlist(query)
        if cached is not None:
            self.logger.debug("Serving cached playlist", query=query, count=len(cached))
            return cached

        items = await self.provider.search(query)
        self.cache_manager.set_playlist(query, items)
        return items
