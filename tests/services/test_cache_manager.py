"""
Tests for CacheManager and CachedPlaylistProvider.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from moodify.classifier.search_queries import search_query_for
from moodify.models.media_models import MediaItem
from moodify.models.mood_models import MoodCategory
from moodify.services.cache_manager import CacheManager, CachedPlaylistProvider
from moodify.services.playlist_provider import NetworkError


@pytest.fixture
def cache_manager(tmp_path):
    """Create a cache manager in a temporary directory."""
    manager = CacheManager(cache_dir=str(tmp_path / "cache"))
    yield manager
    manager.close()


@pytest.fixture
def items():
    return [
        MediaItem(id="a1", title="Weightless", artist="Marconi Union"),
        MediaItem(id="a2", title="Porcelain", artist="Moby", is_favorite=True),
    ]


class TestCacheManager:
    """Test the disk cache."""

    def test_key_ignores_case_and_whitespace(self):
        assert CacheManager.generate_key("  Rainy Day ") == CacheManager.generate_key("rainy day")
        assert CacheManager.generate_key("rainy day") != CacheManager.generate_key("sunny day")

    def test_playlist_round_trip(self, cache_manager, items):
        assert cache_manager.get_playlist("rainy day") is None

        assert cache_manager.set_playlist("rainy day", items) is True
        cached = cache_manager.get_playlist("Rainy Day")

        assert cached == items
        assert cached[1].is_favorite is True

    def test_mood_queries_use_mood_cache(self, cache_manager, items):
        cache_manager.set_playlist(search_query_for(MoodCategory.CHILL), items)
        cache_manager.set_playlist("rainy day", items)

        stats = cache_manager.get_stats()
        assert stats["moods"]["size"] == 1
        assert stats["searches"]["size"] == 1

    def test_invalid_cache_type(self, cache_manager):
        assert cache_manager.get("tracks", "key", default="fallback") == "fallback"
        assert cache_manager.set("tracks", "key", "value") is False
        assert cache_manager.clear("tracks") is False

    def test_clear(self, cache_manager, items):
        cache_manager.set_playlist("rainy day", items)

        assert cache_manager.clear() is True
        assert cache_manager.get_playlist("rainy day") is None


class TestCachedPlaylistProvider:
    """Test the caching provider decorator."""

    @pytest.fixture
    def inner_provider(self, items):
        provider = Mock()
        provider.service_name = "mock"
        provider.search = AsyncMock(return_value=items)
        return provider

    def test_service_name(self, inner_provider, cache_manager):
        assert CachedPlaylistProvider(inner_provider, cache_manager).service_name == "cached-mock"

    @pytest.mark.asyncio
    async def test_second_search_served_from_cache(self, inner_provider, cache_manager, items):
        provider = CachedPlaylistProvider(inner_provider, cache_manager)

        first = await provider.search("rainy day")
        second = await provider.search("rainy day")

        assert first == second == items
        inner_provider.search.assert_awaited_once_with("rainy day")

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self, inner_provider, cache_manager, items):
        inner_provider.search.side_effect = [NetworkError(), items]
        provider = CachedPlaylistProvider(inner_provider, cache_manager)

        with pytest.raises(NetworkError):
            await provider.search("rainy day")

        assert await provider.search("rainy day") == items
        assert inner_provider.search.await_count == 2
