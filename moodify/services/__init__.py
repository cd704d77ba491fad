"""
Services Module

Playlist providers, caching and the mood service that ties the classifier
to a provider.
"""

from .playlist_provider import (
    PlaylistProvider,
    SamplePlaylistProvider,
    sample_playlist,
    SearchError,
    InvalidQueryError,
    UnauthorizedError,
    QuotaExceededError,
    NoDataError,
    DecodingError,
    NetworkError,
)
from .cache_manager import CacheManager, CachedPlaylistProvider
from .mood_service import MoodService, fallback_message

__all__ = [
    # Providers
    "PlaylistProvider",
    "SamplePlaylistProvider",
    "sample_playlist",
    "CachedPlaylistProvider",

    # Error taxonomy
    "SearchError",
    "InvalidQueryError",
    "UnauthorizedError",
    "QuotaExceededError",
    "NoDataError",
    "DecodingError",
    "NetworkError",

    # Infrastructure
    "CacheManager",

    # Orchestration
    "MoodService",
    "fallback_message",
]
