"""
Playlist Providers

Interface for the collaborator that turns a search string into an ordered
list of media items, the typed error taxonomy it fails with, and an offline
provider backed by a small built-in catalog of well-known songs.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import structlog

from ..classifier.mood_classifier import MoodClassifier
from ..classifier.search_queries import mood_for_query, search_query_for
from ..models.media_models import MediaItem
from ..models.mood_models import MoodCategory

logger = structlog.get_logger(__name__)


class SearchError(Exception):
    """Base class for playlist provider failures."""
    code = "search_error"
    default_message = "Playlist search failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidQueryError(SearchError):
    code = "invalid_query"
    default_message = "Invalid search query"


class UnauthorizedError(SearchError):
    code = "unauthorized"
    default_message = "Unauthorized access"


class QuotaExceededError(SearchError):
    code = "quota_exceeded"
    default_message = "API quota exceeded"


class NoDataError(SearchError):
    code = "no_data"
    default_message = "No data received"


class DecodingError(SearchError):
    code = "decoding_error"
    default_message = "Failed to decode response"


class NetworkError(SearchError):
    code = "network_error"
    default_message = "Network connection error"


class PlaylistProvider(ABC):
    """
    Base class for anything that can search a music catalog.

    Implementations raise a SearchError subclass on failure and never
    return None.
    """

    service_name = "provider"

    @abstractmethod
    async def search(self, query: str) -> List[MediaItem]:
        """
        Search the catalog.

        Args:
            query: Free-text or fixed mood query

        Returns:
            Ordered list of media items

        Raises:
            SearchError: On any provider failure
        """

    async def search_mood(self, mood: MoodCategory) -> List[MediaItem]:
        """Search with the fixed query for ``mood``."""
        return await self.search(search_query_for(mood))

    def get_service_info(self) -> Dict[str, str]:
        return {
            "service_name": self.service_name,
            "provider_type": type(self).__name__,
        }


_SAMPLE_SONGS: Dict[MoodCategory, List[str]] = {
    MoodCategory.HAPPY: [
        "Happy - Pharrell Williams",
        "Can't Stop the Feeling - Justin Timberlake",
        "Good as Hell - Lizzo",
        "Uptown Funk - Bruno Mars",
        "Shake It Off - Taylor Swift",
    ],
    MoodCategory.SAD: [
        "Someone Like You - Adele",
        "Hurt - Johnny Cash",
        "Mad World - Gary Jules",
        "Black - Pearl Jam",
        "Tears in Heaven - Eric Clapton",
    ],
    MoodCategory.ENERGETIC: [
        "Eye of the Tiger - Survivor",
        "Don't Stop Me Now - Queen",
        "Pump It - Black Eyed Peas",
        "Thunder - Imagine Dragons",
        "Stronger - Kanye West",
    ],
    MoodCategory.CHILL: [
        "Weightless - Marconi Union",
        "Clair de Lune - Debussy",
        "Aqueous Transmission - Incubus",
        "Porcelain - Moby",
        "Teardrop - Massive Attack",
    ],
    MoodCategory.ANGRY: [
        "Break Stuff - Limp Bizkit",
        "Chop Suey! - System of a Down",
        "Bodies - Drowning Pool",
        "Killing in the Name - Rage Against the Machine",
        "Indestructible - Disturbed",
    ],
    MoodCategory.ROMANTIC: [
        "All of Me - John Legend",
        "Thinking Out Loud - Ed Sheeran",
        "Perfect - Ed Sheeran",
        "At Last - Etta James",
        "Make You Feel My Love - Adele",
    ],
}


def sample_playlist(mood: MoodCategory) -> List[MediaItem]:
    """Build the built-in sample playlist for a mood."""
    items = []
    for index, entry in enumerate(_SAMPLE_SONGS[mood]):
        title, _, artist = entry.partition(" - ")
        items.append(MediaItem(
            id=f"{mood.value}_{index}",
            title=title,
            artist=artist or "Unknown Artist",
            thumbnail_url="",
            video_url=f"https://www.youtube.com/watch?v=sample{index}",
        ))
    return items


class SamplePlaylistProvider(PlaylistProvider):
    """
    Offline provider serving the built-in sample songs.

    Fixed mood queries resolve to their mood. Any other query is classified
    leniently; text with no detectable mood raises NoDataError.
    """

    service_name = "sample"

    def __init__(self, classifier: Optional[MoodClassifier] = None):
        self.classifier = classifier or MoodClassifier.lenient()
        self.logger = logger.bind(component="SamplePlaylistProvider")

    async def search(self, query: str) -> List[MediaItem]:
        if not query or not query.strip():
            raise InvalidQueryError("Search query must not be empty")

        mood = mood_for_query(query) or self.classifier.classify(query)
        if mood is None:
            self.logger.debug("No sample songs for query", query=query)
            raise NoDataError(f"No sample songs match {query!r}")

        items = sample_playlist(mood)
        self.logger.debug("Serving sample playlist", mood=mood.value, count=len(items))
        return items
