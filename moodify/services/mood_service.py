"""
Mood Service

Caller-side orchestration between the mood classifier and a playlist
provider. The service owns the selected mood and the current playlist, and
serializes operations that change them.

Flow for free text:
1. Classify the text (strict for the search bar, lenient for voice input)
2. A detected mood is selected and its fixed query is fetched
3. Otherwise the raw text is sent to the provider as a free-text search
"""

import asyncio
import random
from typing import Any, Dict, List, Optional

import structlog

from ..classifier.mood_classifier import MoodClassifier
from ..classifier.search_queries import search_query_for
from ..models.media_models import MediaItem, PlaylistResult
from ..models.mood_models import MoodCategory
from .playlist_provider import (
    NoDataError,
    PlaylistProvider,
    QuotaExceededError,
    SamplePlaylistProvider,
    SearchError,
    UnauthorizedError,
)

logger = structlog.get_logger(__name__)


def fallback_message(error: SearchError) -> str:
    """User-facing message shown when sample songs replace a failed fetch."""
    if isinstance(error, UnauthorizedError):
        return "Catalog authorization failed. Using sample songs."
    if isinstance(error, QuotaExceededError):
        return "API quota exceeded. Using sample songs."
    if isinstance(error, NoDataError):
        return "No songs found. Using sample songs."
    return "Network error. Using sample songs."


class MoodService:
    """
    Owns the mood/playlist state and drives the provider.

    Responsibilities:
    - Mood selection and playlist fetching
    - Free-text and voice search with mood detection
    - Degrading to offline sample songs when the provider fails
    - Playlist and mood shuffling
    """

    def __init__(
        self,
        provider: PlaylistProvider,
        classifier: Optional[MoodClassifier] = None,
        voice_classifier: Optional[MoodClassifier] = None,
        fallback_provider: Optional[PlaylistProvider] = None,
        default_mood: MoodCategory = MoodCategory.HAPPY,
        max_items: int = 20
    ):
        """
        Initialize the mood service.

        Args:
            provider: Catalog the playlists are fetched from
            classifier: Classifier for the main search (strict preset if None)
            voice_classifier: Classifier for voice input (lenient preset if None)
            fallback_provider: Offline provider used when ``provider`` fails
            default_mood: Mood selected before any user action
            max_items: Maximum number of items kept per playlist
        """
        self.provider = provider
        self.classifier = classifier or MoodClassifier.strict()
        self.voice_classifier = voice_classifier or MoodClassifier.lenient()
        self.fallback_provider = fallback_provider or SamplePlaylistProvider()
        self.max_items = max_items

        self.selected_mood: MoodCategory = default_mood
        self.current_playlist: List[MediaItem] = []
        self.last_query: Optional[str] = None
        self.detected_mood: Optional[MoodCategory] = None

        self._lock = asyncio.Lock()
        self.logger = logger.bind(component="MoodService", provider=provider.service_name)
        self.logger.info("MoodService initialized", default_mood=default_mood.value, max_items=max_items)

    async def select_mood(self, mood: MoodCategory) -> PlaylistResult:
        """
        Select a mood and fetch its playlist.

        Provider failures are not raised: the mood's sample playlist is shown
        instead and the result carries a message describing the failure.
        """
        async with self._lock:
            self.detected_mood = None
            return await self._select_mood(mood)

    async def search(self, text: str) -> PlaylistResult:
        """
        Main search bar: detect a mood strictly, else search the raw text.

        Raises:
            ValueError: If ``text`` is blank
        """
        self._require_text(text)
        async with self._lock:
            return await self._search(text, self.classifier)

    async def voice_search(self, transcript: str) -> PlaylistResult:
        """
        Voice input: detect a mood leniently, else run the main search.

        Raises:
            ValueError: If ``transcript`` is blank
        """
        self._require_text(transcript)
        async with self._lock:
            mood = self.voice_classifier.classify(transcript)
            if mood is not None:
                self.logger.info("Voice search detected mood", mood=mood.value)
                self.last_query = transcript
                self.detected_mood = mood
                return await self._select_mood(mood, message=f"Voice detected: {mood.label} mood")

            return await self._search(transcript, self.classifier)

    async def shuffle_playlist(self, rng: Optional[random.Random] = None) -> List[MediaItem]:
        """Shuffle the current playlist in place and return a copy of it."""
        async with self._lock:
            (rng or random).shuffle(self.current_playlist)
            self.logger.debug("Shuffled current playlist", count=len(self.current_playlist))
            return list(self.current_playlist)

    async def shuffle_mood(self, rng: Optional[random.Random] = None) -> PlaylistResult:
        """Select a random mood."""
        mood = (rng or random).choice(MoodCategory.ordered())
        self.logger.info("Shuffling to random mood", mood=mood.value)
        return await self.select_mood(mood)

    def get_state(self) -> Dict[str, Any]:
        """Snapshot of the service state for health and debugging endpoints."""
        return {
            "selected_mood": self.selected_mood.value,
            "playlist_size": len(self.current_playlist),
            "last_query": self.last_query,
            "detected_mood": self.detected_mood.value if self.detected_mood else None,
        }

    async def _search(self, text: str, classifier: MoodClassifier) -> PlaylistResult:
        self.last_query = text
        result = classifier.analyze(text)

        if result.category is not None:
            self.logger.info(
                "Detected mood from text",
                mood=result.category.value,
                score=result.score,
                method=result.method.value
            )
            self.detected_mood = result.category
            return await self._select_mood(
                result.category,
                message=f"Detected: {result.category.label} mood"
            )

        self.detected_mood = None
        self.logger.info("No mood detected, running free-text search", query=text)

        try:
            items = await self.provider.search(text)
        except SearchError as e:
            self.logger.warning(
                "Free-text search failed",
                query=text,
                error=str(e),
                error_type=type(e).__name__
            )
            return PlaylistResult(
                mood=self.selected_mood,
                query=text,
                items=list(self.current_playlist),
                message=f"Search failed. Showing {self.selected_mood.label} mood playlist."
            )

        self.current_playlist = items[:self.max_items]
        return PlaylistResult(
            mood=self.selected_mood,
            query=text,
            items=list(self.current_playlist),
            message=f"Found {len(self.current_playlist)} songs for '{text}'"
        )

    async def _select_mood(self, mood: MoodCategory, message: Optional[str] = None) -> PlaylistResult:
        self.selected_mood = mood
        query = search_query_for(mood)
        self.logger.info("Fetching songs for mood", mood=mood.value, query=query)

        used_fallback = False
        try:
            items = await self.provider.search(query)
        except SearchError as e:
            self.logger.warning(
                "Mood playlist fetch failed, using sample songs",
                mood=mood.value,
                error=str(e),
                error_type=type(e).__name__
            )
            items = await self._fallback_items(mood)
            used_fallback = True
            message = fallback_message(e)

        self.current_playlist = items[:self.max_items]
        self.logger.debug("Playlist updated", mood=mood.value, count=len(self.current_playlist))

        return PlaylistResult(
            mood=mood,
            query=query,
            items=list(self.current_playlist),
            detected_mood=self.detected_mood,
            used_fallback=used_fallback,
            message=message
        )

    async def _fallback_items(self, mood: MoodCategory) -> List[MediaItem]:
        try:
            return await self.fallback_provider.search_mood(mood)
        except SearchError as e:
            self.logger.error("Fallback provider failed", mood=mood.value, error=str(e))
            return []

    @staticmethod
    def _require_text(text: str) -> None:
        if not text or not text.strip():
            raise ValueError("Search text must not be empty")
