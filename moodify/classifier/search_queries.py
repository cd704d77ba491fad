"""Fixed catalog search queries, one per mood."""

from typing import Dict, Optional

from ..models.mood_models import MoodCategory

MOOD_SEARCH_QUERIES: Dict[MoodCategory, str] = {
    MoodCategory.HAPPY: "happy upbeat pop music feel good songs 2024",
    MoodCategory.SAD: "sad emotional ballad music heartbreak songs",
    MoodCategory.ENERGETIC: "energetic workout pump up music high energy 2024",
    MoodCategory.CHILL: "chill lo-fi relaxing music ambient calm vibes",
    MoodCategory.ANGRY: "rock metal aggressive music angry songs heavy",
    MoodCategory.ROMANTIC: "romantic love songs R&B soul music intimate",
}


def search_query_for(mood: MoodCategory) -> str:
    """Fixed catalog search string for a mood."""
    return MOOD_SEARCH_QUERIES[mood]


def mood_for_query(query: str) -> Optional[MoodCategory]:
    """Reverse lookup: the mood whose fixed query this is, or None."""
    normalized = query.strip().lower()
    for mood, mood_query in MOOD_SEARCH_QUERIES.items():
        if mood_query.lower() == normalized:
            return mood
    return None
