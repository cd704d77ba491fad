from typing import List, Optional
from pydantic import BaseModel, Field

from .mood_models import MoodCategory


class MediaItem(BaseModel):
    """
    A playable item returned by a playlist provider.

    Two items are the same item when their ids match, regardless of
    favorite state or metadata differences between providers.
    """
    id: str = Field(..., description="Provider-specific identifier of the item.")
    title: str = Field(..., description="Title of the song or video.")
    artist: str = Field(..., description="Artist or channel name.")
    thumbnail_url: str = Field("", description="URL of a thumbnail image.")
    video_url: str = Field("", description="URL the item can be played from.")
    duration: str = Field("3:45", description="Human readable duration.")
    is_favorite: bool = Field(False, description="Whether the user marked the item as a favorite.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class PlaylistResult(BaseModel):
    """What the mood service hands back to its caller after a fetch."""
    mood: MoodCategory = Field(..., description="Mood the playlist is shown under.")
    query: str = Field(..., description="Query that was sent to the provider.")
    items: List[MediaItem] = Field(default_factory=list)
    detected_mood: Optional[MoodCategory] = Field(
        None,
        description="Mood detected from free text, if the fetch came from a search."
    )
    used_fallback: bool = Field(
        False,
        description="True when the provider failed and offline sample songs are shown."
    )
    message: Optional[str] = Field(None, description="Short feedback for the user.")
