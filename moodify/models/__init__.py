"""
Models Module

Data models shared by the classifier, the mood service and the API layer.
"""

from .mood_models import (
    MoodCategory,
    MoodDisplay,
    MOOD_DISPLAY,
    KeywordRule,
    ClassificationMethod,
    ClassificationResult,
)
from .media_models import MediaItem, PlaylistResult
from .config_models import MoodifyConfig

__all__ = [
    # Mood detection
    "MoodCategory",
    "MoodDisplay",
    "MOOD_DISPLAY",
    "KeywordRule",
    "ClassificationMethod",
    "ClassificationResult",

    # Playlists
    "MediaItem",
    "PlaylistResult",

    # Configuration
    "MoodifyConfig",
]
