"""
Mood Models

Core value types for mood detection: the closed set of mood categories,
keyword scoring rules and the result of a single classification.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class MoodCategory(Enum):
    """The six moods a playlist can be built for, in fixed declaration order."""
    HAPPY = "happy"
    SAD = "sad"
    ENERGETIC = "energetic"
    CHILL = "chill"
    ANGRY = "angry"
    ROMANTIC = "romantic"

    @classmethod
    def ordered(cls) -> Tuple["MoodCategory", ...]:
        """Return all moods in declaration order (the tie-break order)."""
        return tuple(cls)

    @classmethod
    def from_name(cls, name: str) -> "MoodCategory":
        """
        Look up a mood by name, case-insensitively.

        Raises:
            ValueError: If the name is not one of the six moods
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown mood: {name!r}") from None

    @property
    def label(self) -> str:
        return MOOD_DISPLAY[self].label


class ClassificationMethod(Enum):
    """How a classification result was reached."""
    KEYWORD = "keyword"
    LITERAL = "literal"
    NONE = "none"


@dataclass(frozen=True)
class MoodDisplay:
    """Presentation metadata for a mood. Not used by the classifier."""
    label: str
    description: str
    emoji: str


MOOD_DISPLAY: Dict[MoodCategory, MoodDisplay] = {
    MoodCategory.HAPPY: MoodDisplay("Happy", "Upbeat and joyful music", "😊"),
    MoodCategory.SAD: MoodDisplay("Sad", "Emotional and melancholic songs", "😢"),
    MoodCategory.ENERGETIC: MoodDisplay("Energetic", "High-energy workout music", "⚡"),
    MoodCategory.CHILL: MoodDisplay("Chill", "Relaxing and calm vibes", "😌"),
    MoodCategory.ANGRY: MoodDisplay("Angry", "Intense and aggressive beats", "😤"),
    MoodCategory.ROMANTIC: MoodDisplay("Romantic", "Love songs and romantic ballads", "💕"),
}


@dataclass(frozen=True)
class KeywordRule:
    """
    A weighted phrase that votes for one mood.

    The phrase is stored lowercased and matched as a plain substring of the
    lowercased input, so multi-word phrases like "feel good" are allowed.
    """
    category: MoodCategory
    phrase: str
    weight: int

    def __post_init__(self):
        if not self.phrase:
            raise ValueError("Keyword phrase must not be empty")
        if self.weight <= 0:
            raise ValueError(
                f"Keyword weight must be positive, got {self.weight} for {self.phrase!r}"
            )
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "phrase", self.phrase.lower())

    def matches(self, normalized_text: str) -> bool:
        return self.phrase in normalized_text


@dataclass(frozen=True)
class ClassificationResult:
    """
    Outcome of classifying one piece of text.

    ``score`` is the winning keyword score and is only meant for logging
    and diagnostics; a literal fallback match reports the score the mood
    reached during keyword scoring (possibly 0).
    """
    category: Optional[MoodCategory]
    score: int = 0
    method: ClassificationMethod = ClassificationMethod.NONE
    scores: Dict[MoodCategory, int] = field(default_factory=dict)
    matched_phrases: Tuple[str, ...] = ()

    @property
    def detected(self) -> bool:
        return self.category is not None

    def to_dict(self) -> Dict[str, object]:
        """Serialize for logging and API responses."""
        return {
            "mood": self.category.value if self.category else None,
            "score": self.score,
            "method": self.method.value,
            "matched_phrases": list(self.matched_phrases),
            "scores": {mood.value: value for mood, value in self.scores.items()},
        }
