"""
MoodClassifier Component

Detects which mood, if any, a spoken or typed phrase expresses.

Scoring works in two stages:
1. Weighted keyword scoring: every rule whose phrase is a substring of the
   lowercased text adds its weight to its mood. The best mood wins if its
   score clears the configured minimum.
2. Literal fallback: otherwise the first mood (declaration order) whose own
   name appears in the text wins.

Classification never fails; "no mood" is returned as None.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

import structlog

from ..models.mood_models import (
    ClassificationMethod,
    ClassificationResult,
    KeywordRule,
    MoodCategory,
)
from .keyword_rules import DEFAULT_RULES, WEIGHTED_RULES

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ClassifierPreset:
    """Named rule table and score gate used by one call path."""
    name: str
    minimum_score: int
    rules: Tuple[KeywordRule, ...] = DEFAULT_RULES


# Main search bar: only confident keyword matches switch the mood
STRICT = ClassifierPreset("strict", 5, WEIGHTED_RULES)
# Voice search tab: any keyword match is accepted, voice phrases included
LENIENT = ClassifierPreset("lenient", 0, DEFAULT_RULES)

PRESETS: Dict[str, ClassifierPreset] = {
    STRICT.name: STRICT,
    LENIENT.name: LENIENT,
}


class MoodClassifier:
    """
    Weighted keyword mood classifier with literal fallback.

    Instances hold only immutable configuration and are safe to share
    between callers.
    """

    def __init__(
        self,
        rules: Iterable[KeywordRule] = DEFAULT_RULES,
        minimum_score: int = 0,
        name: str = "custom"
    ):
        """
        Initialize the classifier.

        Args:
            rules: Keyword rules to score with
            minimum_score: Lowest keyword score that is accepted without
                falling back to literal matching
            name: Preset name, used in log output
        """
        if minimum_score < 0:
            raise ValueError(f"minimum_score must be >= 0, got {minimum_score}")

        self.rules: Tuple[KeywordRule, ...] = tuple(rules)
        self.minimum_score = minimum_score
        self.name = name
        self.logger = logger.bind(
            component="MoodClassifier",
            preset=name,
            minimum_score=minimum_score
        )

    @classmethod
    def from_preset(
        cls,
        preset: str,
        rules: Optional[Iterable[KeywordRule]] = None
    ) -> "MoodClassifier":
        """
        Build a classifier for a named preset.

        Args:
            preset: Preset name, "strict" or "lenient"
            rules: Rule table to score with instead of the preset's own

        Raises:
            ValueError: If the preset name is unknown
        """
        try:
            config = PRESETS[preset.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Unknown classifier preset {preset!r}, expected one of {sorted(PRESETS)}"
            ) from None
        return cls(
            rules=config.rules if rules is None else rules,
            minimum_score=config.minimum_score,
            name=config.name
        )

    @classmethod
    def strict(cls, rules: Optional[Iterable[KeywordRule]] = None) -> "MoodClassifier":
        return cls.from_preset(STRICT.name, rules)

    @classmethod
    def lenient(cls, rules: Optional[Iterable[KeywordRule]] = None) -> "MoodClassifier":
        return cls.from_preset(LENIENT.name, rules)

    def classify(self, text: str) -> Optional[MoodCategory]:
        """Return the mood expressed by ``text``, or None."""
        return self.analyze(text).category

    def analyze(self, text: str) -> ClassificationResult:
        """
        Classify ``text`` and report how the decision was made.

        Args:
            text: Free-form user input, any length, possibly empty

        Returns:
            ClassificationResult with the winning mood (or None), its score,
            the method used and the per-mood scores
        """
        normalized = (text or "").lower()
        scores, matched = self.score(normalized)

        best = self._best_category(scores)
        if best is not None:
            best_score = scores[best]
            if best_score >= self.minimum_score:
                self.logger.debug(
                    "Best mood match",
                    mood=best.value,
                    score=best_score,
                    matched_phrases=matched
                )
                return ClassificationResult(
                    category=best,
                    score=best_score,
                    method=ClassificationMethod.KEYWORD,
                    scores=scores,
                    matched_phrases=tuple(matched)
                )
            self.logger.debug(
                "Best mood below minimum score",
                mood=best.value,
                score=best_score
            )

        for mood in MoodCategory.ordered():
            if mood.value in normalized:
                self.logger.debug("Direct mood match", mood=mood.value)
                return ClassificationResult(
                    category=mood,
                    score=scores.get(mood, 0),
                    method=ClassificationMethod.LITERAL,
                    scores=scores,
                    matched_phrases=tuple(matched)
                )

        self.logger.debug("No mood detected", text_length=len(normalized))
        return ClassificationResult(
            category=None,
            scores=scores,
            matched_phrases=tuple(matched)
        )

    def score(self, normalized_text: str) -> Tuple[Dict[MoodCategory, int], List[str]]:
        """
        Accumulate keyword weights per mood.

        Args:
            normalized_text: Lowercased input text

        Returns:
            Tuple of (scores for moods with at least one match, matched phrases)
        """
        scores: Dict[MoodCategory, int] = {}
        matched: List[str] = []

        for rule in self.rules:
            if rule.matches(normalized_text):
                scores[rule.category] = scores.get(rule.category, 0) + rule.weight
                matched.append(rule.phrase)

        return scores, matched

    @staticmethod
    def _best_category(scores: Dict[MoodCategory, int]) -> Optional[MoodCategory]:
        """Highest nonzero score; ties go to the earliest declared mood."""
        best: Optional[MoodCategory] = None
        best_score = 0
        for mood in MoodCategory.ordered():
            value = scores.get(mood, 0)
            if value > best_score:
                best, best_score = mood, value
        return best


@lru_cache(maxsize=8)
def _default_classifier(minimum_score: int) -> MoodClassifier:
    return MoodClassifier(DEFAULT_RULES, minimum_score=minimum_score, name=f"min{minimum_score}")


def classify(text: str, minimum_score: int = 0) -> Optional[MoodCategory]:
    """
    Classify text against the default rule table.

    Args:
        text: Free-form user input
        minimum_score: Score gate; 5 for the main search, 0 for voice search

    Returns:
        Detected mood, or None
    """
    return _default_classifier(minimum_score).classify(text)
