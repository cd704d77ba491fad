"""
Classifier Package

Mood detection from free text:
- MoodClassifier: weighted keyword scoring with literal fallback
- keyword_rules: the phrase tables the classifier scores with
- search_queries: fixed catalog query per mood
"""

from .keyword_rules import (
    DEFAULT_RULES,
    VOICE_RULES,
    WEIGHTED_RULES,
    VOICE_ONLY_WEIGHT,
    build_rules,
    merge_rules,
)
from .mood_classifier import (
    MoodClassifier,
    ClassifierPreset,
    STRICT,
    LENIENT,
    PRESETS,
    classify,
)
from .search_queries import MOOD_SEARCH_QUERIES, search_query_for, mood_for_query

__all__ = [
    'MoodClassifier',
    'ClassifierPreset',
    'STRICT',
    'LENIENT',
    'PRESETS',
    'classify',
    'DEFAULT_RULES',
    'VOICE_RULES',
    'WEIGHTED_RULES',
    'VOICE_ONLY_WEIGHT',
    'build_rules',
    'merge_rules',
    'MOOD_SEARCH_QUERIES',
    'search_query_for',
    'mood_for_query',
]
