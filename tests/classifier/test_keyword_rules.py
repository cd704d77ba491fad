"""
Tests for the keyword rule tables and rule merging.
"""

import pytest

from moodify.classifier.keyword_rules import (
    DEFAULT_RULES,
    VOICE_ONLY_WEIGHT,
    VOICE_RULES,
    WEIGHTED_RULES,
    build_rules,
    merge_rules,
)
from moodify.models.mood_models import KeywordRule, MoodCategory


def _weights(rules):
    return {(rule.category, rule.phrase): rule.weight for rule in rules}


class TestRuleTables:
    """Test the shipped rule tables."""

    def test_weighted_rules_use_five_to_ten(self):
        assert all(5 <= rule.weight <= 10 for rule in WEIGHTED_RULES)

    def test_voice_rules_are_unweighted(self):
        assert all(rule.weight == 1 for rule in VOICE_RULES)

    def test_every_mood_has_its_own_name_as_a_rule(self):
        weights = _weights(WEIGHTED_RULES)
        for mood in MoodCategory.ordered():
            assert weights[(mood, mood.value)] == 10

    def test_default_rules_keep_weighted_entries(self):
        weights = _weights(DEFAULT_RULES)
        for key, weight in _weights(WEIGHTED_RULES).items():
            assert weights[key] == weight

    def test_default_rules_cover_voice_phrases(self):
        default_keys = set(_weights(DEFAULT_RULES))
        assert set(_weights(VOICE_RULES)) <= default_keys

    @pytest.mark.parametrize("mood,phrase", [
        (MoodCategory.HAPPY, "peppy"),
        (MoodCategory.SAD, "somber"),
        (MoodCategory.ENERGETIC, "bass"),
        (MoodCategory.CHILL, "jazz"),
        (MoodCategory.ANGRY, "rock"),
        (MoodCategory.ROMANTIC, "sexy"),
    ])
    def test_voice_only_phrases_use_supplement_weight(self, mood, phrase):
        assert _weights(DEFAULT_RULES)[(mood, phrase)] == VOICE_ONLY_WEIGHT

    def test_voice_only_weight_sits_below_strict_gate(self):
        assert VOICE_ONLY_WEIGHT == 4

    def test_rules_grouped_in_declaration_order(self):
        order = [rule.category for rule in DEFAULT_RULES]
        positions = [MoodCategory.ordered().index(category) for category in order]
        assert positions == sorted(positions)


class TestBuildAndMerge:
    """Test table helpers."""

    def test_build_rules_skips_missing_moods(self):
        rules = build_rules({MoodCategory.CHILL: [("Rainy Day", 5)]})

        assert len(rules) == 1
        assert rules[0].category == MoodCategory.CHILL
        assert rules[0].phrase == "rainy day"

    def test_merge_prefers_primary_weight(self):
        primary = (KeywordRule(MoodCategory.SAD, "rain", 7),)
        secondary = (
            KeywordRule(MoodCategory.SAD, "rain", 1),
            KeywordRule(MoodCategory.SAD, "drizzle", 1),
            KeywordRule(MoodCategory.CHILL, "rain", 1),
        )

        merged = _weights(merge_rules(primary, secondary, supplement_weight=3))

        assert merged == {
            (MoodCategory.SAD, "rain"): 7,
            (MoodCategory.SAD, "drizzle"): 3,
            (MoodCategory.CHILL, "rain"): 3,
        }

    def test_merge_ignores_secondary_duplicates(self):
        secondary = (
            KeywordRule(MoodCategory.HAPPY, "sunshine", 1),
            KeywordRule(MoodCategory.HAPPY, "sunshine", 1),
        )
        assert len(merge_rules((), secondary)) == 1


class TestKeywordRule:
    """Test KeywordRule validation."""

    def test_phrase_is_lowercased(self):
        rule = KeywordRule(MoodCategory.HAPPY, "Feel Good", 9)
        assert rule.phrase == "feel good"
        assert rule.matches("some feel good music")

    def test_empty_phrase_rejected(self):
        with pytest.raises(ValueError):
            KeywordRule(MoodCategory.HAPPY, "", 5)

    @pytest.mark.parametrize("weight", [0, -3])
    def test_non_positive_weight_rejected(self, weight):
        with pytest.raises(ValueError):
            KeywordRule(MoodCategory.HAPPY, "sunny", weight)
