"""
Tests for the fixed mood search queries.
"""

import pytest

from moodify.classifier.search_queries import MOOD_SEARCH_QUERIES, mood_for_query, search_query_for
from moodify.models.mood_models import MoodCategory


class TestSearchQueries:
    """Test query lookup in both directions."""

    def test_every_mood_has_a_query(self):
        assert set(MOOD_SEARCH_QUERIES) == set(MoodCategory)

    def test_query_for_mood(self):
        assert search_query_for(MoodCategory.ROMANTIC) == "romantic love songs R&B soul music intimate"

    @pytest.mark.parametrize("mood", list(MoodCategory))
    def test_reverse_lookup(self, mood):
        assert mood_for_query(search_query_for(mood)) == mood
        assert mood_for_query("  " + search_query_for(mood).upper() + " ") == mood

    def test_reverse_lookup_of_free_text(self):
        assert mood_for_query("happy songs") is None
