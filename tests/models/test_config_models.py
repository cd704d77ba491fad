"""
Tests for MoodifyConfig environment loading.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from moodify.models.config_models import MoodifyConfig
from moodify.models.mood_models import MoodCategory


class TestMoodifyConfig:
    """Test configuration defaults and overrides."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = MoodifyConfig.from_env()

        assert config.log_level == "INFO"
        assert config.cache_enabled is True
        assert config.default_mood == MoodCategory.HAPPY
        assert config.strict_minimum_score == 5
        assert config.lenient_minimum_score == 0
        assert config.max_playlist_items == 20

    def test_environment_overrides(self):
        env = {
            "LOG_LEVEL": "debug",
            "CACHE_ENABLED": "false",
            "DEFAULT_MOOD": "Chill",
            "MAX_PLAYLIST_ITEMS": "10",
            "STRICT_MINIMUM_SCORE": "7",
            "BACKEND_PORT": "9000",
        }
        with patch.dict(os.environ, env, clear=True):
            config = MoodifyConfig.from_env()

        assert config.log_level == "DEBUG"
        assert config.cache_enabled is False
        assert config.default_mood == MoodCategory.CHILL
        assert config.max_playlist_items == 10
        assert config.strict_minimum_score == 7
        assert config.port == 9000

    @pytest.mark.parametrize("env", [
        {"DEFAULT_MOOD": "jazz"},
        {"LOG_LEVEL": "LOUD"},
        {"MAX_PLAYLIST_ITEMS": "0"},
        {"STRICT_MINIMUM_SCORE": "-1"},
    ])
    def test_invalid_values_rejected(self, env):
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValidationError):
                MoodifyConfig.from_env()
