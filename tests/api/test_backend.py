"""
Tests for FastAPI backend endpoints.

The lifespan is not run: each test installs its own MoodService, backed by
the offline sample provider, in place of the global service instance.
"""

from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from moodify.api.backend import app
from moodify.services.mood_service import MoodService
from moodify.services.playlist_provider import SamplePlaylistProvider


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def mood_service():
    """Create a mood service backed by sample songs."""
    service = MoodService(provider=SamplePlaylistProvider())
    with patch("moodify.api.backend.mood_service", service):
        yield service


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_without_service(self, client):
        with patch("moodify.api.backend.mood_service", None):
            response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["mood_service"] == "inactive"

    def test_health_with_service(self, client, mood_service):
        data = client.get("/health").json()

        assert data["components"]["mood_service"] == "active"
        assert data["components"]["provider"] == "sample"


class TestMoodsEndpoint:
    """Test mood listing and playlists."""

    def test_list_moods(self, client):
        moods = client.get("/moods").json()["moods"]

        assert [m["mood"] for m in moods] == ["happy", "sad", "energetic", "chill", "angry", "romantic"]
        assert moods[0]["label"] == "Happy"
        assert moods[0]["query"] == "happy upbeat pop music feel good songs 2024"

    def test_mood_playlist(self, client, mood_service):
        response = client.get("/moods/Sad/playlist")

        assert response.status_code == 200
        data = response.json()
        assert data["mood"] == "sad"
        assert len(data["items"]) == 5
        assert data["used_fallback"] is False

    def test_unknown_mood_returns_404(self, client, mood_service):
        response = client.get("/moods/jazz/playlist")

        assert response.status_code == 404
        data = response.json()
        assert "Unknown mood" in data["error"]
        assert "timestamp" in data
        assert data["path"].endswith("/moods/jazz/playlist")

    def test_service_unavailable(self, client):
        with patch("moodify.api.backend.mood_service", None):
            response = client.get("/moods/happy/playlist")

        assert response.status_code == 503
        assert response.json()["error"] == "Mood service not available"

    def test_shuffle_mood(self, client, mood_service):
        response = client.post("/moods/shuffle")

        assert response.status_code == 200
        assert response.json()["mood"] == mood_service.selected_mood.value


class TestClassifyEndpoint:
    """Test mood classification endpoint."""

    def test_strict_ignores_voice_only_phrase(self, client):
        response = client.post("/classify", json={"text": "peppy"})

        assert response.status_code == 200
        assert response.json() == {
            "mood": None,
            "score": 0,
            "method": "none",
            "matched_phrases": [],
            "scores": {},
        }

    def test_voice_only_phrases_do_not_add_up_under_strict(self, client):
        strict = client.post("/classify", json={"text": "bass beats"}).json()
        lenient = client.post("/classify", json={"text": "bass beats", "preset": "lenient"}).json()

        assert strict["mood"] is None
        assert lenient["mood"] == "energetic"
        assert lenient["score"] == 8

    def test_lenient_accepts_weak_match(self, client):
        data = client.post("/classify", json={"text": "peppy", "preset": "lenient"}).json()

        assert data["mood"] == "happy"
        assert data["score"] == 4
        assert data["method"] == "keyword"

    def test_explicit_minimum_score(self, client):
        data = client.post("/classify", json={"text": "peppy", "minimum_score": 4}).json()
        assert data["mood"] == "happy"

    def test_tie_break(self, client):
        assert client.post("/classify", json={"text": "cheerful cry"}).json()["mood"] == "happy"

    @pytest.mark.parametrize("payload", [
        {"text": "peppy", "preset": "loose"},
        {"text": "peppy", "minimum_score": -1},
        {},
    ])
    def test_invalid_request(self, client, payload):
        response = client.post("/classify", json=payload)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "Invalid request"
        assert data["details"]
        assert data["path"].endswith("/classify")

    def test_request_id_echoed(self, client):
        response = client.post(
            "/classify",
            json={"text": "calm"},
            headers={"X-Request-ID": "req-123"}
        )
        assert response.headers["X-Request-ID"] == "req-123"


class TestSearchEndpoint:
    """Test search endpoint."""

    def test_search_detects_mood(self, client, mood_service):
        data = client.post("/search", json={"query": "gym workout pump up"}).json()

        assert data["mood"] == "energetic"
        assert data["detected_mood"] == "energetic"
        assert data["message"] == "Detected: Energetic mood"

    def test_voice_search(self, client, mood_service):
        data = client.post("/search", json={"query": "peppy", "source": "voice"}).json()

        assert data["mood"] == "happy"
        assert data["message"] == "Voice detected: Happy mood"

    def test_free_text_without_results_keeps_playlist(self, client, mood_service):
        data = client.post("/search", json={"query": "xyz completely unrelated text"}).json()

        assert data["detected_mood"] is None
        assert data["message"] == "Search failed. Showing Happy mood playlist."

    def test_empty_query_rejected(self, client, mood_service):
        response = client.post("/search", json={"query": ""})

        assert response.status_code == 422
        assert set(response.json()) >= {"error", "timestamp", "path"}

    def test_blank_query_rejected(self, client, mood_service):
        response = client.post("/search", json={"query": "   "})

        assert response.status_code == 422
        assert set(response.json()) >= {"error", "timestamp", "path"}
        assert response.json()["error"] == "Search text must not be empty"


class TestErrorHandling:
    """Test the general error handler."""

    def test_unexpected_error_returns_500(self):
        broken_service = Mock()
        broken_service.get_state.side_effect = RuntimeError("boom")

        with patch("moodify.api.backend.mood_service", broken_service), \
                patch("moodify.api.backend.log_error") as mock_log_error:
            client = TestClient(app, raise_server_exceptions=False)
            response = client.get("/state")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        mock_log_error.assert_called_once()
        error, context = mock_log_error.call_args.args
        assert isinstance(error, RuntimeError)
        assert context == {"method": "GET", "path": "/state"}

    def test_state(self, client, mood_service):
        assert client.get("/state").json()["selected_mood"] == "happy"
