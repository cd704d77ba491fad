"""
FastAPI Backend for Moodify

REST endpoints for mood detection and mood playlists:
- /classify: detect the mood of a phrase
- /moods: list moods, fetch a mood's playlist, shuffle to a random mood
- /search: main search bar and voice search entry points
"""

import time
from contextlib import asynccontextmanager
from typing import Dict, List, Literal, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..classifier.keyword_rules import DEFAULT_RULES
from ..classifier.mood_classifier import LENIENT, PRESETS, STRICT, MoodClassifier
from ..classifier.search_queries import search_query_for
from ..models.config_models import MoodifyConfig
from ..models.media_models import PlaylistResult
from ..models.mood_models import MOOD_DISPLAY, MoodCategory
from ..services.cache_manager import CacheManager, CachedPlaylistProvider
from ..services.mood_service import MoodService
from ..services.playlist_provider import SamplePlaylistProvider
from ..utils.logging_config import log_classification, log_error, setup_logging
from .logging_middleware import LoggingMiddleware, PerformanceLoggingMiddleware

logger = structlog.get_logger(__name__)

# Global service instances
config: Optional[MoodifyConfig] = None
mood_service: Optional[MoodService] = None
cache_manager: Optional[CacheManager] = None
classifiers: Dict[str, MoodClassifier] = {
    name: MoodClassifier.from_preset(name) for name in PRESETS
}


def build_classifiers(app_config: MoodifyConfig) -> Dict[str, MoodClassifier]:
    """Build the preset classifiers with their rule tables and configured score gates."""
    return {
        STRICT.name: MoodClassifier(STRICT.rules, app_config.strict_minimum_score, name=STRICT.name),
        LENIENT.name: MoodClassifier(LENIENT.rules, app_config.lenient_minimum_score, name=LENIENT.name),
    }


def build_mood_service(app_config: MoodifyConfig) -> MoodService:
    """Wire the mood service from configuration."""
    global cache_manager

    provider = SamplePlaylistProvider(classifier=classifiers["lenient"])
    if app_config.cache_enabled:
        cache_manager = CacheManager(
            cache_dir=app_config.cache_directory,
            mood_ttl=app_config.mood_cache_ttl_hours * 3600,
            search_ttl=app_config.search_cache_ttl_hours * 3600
        )
        provider = CachedPlaylistProvider(provider, cache_manager)

    return MoodService(
        provider=provider,
        classifier=classifiers["strict"],
        voice_classifier=classifiers["lenient"],
        default_mood=app_config.default_mood,
        max_items=app_config.max_playlist_items
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    global config, mood_service, cache_manager, classifiers

    config = MoodifyConfig.from_env()
    setup_logging(
        log_dir=config.log_dir,
        log_level=config.log_level,
        enable_console=config.enable_console_logging
    )

    logger.info("Initializing Moodify mood service...")
    classifiers = build_classifiers(config)
    mood_service = build_mood_service(config)
    await mood_service.select_mood(config.default_mood)
    logger.info("Moodify mood service initialized", default_mood=config.default_mood.value)

    yield

    logger.info("Shutting down Moodify mood service...")
    if cache_manager:
        cache_manager.close()
    mood_service = None
    cache_manager = None


app = FastAPI(
    title="Moodify API",
    description="Mood detection and mood-matched playlists",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
app.add_middleware(PerformanceLoggingMiddleware, slow_request_threshold=2.0)


# Request/Response Models
class ClassifyRequest(BaseModel):
    """Request model for mood classification."""
    text: str = Field(..., description="Spoken or typed phrase")
    preset: Literal["strict", "lenient"] = Field(
        "strict",
        description="Named preset: strict for the search bar, lenient for voice input"
    )
    minimum_score: Optional[int] = Field(
        None,
        ge=0,
        description="Explicit score gate; overrides the preset when set"
    )


class ClassifyResponse(BaseModel):
    """Mood classification response model."""
    mood: Optional[str]
    score: int
    method: str
    matched_phrases: List[str]
    scores: Dict[str, int]


class SearchRequest(BaseModel):
    """Request model for free-text and voice search."""
    query: str = Field(..., min_length=1, description="User search text or voice transcript")
    source: Literal["search", "voice"] = Field(
        "search",
        description="Entry point the text came from"
    )


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: float
    version: str
    components: Dict[str, str]


def _require_service() -> MoodService:
    if not mood_service:
        raise HTTPException(status_code=503, detail="Mood service not available")
    return mood_service


# API Endpoints
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=time.time(),
        version=__version__,
        components={
            "mood_service": "active" if mood_service else "inactive",
            "provider": mood_service.provider.service_name if mood_service else "none",
            "cache": "enabled" if cache_manager else "disabled",
        }
    )


@app.get("/moods")
async def list_moods():
    """List every mood with its display metadata and catalog query."""
    return {
        "moods": [
            {
                "mood": mood.value,
                "label": MOOD_DISPLAY[mood].label,
                "description": MOOD_DISPLAY[mood].description,
                "emoji": MOOD_DISPLAY[mood].emoji,
                "query": search_query_for(mood),
            }
            for mood in MoodCategory.ordered()
        ]
    }


@app.post("/classify", response_model=ClassifyResponse)
async def classify_text(request: ClassifyRequest):
    """Detect the mood expressed by a phrase."""
    if request.minimum_score is not None:
        classifier = MoodClassifier(DEFAULT_RULES, request.minimum_score, name="custom")
    else:
        classifier = classifiers[request.preset]

    result = classifier.analyze(request.text)
    log_classification(
        preset=classifier.name,
        mood=result.category.value if result.category else None,
        score=result.score,
        method=result.method.value,
        text_length=len(request.text)
    )
    return ClassifyResponse(**result.to_dict())


@app.get("/moods/{mood}/playlist", response_model=PlaylistResult)
async def get_mood_playlist(mood: str):
    """Select a mood and return its playlist."""
    service = _require_service()
    try:
        category = MoodCategory.from_name(mood)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown mood: {mood}")

    return await service.select_mood(category)


@app.post("/moods/shuffle", response_model=PlaylistResult)
async def shuffle_mood():
    """Switch to a random mood."""
    return await _require_service().shuffle_mood()


@app.post("/search", response_model=PlaylistResult)
async def search(request: SearchRequest):
    """
    Search by free text.

    Text that expresses a mood switches to that mood's playlist; anything
    else is sent to the catalog as a plain search.
    """
    service = _require_service()
    logger.info("Processing search request", source=request.source, query=request.query)

    if request.source == "voice":
        return await service.voice_search(request.query)
    return await service.search(request.query)


@app.get("/state")
async def get_state():
    """Current mood service state."""
    return _require_service().get_state()


# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom HTTP exception handler."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Request body or parameters failed schema validation."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid request",
            "details": jsonable_encoder(exc.errors()),
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )


@app.exception_handler(ValueError)
async def value_error_handler(request, exc):
    """Invalid input that passed schema validation."""
    return JSONResponse(
        status_code=422,
        content={
            "error": str(exc),
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """General exception handler for unexpected errors."""
    logger.error("Unexpected error", error=str(exc), error_type=type(exc).__name__)
    log_error(exc, {"method": request.method, "path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )
