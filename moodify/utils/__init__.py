"""Utility helpers for Moodify."""

from .logging_config import (
    MoodifyLogger,
    setup_logging,
    get_logger,
    log_performance,
    log_api_request,
    log_classification,
    log_error,
    set_request_context,
)

__all__ = [
    "MoodifyLogger",
    "setup_logging",
    "get_logger",
    "log_performance",
    "log_api_request",
    "log_classification",
    "log_error",
    "set_request_context",
]
