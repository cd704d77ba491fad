"""
FastAPI Logging Middleware for Moodify

Logs every API request and response with:
- Request IDs for tracing (echoed in the X-Request-ID header)
- Request/response timing
- Status codes and error tracking
- Slow request warnings
"""

import time
import uuid
from typing import Callable, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..utils.logging_config import get_logger, log_api_request, log_performance, set_request_context


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all API requests and responses.

    Provides:
    - Request/response timing
    - Status code tracking
    - Error logging
    - Request ID generation for tracing
    """

    def __init__(self, app, exclude_paths: Optional[List[str]] = None):
        """
        Initialize logging middleware.

        Args:
            app: FastAPI application
            exclude_paths: List of paths to exclude from logging
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or ["/health", "/docs", "/openapi.json"]

    @property
    def logger(self):
        # resolved per request so setup_logging() in the lifespan takes effect
        return get_logger("api.middleware")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and response with logging."""
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_request_context(request_id=request_id, user_id=self._extract_user_id(request))

        start_time = time.time()
        self.logger.info(
            "api_request_start",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request)
        )

        try:
            response = await call_next(request)
        except Exception as e:
            self.logger.error(
                "api_request_error",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                error_type=type(e).__name__,
                error_message=str(e),
                duration_seconds=round(time.time() - start_time, 4)
            )
            raise

        duration = time.time() - start_time
        self.logger.info(
            "api_request_complete",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_seconds=round(duration, 4)
        )
        log_api_request(
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            duration=duration,
            request_id=request_id
        )

        response.headers["X-Request-ID"] = request_id
        return response

    def _extract_user_id(self, request: Request) -> str:
        """Extract user ID from request headers or query params."""
        user_id = (
            request.headers.get("X-User-ID") or
            request.query_params.get("user_id")
        )
        return user_id or "anonymous"

    def _get_client_ip(self, request: Request) -> str:
        """Get client IP address, honoring proxy headers."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"


class PerformanceLoggingMiddleware(BaseHTTPMiddleware):
    """Warns about slow requests and records timings for key endpoints."""

    tracked_prefixes = ("/classify", "/search", "/moods")

    def __init__(self, app, slow_request_threshold: float = 2.0):
        """
        Initialize performance logging middleware.

        Args:
            app: FastAPI application
            slow_request_threshold: Time in seconds to consider a request slow
        """
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with performance monitoring."""
        logger = get_logger("performance")
        start_time = time.time()

        response = await call_next(request)
        duration = time.time() - start_time

        if duration > self.slow_request_threshold:
            logger.warning(
                "slow_request",
                method=request.method,
                path=request.url.path,
                duration_seconds=round(duration, 4),
                threshold_seconds=self.slow_request_threshold
            )

        if request.url.path.startswith(self.tracked_prefixes):
            log_performance(
                f"{request.method} {request.url.path}",
                round(duration, 4),
                status_code=response.status_code
            )

        return response
