"""
Structured logging middleware with request ID generation.
"""
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..core.context import get_resolution
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests with structured logging."""

    def __init__(self, app: ASGIApp, exclude_paths: list[str] | None = None):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            exclude_paths: List of paths to exclude from logging (e.g., health checks)
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or ["/healthz", "/docs", "/openapi.json", "/redoc"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and log details.

        Args:
            request: FastAPI/Starlette request
            call_next: Next middleware/handler

        Returns:
            Response
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        # Captured before dispatch, versioning may rewrite the path
        requested_path = request.url.path

        start_time = time.time()
        logger.info(
            "request_started",
            method=request.method,
            path=requested_path,
            query_params=dict(request.query_params),
            client_host=request.client.host if request.client else None,
            accept=request.headers.get("accept"),
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                "request_failed",
                method=request.method,
                path=requested_path,
                duration_ms=round(duration * 1000, 2),
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        resolution = get_resolution(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=requested_path,
            routed_path=request.scope["path"],
            api_version=resolution.api_version if resolution else None,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        response.headers["X-Request-ID"] = request_id
        return response


def get_request_id(request: Request) -> str:
    """Get request ID from request state."""
    return getattr(request.state, "request_id", "unknown")


def clear_logging_context() -> None:
    """Clear logging context variables."""
    structlog.contextvars.clear_contextvars()
