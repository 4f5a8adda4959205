"""Middleware package."""
from .api_version import ApiVersionMiddleware, add_api_versioning, invalid_version_response
from .logging import (
    RequestLoggingMiddleware,
    clear_logging_context,
    get_request_id,
)

__all__ = [
    "ApiVersionMiddleware",
    "RequestLoggingMiddleware",
    "add_api_versioning",
    "clear_logging_context",
    "get_request_id",
    "invalid_version_response",
]
