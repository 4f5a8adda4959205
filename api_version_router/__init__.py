"""
Resolve the requested API version per request and route it to versioned handlers.
"""
from .core import (
    ApiVersionInfo,
    DuplicateDescriptorError,
    InvalidVersionError,
    VersioningConfigError,
    VersioningOptions,
    VersioningPipeline,
    VersioningRegistry,
)
from .dependencies import get_api_version, require_api_version
from .middleware import ApiVersionMiddleware, add_api_versioning

__version__ = "1.0.0"

__all__ = [
    "ApiVersionInfo",
    "ApiVersionMiddleware",
    "DuplicateDescriptorError",
    "InvalidVersionError",
    "VersioningConfigError",
    "VersioningOptions",
    "VersioningPipeline",
    "VersioningRegistry",
    "add_api_versioning",
    "get_api_version",
    "require_api_version",
]
