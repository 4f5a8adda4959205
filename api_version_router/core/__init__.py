"""Version resolution and request rewrite pipeline."""
from .context import ApiVersionInfo, RequestVersionContext, get_request_context, get_resolution
from .errors import DuplicateDescriptorError, InvalidVersionError, VersioningConfigError
from .extractors import (
    MALFORMED_VERSION,
    CallbackVersionExtractor,
    MediaTypeVersionExtractor,
    VersionExtractor,
    build_extractor,
)
from .media_type import MediaType
from .options import VersioningOptions
from .pipeline import VersioningPipeline
from .registry import VersioningRegistry
from .rewrite import RouteTable, StarletteRouteTable, rewrite_request, versioned_path
from .validator import validate_version

__all__ = [
    "ApiVersionInfo",
    "CallbackVersionExtractor",
    "DuplicateDescriptorError",
    "InvalidVersionError",
    "MALFORMED_VERSION",
    "MediaType",
    "MediaTypeVersionExtractor",
    "RequestVersionContext",
    "RouteTable",
    "StarletteRouteTable",
    "VersionExtractor",
    "VersioningConfigError",
    "VersioningOptions",
    "VersioningPipeline",
    "VersioningRegistry",
    "build_extractor",
    "get_request_context",
    "get_resolution",
    "rewrite_request",
    "validate_version",
    "versioned_path",
]
