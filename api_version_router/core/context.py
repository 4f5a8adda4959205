"""
Per-request versioning state stored on ``request.state``.
"""
from dataclasses import dataclass

from starlette.requests import Request

CONTEXT_STATE_KEY = "api_versioning"
RESOLUTION_STATE_KEY = "api_version"
DEFAULT_RESOLUTION_DESCRIPTOR = "default"


@dataclass(frozen=True)
class ApiVersionInfo:
    """Resolved version published to route handlers."""

    api_version: int
    use_default: bool
    count: int
    descriptor: str


@dataclass
class RequestVersionContext:
    """Coordination state shared by all pipelines handling one request."""

    count: int = 0
    resolution: ApiVersionInfo | None = None

    @property
    def is_resolved(self) -> bool:
        """True once a pipeline rewrote the request for an explicitly requested version."""
        return self.resolution is not None and not self.resolution.use_default


def get_request_context(request: Request) -> RequestVersionContext:
    """Return the request's versioning context, creating it on first access."""
    context = getattr(request.state, CONTEXT_STATE_KEY, None)
    if context is None:
        context = RequestVersionContext()
        setattr(request.state, CONTEXT_STATE_KEY, context)
    return context


def publish_resolution(request: Request, context: RequestVersionContext, resolution: ApiVersionInfo) -> None:
    """Record the resolution for later pipelines and expose it to handlers."""
    context.resolution = resolution
    setattr(request.state, RESOLUTION_STATE_KEY, resolution)


def get_resolution(request: Request) -> ApiVersionInfo | None:
    """Resolution published for this request, if any."""
    return getattr(request.state, RESOLUTION_STATE_KEY, None)
