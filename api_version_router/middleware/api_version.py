"""
API versioning middleware: routes unversioned paths to versioned handlers.
"""
from http import HTTPStatus
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from ..core.errors import InvalidVersionError
from ..core.pipeline import VersioningPipeline
from ..core.registry import VersioningRegistry
from ..core.rewrite import RouteTable, StarletteRouteTable


def invalid_version_response(exc: InvalidVersionError) -> JSONResponse:
    """Build the error response for an unsupported version."""
    try:
        error = HTTPStatus(exc.status_code).phrase
    except ValueError:
        error = "Unknown"

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "statusCode": exc.status_code,
            "error": error,
            "message": exc.message,
        },
    )


class ApiVersionMiddleware(BaseHTTPMiddleware):
    """
    Middleware resolving the requested API version before routing.

    Runs every pipeline of the registry in registration order. A request for
    ``/widgets`` asking for version 2 is dispatched to ``/v2/widgets`` when that
    route exists; otherwise it continues unchanged.
    """

    def __init__(self, app: ASGIApp, registry: VersioningRegistry, route_table: RouteTable | None = None):
        """
        Initialize API version middleware.

        Args:
            app: ASGI application
            registry: Registry holding the configured pipelines
            route_table: Route lookup (default: routes of the application serving the request)
        """
        super().__init__(app)
        self.registry = registry
        self.route_table = route_table
        registry.seal()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request with API version resolution.

        Args:
            request: FastAPI/Starlette request
            call_next: Next middleware/handler

        Returns:
            Response
        """
        route_table = self.route_table or StarletteRouteTable(request.scope["app"].router.routes)

        try:
            self.registry.resolve(request, route_table)
        except InvalidVersionError as e:
            return invalid_version_response(e)

        return await call_next(request)


def add_api_versioning(app: FastAPI, registry: VersioningRegistry, **options: Any) -> VersioningPipeline:
    """
    Register a versioning pipeline and make sure the middleware is installed.

    Args:
        app: Application to version
        registry: Registry shared by every pipeline of the application
        **options: Fields of VersioningOptions

    Returns:
        The registered pipeline

    Raises:
        VersioningConfigError: If the options are rejected
    """
    pipeline = registry.register(**options)

    installed = getattr(app.state, "api_version_registries", None)
    if installed is None:
        installed = app.state.api_version_registries = []
    if not any(existing is registry for existing in installed):
        app.add_middleware(ApiVersionMiddleware, registry=registry)
        installed.append(registry)

    return pipeline
