"""
FastAPI dependencies exposing the resolved API version to route handlers.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .core.context import ApiVersionInfo, get_resolution


def get_api_version(request: Request) -> ApiVersionInfo | None:
    """
    Dependency returning the version the request was routed with.

    Usage:
        @app.get("/v2/widgets")
        async def list_widgets(version: ApiVersionDep):
            ...

    Returns None when no pipeline rewrote the request.
    """
    return get_resolution(request)


def require_api_version(request: Request) -> ApiVersionInfo:
    """Dependency for handlers that must only be reached through versioning."""
    resolution = get_resolution(request)
    if resolution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not Found",
        )
    return resolution


ApiVersionDep = Annotated[ApiVersionInfo | None, Depends(get_api_version)]
RequiredApiVersionDep = Annotated[ApiVersionInfo, Depends(require_api_version)]
