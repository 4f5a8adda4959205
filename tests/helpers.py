"""
Shared request builders, extractors and routes for tests.
"""
from typing import Any

from fastapi import APIRouter, FastAPI, Request

from api_version_router.dependencies import ApiVersionDep

VENDOR = "mysuperapi"

# TestClient sends "Accept: */*" by default, which is not a vendor media type
NO_ACCEPT = {"accept": ""}


def make_request(
    path: str = "/",
    headers: dict[str, str] | None = None,
    query_string: bytes = b"",
    method: str = "GET",
) -> Request:
    """Build a bare Starlette request for unit tests."""
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": query_string,
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    return Request(scope)


def accept(version: int | str, vendor: str = VENDOR) -> dict[str, str]:
    """Accept header asking for a vendor media type version."""
    return {"Accept": f"application/vnd.{vendor}.v{version}+json"}


def header_version(request: Request, options: Any) -> int | None:
    """Custom extractor reading the 'api-version' header."""
    value = request.headers.get("api-version")
    if not value:
        return None
    try:
        return int(value, 10)
    except ValueError:
        return -1


def query_version(request: Request, options: Any) -> int | None:
    """Custom extractor reading the 'version' query parameter."""
    value = request.query_params.get("version")
    return int(value, 10) if value else None


def add_basic_routes(app: FastAPI) -> None:
    """Unversioned route plus /v1 and /v2 variants of /versioned."""

    @app.get("/unversioned")
    async def unversioned():
        return {"version": None, "data": "unversioned"}

    @app.get("/v1/versioned")
    async def versioned_v1(version: ApiVersionDep):
        return {"version": 1, "resolved": version.api_version if version else None, "data": "versioned"}

    @app.get("/v2/versioned")
    async def versioned_v2(version: ApiVersionDep):
        return {"version": 2, "resolved": version.api_version if version else None, "data": "versioned"}

    @app.get("/v1/versionedWithParams")
    async def versioned_with_params(request: Request):
        return {"params": dict(request.query_params)}


def add_path_param_routes(app: FastAPI) -> None:
    """Catch-all, single, multi segment and optional path parameter routes."""

    @app.get("/unversioned/withPathParam/{unversioned_path_param}")
    async def unversioned_with_param(unversioned_path_param: str):
        return {"version": None, "data": unversioned_path_param}

    @app.get("/unversioned/{catch_all:path}")
    async def unversioned_catch_all(catch_all: str):
        return {"version": None, "data": "unversionedCatchAll"}

    @app.get("/v1/versioned/withPathParam/{versioned_path_param}")
    async def versioned_with_param(versioned_path_param: str, version: ApiVersionDep):
        return {"version": version.api_version, "data": versioned_path_param}

    @app.get("/v2/versioned/multiSegment/{first}/{second}")
    async def versioned_multi_segment(first: str, second: str, version: ApiVersionDep):
        return {"version": version.api_version, "data": f"{first}/{second}"}

    @app.get("/v2/versioned/optionalPathParam/{optional:path}")
    async def versioned_optional(optional: str, version: ApiVersionDep):
        return {"version": version.api_version, "data": optional}

    @app.get("/v2/versioned/{catch_all:path}")
    async def versioned_catch_all(catch_all: str, version: ApiVersionDep):
        return {"version": version.api_version, "data": "versionedCatchAll"}


def add_router_routes(app: FastAPI) -> None:
    """/v1 and /v2 variants of /routed, registered through include_router."""
    v1 = APIRouter()
    v2 = APIRouter(prefix="/v2")
    nested = APIRouter(prefix="/nested")

    @v1.get("/routed")
    async def routed_v1(version: ApiVersionDep):
        return {"version": 1, "resolved": version.api_version if version else None}

    @v2.get("/routed")
    async def routed_v2(version: ApiVersionDep):
        return {"version": 2, "resolved": version.api_version if version else None}

    @nested.get("/{item_id}")
    async def nested_v2(item_id: int, version: ApiVersionDep):
        return {"version": 2, "data": item_id}

    v2.include_router(nested)
    # Prefix given at include time
    app.include_router(v1, prefix="/v1")
    app.include_router(v2)
