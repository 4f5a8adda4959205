"""
Route lookup and path rewriting for resolved API versions.
"""
from typing import Protocol, Sequence
from urllib.parse import quote

from fastapi.routing import RouteContext, iter_route_contexts
from starlette.routing import BaseRoute, Match, get_route_path
from starlette.types import Scope


class RouteTable(Protocol):
    """Anything able to answer 'which route serves this method and path?'."""

    def match(self, method: str, path: str, scope: Scope | None = None) -> BaseRoute | RouteContext | None:
        ...


class StarletteRouteTable:
    """
    Route table backed by the routes of a Starlette/FastAPI router.

    Routers added with ``include_router`` are flattened into their effective
    routes, so a match reports the full, prefixed path of the endpoint.
    """

    def __init__(self, routes: Sequence[BaseRoute]):
        self.routes = list(iter_route_contexts(routes))

    def match(self, method: str, path: str, scope: Scope | None = None) -> RouteContext | None:
        """
        Find the first route fully matching method and path.

        Args:
            method: HTTP method
            path: Candidate request path, including any mount prefix in ``root_path``
            scope: Original request scope, used for the remaining matching keys

        Returns:
            Matching route or None
        """
        candidate_scope = dict(scope or {"type": "http", "root_path": ""})
        candidate_scope.update({"method": method, "path": path})
        for route in self.routes:
            match, _ = route.matches(candidate_scope)
            if match == Match.FULL:
                return route
        return None


def route_path(route: BaseRoute | RouteContext) -> str:
    """Registered path of a route ('' for routes without one)."""
    return getattr(route, "path", "") or ""


def versioned_prefix(base_path: str, version: int) -> str:
    """'/api/' and 2 -> '/api/v2/'."""
    return f"{base_path}v{version}/"


def versioned_path(path: str, base_path: str, version: int) -> str:
    """Insert the version segment right after the base path: '/api/users' -> '/api/v2/users'."""
    return f"{base_path}v{version}{path[len(base_path) - 1:]}"


def rewrite_request(scope: Scope, version: int, base_path: str, route_table: RouteTable) -> bool:
    """
    Point the request at the versioned route if one exists.

    Paths are handled relative to the application, so a sub-application
    mounted at ``/svc`` rewrites ``/svc/users`` to ``/svc/v2/users``. The
    query string is left untouched, and the rest of the raw path is kept
    byte for byte so path parameters still resolve.

    Args:
        scope: ASGI request scope, mutated in place on success
        version: Resolved API version
        base_path: Base path of the pipeline
        route_table: Route lookup used to check the versioned path

    Returns:
        True if the request was rewritten
    """
    app_path = get_route_path(scope)
    mount_prefix = scope["path"][: len(scope["path"]) - len(app_path)]
    new_path = mount_prefix + versioned_path(app_path, base_path, version)

    route = route_table.match(scope["method"], new_path, scope)
    if route is None:
        return False

    # Mount paths carry no trailing slash
    if not (route_path(route).rstrip("/") + "/").startswith(versioned_prefix(base_path, version)):
        return False

    raw_path = scope.get("raw_path")
    prefix_bytes = quote(mount_prefix + base_path).encode("ascii")
    if raw_path and raw_path.startswith(prefix_bytes):
        scope["raw_path"] = prefix_bytes + f"v{version}".encode("ascii") + raw_path[len(prefix_bytes) - 1:]
    else:
        scope["raw_path"] = quote(new_path).encode("ascii")
    scope["path"] = new_path
    return True
