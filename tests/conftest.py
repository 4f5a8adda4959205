"""
Pytest configuration and fixtures for API version router tests.
"""
from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api_version_router.core.registry import VersioningRegistry
from api_version_router.middleware.api_version import add_api_versioning

from .helpers import NO_ACCEPT, VENDOR


@pytest.fixture
def registry():
    """Fresh versioning registry."""
    return VersioningRegistry()


@pytest.fixture
def media_type_options():
    """Options for an Accept header pipeline."""
    return {"valid_versions": [1, 2], "default_version": 1, "vendor_name": VENDOR}


@pytest.fixture
def build_client(registry) -> Callable[..., TestClient]:
    """
    Factory building a FastAPI app with the given pipelines and routes.

    Usage:
        client = build_client([options, ...], add_basic_routes)
    """

    def _build(pipelines: list[dict[str, Any]], *route_builders: Callable[[FastAPI], None]) -> TestClient:
        app = FastAPI()
        for add_routes in route_builders:
            add_routes(app)
        for options in pipelines:
            add_api_versioning(app, registry, **options)
        return TestClient(app, headers=NO_ACCEPT)

    return _build
