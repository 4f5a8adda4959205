"""
Integration tests for passive mode, custom error codes, custom base paths and mounted apps.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api_version_router.dependencies import ApiVersionDep
from api_version_router.middleware.api_version import add_api_versioning

from ..helpers import NO_ACCEPT, VENDOR, accept, add_basic_routes


def add_base_path_routes(app: FastAPI) -> None:
    """Routes for a pipeline versioning /api/."""

    @app.get("/unversioned")
    async def unversioned(version: ApiVersionDep):
        return {"version": version.api_version if version else None, "data": "unversioned"}

    @app.get("/api/v1/versioned")
    async def versioned_v1(version: ApiVersionDep):
        return {"version": version.api_version if version else None, "data": "versioned"}

    @app.get("/api/v2/versioned")
    async def versioned_v2(version: ApiVersionDep):
        return {"version": version.api_version if version else None, "data": "versioned"}


class TestPassiveMode:
    """Tests for passive_mode=True."""

    @pytest.fixture
    def client(self, build_client, media_type_options):
        return build_client([{**media_type_options, "passive_mode": True}], add_basic_routes)

    def test_no_version_leaves_request_alone(self, client):
        """Test nothing is resolved when no version is supplied."""
        response = client.get("/unversioned")
        assert response.status_code == 200
        assert response.json() == {"version": None, "data": "unversioned"}

    def test_no_version_does_not_apply_default(self, client):
        """Test the default version is not applied in passive mode."""
        response = client.get("/versioned")
        assert response.status_code == 404

    def test_requested_version_is_still_resolved(self, client):
        """Test explicit versions are still routed."""
        response = client.get("/versioned", headers=accept(2))
        assert response.status_code == 200
        assert response.json()["resolved"] == 2

    def test_invalid_version_is_still_rejected(self, client):
        """Test passive mode does not skip validation."""
        response = client.get("/versioned", headers=accept(9))
        assert response.status_code == 415


class TestInvalidVersionErrorCode:
    """Tests for invalid_version_error_code."""

    def test_returns_custom_error_code(self, build_client, media_type_options):
        """Test the configured status code is used for invalid versions."""
        client = build_client([{**media_type_options, "invalid_version_error_code": 410}], add_basic_routes)
        response = client.get("/versioned", headers=accept(5))
        assert response.status_code == 410
        assert response.json()["error"] == "Gone"
        assert response.json()["message"] == "Invalid api-version. Valid values: 1,2"


class TestCustomBasePath:
    """Tests for base_path='/api/'."""

    @pytest.fixture
    def client(self, build_client):
        options = {"valid_versions": [1, 2], "default_version": 1, "vendor_name": VENDOR, "base_path": "/api/"}
        return build_client([options], add_base_path_routes)

    def test_returns_default_version(self, client):
        """Test the default version is applied under the base path."""
        response = client.get("/api/versioned")
        assert response.status_code == 200
        assert response.json() == {"version": 1, "data": "versioned"}

    def test_returns_requested_version(self, client):
        """Test a requested version is applied under the base path."""
        response = client.get("/api/versioned", headers=accept(2))
        assert response.status_code == 200
        assert response.json() == {"version": 2, "data": "versioned"}

    def test_missing_resource_returns_404(self, client):
        """Test unknown resources under the base path fall through to 404."""
        response = client.get("/api/random")
        assert response.status_code == 404

    def test_paths_outside_base_path_are_ignored(self, client):
        """Test requests outside the base path are neither versioned nor validated."""
        response = client.get("/unversioned", headers=accept(9))
        assert response.status_code == 200
        assert response.json() == {"version": None, "data": "unversioned"}

    def test_base_path_without_slashes_is_normalized(self, build_client):
        """Test 'api' behaves like '/api/'."""
        options = {"valid_versions": [1, 2], "default_version": 1, "vendor_name": VENDOR, "base_path": "api"}
        client = build_client([options], add_base_path_routes)
        response = client.get("/api/versioned", headers=accept(2))
        assert response.status_code == 200
        assert response.json()["version"] == 2


class TestMountedApplication:
    """Tests for a versioned sub-application mounted at /svc."""

    def build_client(self, registry, **options) -> TestClient:
        sub_app = FastAPI()
        add_basic_routes(sub_app)
        add_base_path_routes(sub_app)
        add_api_versioning(sub_app, registry, valid_versions=[1, 2], default_version=1, vendor_name=VENDOR, **options)
        app = FastAPI()
        app.mount("/svc", sub_app)
        return TestClient(app, headers=NO_ACCEPT)

    def test_returns_requested_version(self, registry):
        """Test the version segment is inserted after the mount prefix."""
        response = self.build_client(registry).get("/svc/versioned", headers=accept(2))
        assert response.status_code == 200
        assert response.json() == {"version": 2, "resolved": 2, "data": "versioned"}

    def test_returns_default_version(self, registry):
        """Test the default version inside a mounted app."""
        response = self.build_client(registry).get("/svc/versioned")
        assert response.status_code == 200
        assert response.json()["version"] == 1

    def test_query_string_is_kept(self, registry):
        """Test query parameters survive the rewrite inside a mounted app."""
        response = self.build_client(registry).get("/svc/versionedWithParams?a=1", headers=accept(1))
        assert response.status_code == 200
        assert response.json() == {"params": {"a": "1"}}

    def test_base_path_is_relative_to_mount(self, registry):
        """Test base_path is checked against the path inside the mounted app."""
        client = self.build_client(registry, base_path="/api/")
        response = client.get("/svc/api/versioned", headers=accept(2))
        assert response.status_code == 200
        assert response.json() == {"version": 2, "data": "versioned"}
        assert client.get("/svc/unversioned", headers=accept(9)).status_code == 200
