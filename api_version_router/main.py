"""
Example FastAPI application serving versioned widget endpoints behind stable paths.
"""
from fastapi import APIRouter, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .core.registry import VersioningRegistry
from .dependencies import ApiVersionDep, RequiredApiVersionDep
from .middleware.api_version import add_api_versioning
from .middleware.logging import RequestLoggingMiddleware
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

WIDGETS = [
    {"id": 1, "name": "sprocket", "price_cents": 499},
    {"id": 2, "name": "flange", "price_cents": 1250},
]

v1_router = APIRouter(prefix="/v1", tags=["Widgets v1"])
v2_router = APIRouter(prefix="/v2", tags=["Widgets v2"])


@v1_router.get("/widgets")
async def list_widgets_v1(version: ApiVersionDep) -> dict:
    """Version 1 returns bare widget names."""
    return {
        "version": version.api_version if version else 1,
        "data": [widget["name"] for widget in WIDGETS],
    }


@v2_router.get("/widgets")
async def list_widgets_v2(version: RequiredApiVersionDep) -> dict:
    """Version 2 returns full widget records."""
    return {"version": version.api_version, "data": WIDGETS}


@v2_router.get("/widgets/{widget_id}")
async def get_widget_v2(widget_id: int, version: RequiredApiVersionDep) -> dict:
    """Fetch a single widget (version 2 only)."""
    for widget in WIDGETS:
        if widget["id"] == widget_id:
            return {"version": version.api_version, "data": widget}
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Widget not found")


def create_application(app_settings: Settings | None = None, registry: VersioningRegistry | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        app_settings: Settings to build the app from (default: environment settings)
        registry: Versioning registry (default: a new one)

    Returns:
        Configured FastAPI app instance
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.LOG_LEVEL, app_settings.LOG_FORMAT)

    app = FastAPI(
        title="Widget API",
        description="Widget service with media type API versioning",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Versioning runs inside request logging so the log shows the routed path
    add_api_versioning(app, registry or VersioningRegistry(), **app_settings.versioning_options())
    app.add_middleware(RequestLoggingMiddleware)

    # Outermost, so preflights and 415 responses carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Accept", "Authorization"],
    )

    app.include_router(v1_router)
    app.include_router(v2_router)

    @app.get(
        "/healthz",
        status_code=status.HTTP_200_OK,
        tags=["Health"],
        summary="Health check endpoint",
        description="Returns 200 if the service is healthy",
    )
    async def healthz() -> dict[str, str]:
        """Health check endpoint (Kubernetes liveness probe)."""
        return {"status": "healthy"}

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", exc_info=exc, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    logger.info("Widget API configured", versions=app_settings.API_VALID_VERSIONS)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        create_application(),
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
    )
