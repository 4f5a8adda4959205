"""
Registry coordinating every versioning pipeline of one application.
"""
from typing import Any

from pydantic import ValidationError
from starlette.requests import Request

from ..utils.logger import get_logger
from .context import ApiVersionInfo
from .errors import DuplicateDescriptorError, VersioningConfigError
from .options import VersioningOptions
from .pipeline import VersioningPipeline
from .rewrite import RouteTable

logger = get_logger(__name__)


class VersioningRegistry:
    """
    Owns the pipelines registered for an application.

    Create one per application at startup, register every pipeline, then hand
    it to ApiVersionMiddleware. Once the middleware is built the registry is
    sealed and further registrations are refused.
    """

    def __init__(self):
        self.pipelines: list[VersioningPipeline] = []
        self.descriptors: set[str] = set()
        self.sealed = False

    @property
    def count(self) -> int:
        """Number of successfully registered pipelines."""
        return len(self.pipelines)

    def register(self, **options: Any) -> VersioningPipeline:
        """
        Validate options and register a new pipeline.

        Args:
            **options: Fields of VersioningOptions

        Returns:
            The registered pipeline

        Raises:
            VersioningConfigError: If the options are invalid or the registry is sealed
            DuplicateDescriptorError: If the descriptor is already taken
        """
        if self.sealed:
            raise VersioningConfigError("API versioning pipelines must be registered before serving requests")

        try:
            validated = VersioningOptions(**options)
        except ValidationError as e:
            raise VersioningConfigError(f"Invalid API versioning options: {e}") from e

        if validated.descriptor in self.descriptors:
            raise DuplicateDescriptorError(validated.descriptor)

        pipeline = VersioningPipeline(validated, self)
        self.descriptors.add(validated.descriptor)
        self.pipelines.append(pipeline)

        logger.info(
            "api_version_registered",
            descriptor=validated.descriptor,
            extractor=pipeline.extractor.extractor_name,
            valid_versions=validated.valid_versions,
            default_version=validated.default_version,
            base_path=validated.base_path,
            passive_mode=validated.passive_mode,
        )
        return pipeline

    def seal(self) -> None:
        """Freeze the registry; called when requests start flowing."""
        self.sealed = True

    def resolve(self, request: Request, route_table: RouteTable) -> ApiVersionInfo | None:
        """
        Run every pipeline against the request in registration order.

        Returns:
            The last published resolution, or None if no pipeline rewrote the request

        Raises:
            InvalidVersionError: From the first pipeline rejecting the requested version
        """
        resolution = None
        for pipeline in self.pipelines:
            resolution = pipeline.process(request, route_table) or resolution
        return resolution
