"""
A single configured versioning pipeline: extract, validate, coordinate, rewrite.
"""
from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.routing import get_route_path

from ..utils.logger import get_logger
from .context import (
    DEFAULT_RESOLUTION_DESCRIPTOR,
    ApiVersionInfo,
    RequestVersionContext,
    get_request_context,
    publish_resolution,
)
from .errors import InvalidVersionError
from .extractors import VersionExtractor, build_extractor
from .options import VersioningOptions
from .rewrite import RouteTable, rewrite_request
from .validator import validate_version

if TYPE_CHECKING:
    from .registry import VersioningRegistry

logger = get_logger(__name__)


class VersioningPipeline:
    """
    One registration of the version resolution logic.

    Several pipelines may share a registry. They run in registration order and
    cooperate through the request's RequestVersionContext: the first pipeline
    that finds an explicitly requested version claims the request, and the
    default version is only applied once every pipeline had its turn.
    """

    def __init__(self, options: VersioningOptions, registry: "VersioningRegistry"):
        """
        Initialize pipeline.

        Args:
            options: Validated pipeline options
            registry: Registry the pipeline belongs to
        """
        self.options = options
        self.registry = registry
        self.extractor: VersionExtractor = build_extractor(options)

    @property
    def descriptor(self) -> str:
        return self.options.descriptor

    def applies_to(self, path: str) -> bool:
        """Whether a request path falls under this pipeline's base path."""
        return self.options.is_root_path or path.startswith(self.options.base_path)

    def process(self, request: Request, route_table: RouteTable) -> ApiVersionInfo | None:
        """
        Resolve the version for a request and rewrite it when a versioned route exists.

        Args:
            request: Incoming request, its scope is mutated on rewrite
            route_table: Route lookup for versioned paths

        Returns:
            The published resolution, or None if this pipeline left the request alone

        Raises:
            InvalidVersionError: If the requested version is not valid
        """
        if not self.applies_to(get_route_path(request.scope)):
            return None

        context = get_request_context(request)
        if context.is_resolved:
            return None

        context.count += 1

        try:
            requested = validate_version(self.extractor.extract(request), self.options)
        except InvalidVersionError as e:
            logger.warning(
                "api_version_invalid",
                descriptor=self.descriptor,
                requested=repr(e.requested),
                valid_versions=self.options.valid_versions,
                path=request.scope["path"],
            )
            raise

        if requested is None and self.options.passive_mode:
            return None

        if requested is None and context.count < self.registry.count:
            return None

        use_default = requested is None
        version = self.options.default_version if use_default else requested

        return self._rewrite(request, context, version, use_default, route_table)

    def _rewrite(
        self,
        request: Request,
        context: RequestVersionContext,
        version: int,
        use_default: bool,
        route_table: RouteTable,
    ) -> ApiVersionInfo | None:
        original_path = request.scope["path"]
        if not rewrite_request(request.scope, version, self.options.base_path, route_table):
            logger.debug("api_version_route_not_found", descriptor=self.descriptor, version=version, path=original_path)
            return None

        resolution = ApiVersionInfo(
            api_version=version,
            use_default=use_default,
            count=context.count,
            descriptor=DEFAULT_RESOLUTION_DESCRIPTOR if use_default else self.descriptor,
        )
        publish_resolution(request, context, resolution)

        logger.debug(
            "api_version_resolved",
            descriptor=resolution.descriptor,
            version=version,
            use_default=use_default,
            count=context.count,
            original_path=original_path,
            path=request.scope["path"],
        )
        return resolution

    def __repr__(self) -> str:
        """String representation of the pipeline."""
        return f"<VersioningPipeline(descriptor={self.descriptor}, extractor={self.extractor.extractor_name})>"
