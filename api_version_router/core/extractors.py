"""
Version extractors: read the requested API version from an incoming request.

An extractor returns one of:
    - None: the client did not ask for a version
    - MALFORMED_VERSION: the client asked for a version that cannot be understood
    - any other value: the candidate version, validated afterwards
"""
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from starlette.requests import Request

from .media_type import MediaType

if TYPE_CHECKING:
    from .options import VersioningOptions

MALFORMED_VERSION = -1

_VENDOR_SUBTYPE_PATTERN = re.compile(r"^vnd\.[a-zA-Z0-9]+\.v[0-9]+$")


class VersionExtractor(ABC):
    """Abstract base class for version extraction strategies."""

    @abstractmethod
    def extract(self, request: Request) -> Any:
        """
        Extract the candidate version from a request.

        Args:
            request: Incoming Starlette request

        Returns:
            None when no version was requested, otherwise the candidate version
        """
        pass

    @property
    @abstractmethod
    def extractor_name(self) -> str:
        """Return the name of this extractor."""
        pass


class MediaTypeVersionExtractor(VersionExtractor):
    """
    Reads the version from a vendor media type in the Accept header,
    e.g. ``Accept: application/vnd.acme.v2+json``.
    """

    def __init__(self, vendor_name: str):
        self.vendor_name = vendor_name

    def extract(self, request: Request) -> int | None:
        """Extract the version facet of the vendor media type."""
        accept = request.headers.get("accept")
        if not accept:
            return None

        media = MediaType.parse(accept)
        if media is None:
            return MALFORMED_VERSION

        if not _VENDOR_SUBTYPE_PATTERN.match(media.subtype):
            return MALFORMED_VERSION

        _, vendor, version = media.subtype_facets
        if vendor != self.vendor_name:
            return MALFORMED_VERSION

        return int(version[1:], 10)

    @property
    def extractor_name(self) -> str:
        """Return the extractor name."""
        return "Accept Header Media Type"


class CallbackVersionExtractor(VersionExtractor):
    """
    Delegates extraction to a user supplied ``get_version(request, options)``.

    The return value is used verbatim. Exceptions raised by the callback propagate.
    """

    def __init__(self, callback: Callable[..., Any], options: "VersioningOptions"):
        self.callback = callback
        self.options = options

    def extract(self, request: Request) -> Any:
        """Invoke the callback."""
        return self.callback(request, self.options)

    @property
    def extractor_name(self) -> str:
        """Return the extractor name."""
        return getattr(self.callback, "__name__", "Custom Callback")


def build_extractor(options: "VersioningOptions") -> VersionExtractor:
    """Create the extractor selected by the options."""
    if options.get_version is not None:
        return CallbackVersionExtractor(options.get_version, options)
    return MediaTypeVersionExtractor(options.vendor_name)
