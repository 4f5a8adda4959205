"""
Validation of extracted candidate versions.
"""
from typing import Any

from .errors import InvalidVersionError
from .options import VersioningOptions


def is_valid_version(candidate: Any, valid_versions: list[int]) -> bool:
    """Check membership without letting True/False pass as 1/0."""
    if isinstance(candidate, bool):
        return False
    return candidate in valid_versions


def validate_version(candidate: Any, options: VersioningOptions) -> int | None:
    """
    Validate a candidate returned by an extractor.

    Args:
        candidate: Extractor result (None means no version was requested)
        options: Pipeline options holding the valid versions

    Returns:
        The candidate unchanged, or None if no version was requested

    Raises:
        InvalidVersionError: If a version was requested but is not valid
    """
    if candidate is None:
        return None

    if not is_valid_version(candidate, options.valid_versions):
        raise InvalidVersionError(options.invalid_version_error_code, candidate, options.valid_versions)

    # Equal values such as 2.0 map onto the configured int
    return options.valid_versions[options.valid_versions.index(candidate)]
