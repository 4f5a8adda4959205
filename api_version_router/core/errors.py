"""
Exceptions raised while configuring or running versioning pipelines.
"""


class VersioningConfigError(ValueError):
    """Raised when a pipeline cannot be registered with the given options."""

    pass


class DuplicateDescriptorError(VersioningConfigError):
    """Raised when two pipelines in one registry share a descriptor."""

    def __init__(self, descriptor: str):
        self.descriptor = descriptor
        super().__init__(
            f"API versioning pipelines contain duplicate descriptors '{descriptor}'. "
            "When registering multiple pipelines, each pipeline must be assigned a unique descriptor."
        )


class InvalidVersionError(Exception):
    """Raised when a client requests a version that is not supported."""

    def __init__(self, status_code: int, requested: object, valid_versions: list[int]):
        self.status_code = status_code
        self.requested = requested
        self.valid_versions = valid_versions
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return "Invalid api-version. Valid values: " + ",".join(str(v) for v in self.valid_versions)
