"""
Validated configuration for a single versioning pipeline.
"""
from typing import Annotated, Any, Callable

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StringConstraints, field_validator, model_validator

DEFAULT_DESCRIPTOR = "mediatype"
RESERVED_DESCRIPTOR = "default"

TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PositiveVersion = Annotated[StrictInt, Field(gt=0)]


class VersioningOptions(BaseModel):
    """Options accepted when registering a versioning pipeline."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid_versions: list[PositiveVersion] = Field(..., min_length=1, description="Versions accepted from clients")
    default_version: StrictInt = Field(..., description="Version applied when none is requested")
    passive_mode: StrictBool = Field(default=False, description="Skip unversioned requests entirely")
    base_path: TrimmedStr = Field(default="/", description="Path prefix the pipeline is active under")
    vendor_name: TrimmedStr | None = Field(default=None, description="Vendor token for Accept header versioning")
    get_version: Callable[..., Any] | None = Field(default=None, description="Custom version extractor")
    descriptor: str = Field(default=DEFAULT_DESCRIPTOR, min_length=1, description="Unique pipeline name")
    invalid_version_error_code: StrictInt = Field(default=415, ge=400, le=599)

    @field_validator("valid_versions")
    @classmethod
    def validate_distinct_versions(cls, v: list[int]) -> list[int]:
        """Reject repeated versions."""
        if len(set(v)) != len(v):
            raise ValueError("valid_versions must not contain duplicates")
        return v

    @field_validator("base_path")
    @classmethod
    def normalize_base_path(cls, v: str) -> str:
        """Base paths always start and end with '/' so 'v<N>' can be appended directly."""
        if not v.startswith("/"):
            v = "/" + v
        if not v.endswith("/"):
            v += "/"
        return v

    @field_validator("descriptor")
    @classmethod
    def validate_descriptor(cls, v: str) -> str:
        """The 'default' descriptor is reserved for default-version resolutions."""
        if v == RESERVED_DESCRIPTOR:
            raise ValueError(f"descriptor '{RESERVED_DESCRIPTOR}' is reserved")
        return v

    @model_validator(mode="after")
    def validate_version_source(self) -> "VersioningOptions":
        """Check the default version and that exactly one version source is configured."""
        if self.default_version not in self.valid_versions:
            raise ValueError(
                f"default_version {self.default_version} must be one of valid_versions {self.valid_versions}"
            )
        if (self.vendor_name is None) == (self.get_version is None):
            raise ValueError("exactly one of vendor_name or get_version must be provided")
        return self

    @property
    def is_root_path(self) -> bool:
        return self.base_path == "/"

    def versions_label(self) -> str:
        """Comma separated valid versions, e.g. '1,2'."""
        return ",".join(str(version) for version in self.valid_versions)
