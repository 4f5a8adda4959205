"""
Application configuration using 12-factor app principles.
Uses Pydantic BaseSettings for environment variable management.
"""
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Versioning Configuration
    API_VERSION_VENDOR: str = Field(
        default="acme",
        min_length=1,
        description="Vendor token expected in Accept headers",
        examples=["acme"],
    )
    API_VALID_VERSIONS: list[int] = Field(
        default_factory=lambda: [1, 2],
        min_length=1,
        description="Versions clients may request",
        examples=[[1, 2]],
    )
    API_DEFAULT_VERSION: int = Field(default=1, description="Version used when none is requested")
    API_VERSION_PASSIVE_MODE: bool = Field(default=False, description="Leave unversioned requests untouched")
    API_VERSION_BASE_PATH: str = Field(default="/", min_length=1, description="Path prefix that is versioned")
    API_VERSION_ERROR_CODE: int = Field(default=415, ge=400, le=599, description="Status for invalid versions")

    # API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1, le=65535)
    CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins",
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    @field_validator("API_DEFAULT_VERSION")
    @classmethod
    def validate_default_version(cls, v: int, info) -> int:
        """Validate the default version is one of the valid versions."""
        valid_versions = info.data.get("API_VALID_VERSIONS")
        if valid_versions and v not in valid_versions:
            raise ValueError("API_DEFAULT_VERSION must be one of API_VALID_VERSIONS")
        return v

    def versioning_options(self) -> dict[str, Any]:
        """Keyword arguments for a media type versioning pipeline."""
        return {
            "valid_versions": self.API_VALID_VERSIONS,
            "default_version": self.API_DEFAULT_VERSION,
            "vendor_name": self.API_VERSION_VENDOR,
            "passive_mode": self.API_VERSION_PASSIVE_MODE,
            "base_path": self.API_VERSION_BASE_PATH,
            "invalid_version_error_code": self.API_VERSION_ERROR_CODE,
        }


# Global settings instance
settings = Settings()
