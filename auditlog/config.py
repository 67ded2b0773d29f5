"""Configuration loading for the audit log.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage configuration
    audit_directory: str = Field(
        default="./audit",
        description="Directory holding the audit_<N>.<ext> files",
    )
    create_audit_directory: bool = Field(
        default=True,
        description="Create the audit directory if it does not exist",
    )
    file_extension: str = Field(
        default="txt",
        description="Extension shared by every audit file in the directory",
    )

    # Rotation configuration
    max_entries_per_file: int = Field(
        default=100,
        description="Records per file before a new file is started",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("audit_directory")
    @classmethod
    def validate_audit_directory(cls, v: str) -> str:
        """Ensure the audit directory is not blank."""
        if not v.strip():
            raise ValueError("audit_directory must be a non-empty path")
        return v

    @field_validator("file_extension")
    @classmethod
    def validate_file_extension(cls, v: str) -> str:
        """Strip a leading dot and require an alphanumeric extension."""
        v = v.lstrip(".")
        if not v or not v.isalnum():
            raise ValueError("file_extension must be alphanumeric, e.g. 'txt'")
        return v

    @field_validator("max_entries_per_file")
    @classmethod
    def validate_max_entries(cls, v: int) -> int:
        """Ensure file capacity is positive."""
        if v <= 0:
            raise ValueError("max_entries_per_file must be positive")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
