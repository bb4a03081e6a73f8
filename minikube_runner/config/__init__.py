"""Configuration management for the minikube runner.

This module provides a Settings class read from the environment (prefix
``MINIKUBE_RUNNER_``) and an optional ``.env`` file, with flat fields and
grouped views over them.

Usage:
    from minikube_runner.config import settings

    # Access grouped settings
    settings.minikube.version
    settings.logging.level

    # Or the flat fields
    settings.minikube_command
    settings.log_level
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LoggingConfig
from .minikube import MinikubeConfig


class Settings(BaseSettings):
    """Runner settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="MINIKUBE_RUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")
    log_file: str | None = Field(default=None)
    log_max_size_mb: int = Field(default=100, ge=1)
    log_backup_count: int = Field(default=5, ge=1)

    # minikube Configuration
    minikube_command: str = Field(default="minikube", min_length=1)
    minikube_version: str = Field(
        default="latest",
        description="Release tag described to the installer ('latest' or vX.Y.Z)",
    )
    minikube_install_dir: str | None = Field(
        default=None,
        description="Directory holding a managed minikube binary",
    )
    minikube_release_base_url: str = Field(default="https://github.com/kubernetes/minikube/releases")

    # Process Execution
    cluster_create_timeout: int = Field(
        default=300,
        ge=1,
        description="Seconds before callers cancel a cluster creation",
    )
    termination_grace_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Seconds to wait for a killed process to exit",
    )
    output_chunk_size: int = Field(default=4096, ge=1, le=1024 * 1024)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Only json and console renderers exist."""
        fmt = v.lower()
        if fmt not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return fmt

    @field_validator("minikube_version")
    @classmethod
    def normalize_version(cls, v):
        """Release tags carry a leading 'v'."""
        if v == "latest" or v.startswith("v"):
            return v
        return f"v{v}"

    # ========================================================================
    # GROUPED CONFIG ACCESS
    # ========================================================================

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration group."""
        return LoggingConfig(
            level=self.log_level,
            format=self.log_format,
            file=self.log_file,
            max_size_mb=self.log_max_size_mb,
            backup_count=self.log_backup_count,
        )

    @property
    def minikube(self) -> MinikubeConfig:
        """Access minikube configuration group."""
        return MinikubeConfig(
            version=self.minikube_version,
            release_base_url=self.minikube_release_base_url,
        )


# Global settings instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "LoggingConfig",
    "MinikubeConfig",
]
