"""Logging configuration."""

from dataclasses import dataclass


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = "console"
    file: str | None = None
    max_size_mb: int = 100
    backup_count: int = 5
