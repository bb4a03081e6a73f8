"""Logging configuration for the minikube runner."""

# Standard library imports
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

# Third-party imports
import structlog

# Local application imports
from .._version import __version__
from ..config import settings


def setup_logging() -> None:
    """Configure structured logging for the runner."""

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    # Configure processors based on format preference
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_service_context,
    ]

    if settings.log_format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if settings.log_file:
        setup_file_logging()

    configure_third_party_loggers()


def setup_file_logging() -> None:
    """Setup file-based logging with rotation."""
    if not settings.log_file:
        return

    log_file_path = Path(settings.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=settings.log_max_size_mb * 1024 * 1024,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )

    if settings.log_format.lower() == "json":
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    file_handler.setFormatter(formatter)
    file_handler.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    logging.getLogger().addHandler(file_handler)


def configure_third_party_loggers() -> None:
    """Configure logging levels for third-party libraries."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def add_service_context(logger, method_name, event_dict):
    """Add service context information to log entries."""
    event_dict["service"] = "minikube-runner"
    event_dict["version"] = __version__
    return event_dict


class StructlogOutputLogger:
    """Output logger that forwards process output chunks to structlog.

    stdout chunks are logged at info level and stderr chunks at warning
    level, one entry per non-empty line, tagged with the command name.
    """

    def __init__(self, command: str = "minikube", name: str = "minikube.output"):
        self._logger = structlog.get_logger(name).bind(command=command)

    def log(self, data: Any) -> None:
        for line in _lines(data):
            self._logger.info(line, stream="stdout")

    def error(self, data: Any) -> None:
        for line in _lines(data):
            self._logger.warning(line, stream="stderr")

    def warn(self, data: Any) -> None:
        for line in _lines(data):
            self._logger.warning(line)


def _lines(data: Any) -> list[str]:
    return [line for line in str(data).splitlines() if line.strip()]
