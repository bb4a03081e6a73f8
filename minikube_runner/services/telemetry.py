"""Telemetry reporting for cluster operations."""

from typing import Any, Dict, Optional

import structlog

from .interfaces import TelemetryLogger

logger = structlog.get_logger(__name__)


class StructlogTelemetryLogger(TelemetryLogger):
    """Telemetry logger that records events as structured log entries."""

    def __init__(self, name: str = "minikube.telemetry"):
        self._logger = structlog.get_logger(name)

    def log_usage(self, event_name: str, data: Optional[Dict[str, Any]] = None) -> None:
        self._logger.info("Usage event", event_name=event_name, **(data or {}))

    def log_error(self, event_name: str, data: Optional[Dict[str, Any]] = None) -> None:
        self._logger.error("Error event", event_name=event_name, **(data or {}))


def report_usage(telemetry: Optional[TelemetryLogger], event_name: str, data: Dict[str, Any]) -> None:
    """Send a usage event; telemetry failures are logged and dropped."""
    if telemetry is None:
        return
    try:
        telemetry.log_usage(event_name, data)
    except Exception as e:
        logger.warning("Telemetry usage event failed", event_name=event_name, error=str(e))


def report_error(telemetry: Optional[TelemetryLogger], event_name: str, data: Dict[str, Any]) -> None:
    """Send an error event; telemetry failures are logged and dropped."""
    if telemetry is None:
        return
    try:
        telemetry.log_error(event_name, data)
    except Exception as e:
        logger.warning("Telemetry error event failed", event_name=event_name, error=str(e))
