"""Collaborator interfaces for the minikube runner.

The host application supplies loggers, telemetry, cancellation tokens and
an installer; the runner only relies on the methods declared here.
"""

# Standard library imports
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

# Local application imports
from ..models import AssetDescriptor


class Disposable(ABC):
    """Handle returned by a registration that can be undone."""

    @abstractmethod
    def dispose(self) -> None:
        """Release the registration."""
        pass


class CancellationToken(ABC):
    """Read-only view of a caller-owned cancellation request."""

    @property
    @abstractmethod
    def is_cancellation_requested(self) -> bool:
        """Whether cancellation was already requested."""
        pass

    @abstractmethod
    def on_cancellation_requested(self, callback: Callable[[], Any]) -> Disposable:
        """Register a callback to run once on cancellation."""
        pass


class Logger(ABC):
    """Sink for incremental process output."""

    @abstractmethod
    def log(self, data: Any) -> None:
        """Receive a stdout chunk."""
        pass

    @abstractmethod
    def error(self, data: Any) -> None:
        """Receive a stderr chunk."""
        pass

    @abstractmethod
    def warn(self, data: Any) -> None:
        """Receive a warning."""
        pass


class TelemetryLogger(ABC):
    """Usage and error event reporting."""

    @abstractmethod
    def log_usage(self, event_name: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Record a usage event."""
        pass

    @abstractmethod
    def log_error(self, event_name: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Record an error event."""
        pass


class Installer(ABC):
    """Describes which minikube release asset fits this machine."""

    @abstractmethod
    async def get_asset_info(self) -> Optional[AssetDescriptor]:
        """Return the asset to install, or None if unsupported.

        Must not download anything.
        """
        pass
