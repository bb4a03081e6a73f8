"""Error models and exception classes for the minikube runner."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(str, Enum):
    """Error type enumeration."""

    SPAWN_FAILED = "spawn_failed"
    EXECUTION_FAILED = "execution_failed"
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"
    CLUSTER_OPERATION = "cluster_operation"
    INTERNAL = "internal"


class MinikubeRunnerException(Exception):
    """Base exception for the minikube runner."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.INTERNAL,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for logs and telemetry."""
        return {
            "error": self.message,
            "error_type": self.error_type.value,
            **self.details,
        }


class SpawnError(MinikubeRunnerException):
    """The executable could not be started."""

    def __init__(self, command: str, cause: BaseException, **kwargs):
        self.command = command
        self.cause = cause
        message = str(cause) or f"Unable to start {command}"
        super().__init__(
            message=message,
            error_type=ErrorType.SPAWN_FAILED,
            details={"command": command},
            **kwargs,
        )


class ExecutionFailure(MinikubeRunnerException):
    """The process ran and exited with a non-zero code."""

    def __init__(self, command: str, exit_code: int, stdout: str = "", stderr: str = "", **kwargs):
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        message = stderr.strip() or stdout.strip() or f"{command} exited with code {exit_code}"
        super().__init__(
            message=message,
            error_type=ErrorType.EXECUTION_FAILED,
            details={"command": command, "exit_code": exit_code},
            **kwargs,
        )


class ExecutionCancelled(MinikubeRunnerException):
    """The caller requested termination of the process."""

    def __init__(self, message: str = "Execution cancelled", **kwargs):
        super().__init__(message=message, error_type=ErrorType.CANCELLED, **kwargs)


class NotFoundError(MinikubeRunnerException):
    """minikube is not reachable and needs to be installed."""

    def __init__(self, command: str, asset=None, **kwargs):
        self.command = command
        self.asset = asset
        message = f"{command} not found"
        if asset is not None:
            message += f", installable asset: {asset.name}"
        super().__init__(
            message=message,
            error_type=ErrorType.NOT_FOUND,
            details={"command": command},
            **kwargs,
        )


class ClusterOperationError(MinikubeRunnerException):
    """A cluster operation failed; wraps the underlying error message."""

    prefix = "minikube cluster operation failed."

    def __init__(self, underlying: str, **kwargs):
        self.underlying = underlying
        super().__init__(
            message=f"{self.prefix} {underlying}",
            error_type=ErrorType.CLUSTER_OPERATION,
            **kwargs,
        )


class ClusterCreationError(ClusterOperationError):
    """Cluster creation failed."""

    prefix = "Failed to create minikube cluster."


class ClusterDeletionError(ClusterOperationError):
    """Cluster deletion failed."""

    prefix = "Failed to delete minikube cluster."
