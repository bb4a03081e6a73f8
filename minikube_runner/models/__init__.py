"""Data models for the minikube runner."""

from .cluster import ClusterConfig
from .errors import (
    ClusterCreationError,
    ClusterDeletionError,
    ClusterOperationError,
    ErrorType,
    ExecutionCancelled,
    ExecutionFailure,
    MinikubeRunnerException,
    NotFoundError,
    SpawnError,
)
from .execution import (
    CANCELLED_MESSAGE,
    AssetDescriptor,
    Cancelled,
    CommandSpec,
    Failure,
    RunOutcome,
    RunStatus,
    SpawnFailed,
    Success,
)

__all__ = [
    # Cluster models
    "ClusterConfig",
    # Execution models
    "CANCELLED_MESSAGE",
    "AssetDescriptor",
    "CommandSpec",
    "RunOutcome",
    "RunStatus",
    "Success",
    "Failure",
    "Cancelled",
    "SpawnFailed",
    # Errors
    "ErrorType",
    "MinikubeRunnerException",
    "SpawnError",
    "ExecutionFailure",
    "ExecutionCancelled",
    "NotFoundError",
    "ClusterOperationError",
    "ClusterCreationError",
    "ClusterDeletionError",
]
