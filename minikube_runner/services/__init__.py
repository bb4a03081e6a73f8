"""Service layer for the minikube runner."""

from .cancellation import CancellationTokenSource
from .interfaces import CancellationToken, Disposable, Installer, Logger, TelemetryLogger
from .minikube import (
    ClusterCommandBuilder,
    ClusterLifecycleOrchestrator,
    MinikubeReleaseInstaller,
    VersionDetector,
    create_cluster,
    delete_cluster,
    detect_minikube,
)
from .process import ProcessRunner, run_cli_command
from .telemetry import StructlogTelemetryLogger

__all__ = [
    "CancellationToken",
    "CancellationTokenSource",
    "Disposable",
    "Installer",
    "Logger",
    "TelemetryLogger",
    "StructlogTelemetryLogger",
    "ProcessRunner",
    "run_cli_command",
    "ClusterCommandBuilder",
    "ClusterLifecycleOrchestrator",
    "MinikubeReleaseInstaller",
    "VersionDetector",
    "create_cluster",
    "delete_cluster",
    "detect_minikube",
]
