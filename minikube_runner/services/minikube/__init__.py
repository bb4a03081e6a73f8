"""minikube services.

This package drives the minikube CLI:
- command.py: Argument vectors for cluster commands
- detector.py: Locating a runnable minikube
- installer.py: Release asset description for installation
- orchestrator.py: Cluster create/delete with telemetry
"""

from .command import ClusterCommandBuilder
from .detector import VersionDetector, detect_minikube
from .installer import MinikubeReleaseInstaller
from .orchestrator import ClusterLifecycleOrchestrator, create_cluster, delete_cluster

__all__ = [
    "ClusterCommandBuilder",
    "VersionDetector",
    "detect_minikube",
    "MinikubeReleaseInstaller",
    "ClusterLifecycleOrchestrator",
    "create_cluster",
    "delete_cluster",
]
