"""Run and supervise the minikube CLI from Python."""

from ._version import __version__

__all__ = ["__version__"]
