"""Utility modules for the minikube runner."""

from .logging import StructlogOutputLogger, setup_logging

__all__ = [
    "setup_logging",
    "StructlogOutputLogger",
]
