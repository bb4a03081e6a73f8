"""Platform detection and executable path helpers."""

import os
import sys
from enum import Enum
from typing import Dict, Optional


class Platform(str, Enum):
    """Operating system family."""

    MAC = "darwin"
    WINDOWS = "windows"
    LINUX = "linux"


# Package manager locations missing from the PATH of GUI-launched apps on macOS
MAC_EXTRA_PATHS = [
    "/usr/local/bin",
    "/opt/homebrew/bin",
    "/opt/local/bin",
    "/opt/podman/bin",
]


def current_platform() -> Platform:
    """Detect the platform the runner executes on."""
    if sys.platform == "darwin":
        return Platform.MAC
    if sys.platform.startswith(("win32", "cygwin")):
        return Platform.WINDOWS
    return Platform.LINUX


def compute_search_path(platform: Optional[Platform] = None, existing: Optional[str] = None) -> str:
    """Compute the PATH used to find the minikube binary.

    Args:
        platform: Target platform (defaults to the current one)
        existing: PATH to extend (defaults to the process PATH)

    Returns:
        PATH string; on macOS the common install directories are appended
    """
    platform = platform or current_platform()
    if existing is None:
        existing = os.environ.get("PATH", "")

    if platform != Platform.MAC:
        return existing

    extra = ":".join(MAC_EXTRA_PATHS)
    if not existing:
        return extra
    return f"{existing}:{extra}"


def quote_for_platform(command: str, platform: Optional[Platform] = None) -> str:
    """Quote an executable token for the platform shell.

    Windows commands are run through the shell, so the token is wrapped in
    double quotes to survive spaces in paths.
    """
    platform = platform or current_platform()
    if platform != Platform.WINDOWS:
        return command
    if len(command) >= 2 and command.startswith('"') and command.endswith('"'):
        return command
    return f'"{command}"'


def additional_environment(platform: Optional[Platform] = None) -> Dict[str, str]:
    """Environment overrides carried by every minikube invocation."""
    return {"PATH": compute_search_path(platform)}
