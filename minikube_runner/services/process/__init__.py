"""Process execution services.

This package runs external commands and supervises them:
- paths.py: PATH augmentation and platform quoting
- runner.py: Spawning, output streaming and cancellation
- terminator.py: Platform specific process termination
- sinks.py: Output accumulation and forwarding
"""

from .handle import RunHandle, RunState
from .paths import (
    MAC_EXTRA_PATHS,
    Platform,
    additional_environment,
    compute_search_path,
    current_platform,
    quote_for_platform,
)
from .runner import ProcessRunner, get_process_runner, run_cli_command
from .terminator import ProcessTerminator, SignalTerminator, TaskkillTerminator, get_terminator

__all__ = [
    "MAC_EXTRA_PATHS",
    "Platform",
    "additional_environment",
    "compute_search_path",
    "current_platform",
    "quote_for_platform",
    "ProcessRunner",
    "get_process_runner",
    "run_cli_command",
    "ProcessTerminator",
    "SignalTerminator",
    "TaskkillTerminator",
    "get_terminator",
    "RunHandle",
    "RunState",
]
