"""Platform specific process termination.

POSIX processes are killed through the handle obtained at spawn time. On
Windows the spawn goes through the shell and the handle's kill does not
reach the console process tree, so ``taskkill /f /t`` is run against the
recorded pid instead.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from .handle import RunHandle
from .paths import Platform, current_platform

logger = structlog.get_logger(__name__)


class ProcessTerminator(ABC):
    """Stops the OS process behind a run handle."""

    @abstractmethod
    async def terminate(self, handle: RunHandle) -> None:
        """Terminate the process; a no-op once it has exited."""
        pass


class SignalTerminator(ProcessTerminator):
    """Kills the process with a signal (SIGKILL on POSIX)."""

    async def terminate(self, handle: RunHandle) -> None:
        if handle.has_exited:
            logger.debug("Process already exited, nothing to kill", run_id=handle.run_id)
            return

        handle.kill_requested = True
        try:
            handle.process.kill()
            logger.info("Killed process", run_id=handle.run_id, pid=handle.pid)
        except ProcessLookupError:
            logger.debug("Process vanished before kill", run_id=handle.run_id, pid=handle.pid)


class TaskkillTerminator(ProcessTerminator):
    """Kills the process tree with the external taskkill utility."""

    def __init__(self, executable: str = "taskkill"):
        self.executable = executable

    async def terminate(self, handle: RunHandle) -> None:
        if handle.has_exited or handle.pid is None:
            logger.debug("Process already exited, nothing to kill", run_id=handle.run_id)
            return

        handle.kill_requested = True
        args = ["/pid", str(handle.pid), "/f", "/t"]
        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            exit_code = await proc.wait()
        except OSError as e:
            logger.error("Unable to run taskkill", run_id=handle.run_id, pid=handle.pid, error=str(e))
            return

        if exit_code != 0:
            # taskkill exits non-zero when the tree is already gone
            logger.warning("taskkill returned non-zero", run_id=handle.run_id, pid=handle.pid, exit_code=exit_code)
        else:
            logger.info("Killed process tree", run_id=handle.run_id, pid=handle.pid)


def get_terminator(platform: Optional[Platform] = None) -> ProcessTerminator:
    """Select the termination strategy for a platform."""
    platform = platform or current_platform()
    if platform == Platform.WINDOWS:
        return TaskkillTerminator()
    return SignalTerminator()
