"""Handle for one in-flight process execution."""

from enum import Enum
from typing import Optional
from uuid import uuid4

from ...models import RunOutcome


class RunState(str, Enum):
    """Lifecycle state of a run handle."""

    RUNNING = "running"
    EXITED = "exited"
    KILLED = "killed"
    SPAWN_FAILED = "spawn_failed"


class RunHandle:
    """Owns the OS process of one execution.

    The terminal outcome is recorded exactly once through ``settle``; the
    first terminal event wins and later ones are ignored.
    """

    def __init__(self, command: str, process=None):
        self.run_id = uuid4().hex[:12]
        self.command = command
        self.process = process
        self.state = RunState.RUNNING if process is not None else RunState.SPAWN_FAILED
        self.kill_requested = False
        self._outcome: Optional[RunOutcome] = None

    @property
    def pid(self) -> Optional[int]:
        return getattr(self.process, "pid", None)

    @property
    def has_exited(self) -> bool:
        """Whether the OS process is known to have terminated."""
        if self.process is None:
            return True
        return self.process.returncode is not None

    @property
    def outcome(self) -> Optional[RunOutcome]:
        return self._outcome

    def settle(self, outcome: RunOutcome, state: RunState) -> bool:
        """Record the terminal outcome.

        Returns:
            True if this call settled the handle, False if it was already settled
        """
        if self._outcome is not None:
            return False
        self._outcome = outcome
        self.state = state
        return True

    def __repr__(self) -> str:
        return f"RunHandle(run_id={self.run_id!r}, command={self.command!r}, pid={self.pid}, state={self.state.value})"
