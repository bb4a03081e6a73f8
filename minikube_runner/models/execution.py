"""Data models for process execution.

These models describe a command to run and the terminal outcome of one
execution. Outcomes form a tagged union keyed by ``RunStatus``.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from .errors import ExecutionCancelled, ExecutionFailure, SpawnError

CANCELLED_MESSAGE = "Execution cancelled"


class RunStatus(str, Enum):
    """Terminal status of an execution."""

    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
    SPAWN_FAILED = "spawn_failed"


@dataclass(frozen=True)
class CommandSpec:
    """An executable with its arguments and environment overrides."""

    executable: str
    arguments: tuple[str, ...] = ()
    environment: Mapping[str, str] = field(default_factory=dict)
    working_directory: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(self, "environment", MappingProxyType(dict(self.environment)))

    def with_environment(self, **overrides: str) -> "CommandSpec":
        """Return a copy with extra environment variables."""
        return replace(self, environment={**self.environment, **overrides})

    @property
    def command_line(self) -> str:
        return " ".join([self.executable, *self.arguments])


@dataclass(frozen=True)
class Success:
    """The process exited with code 0."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    status: RunStatus = field(default=RunStatus.SUCCESS, init=False)

    @property
    def ok(self) -> bool:
        return True

    def raise_for_status(self, command: str = "") -> "Success":
        return self


@dataclass(frozen=True)
class Failure:
    """The process exited with a non-zero code."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    status: RunStatus = field(default=RunStatus.FAILURE, init=False)

    @property
    def ok(self) -> bool:
        return False

    def to_error(self, command: str = "") -> ExecutionFailure:
        return ExecutionFailure(command, self.exit_code, self.stdout, self.stderr)

    def raise_for_status(self, command: str = ""):
        raise self.to_error(command)


@dataclass(frozen=True)
class Cancelled:
    """The caller cancelled the execution."""

    reason: str = CANCELLED_MESSAGE
    status: RunStatus = field(default=RunStatus.CANCELLED, init=False)

    @property
    def ok(self) -> bool:
        return False

    def to_error(self, command: str = "") -> ExecutionCancelled:
        return ExecutionCancelled(self.reason)

    def raise_for_status(self, command: str = ""):
        raise self.to_error(command)


@dataclass(frozen=True)
class SpawnFailed:
    """The executable could not be started."""

    cause: BaseException
    status: RunStatus = field(default=RunStatus.SPAWN_FAILED, init=False)

    @property
    def ok(self) -> bool:
        return False

    def to_error(self, command: str = "") -> SpawnError:
        return SpawnError(command, self.cause)

    def raise_for_status(self, command: str = ""):
        raise self.to_error(command) from self.cause


RunOutcome = Union[Success, Failure, Cancelled, SpawnFailed]


@dataclass(frozen=True)
class AssetDescriptor:
    """Platform specific release asset of the minikube binary."""

    name: str
    platform: str
    architecture: str
    download_url: str
    checksum: str | None = None

    @property
    def checksum_url(self) -> str:
        """URL of the published sha256 file for the asset."""
        return f"{self.download_url}.sha256"
