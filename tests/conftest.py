"""Pytest configuration and shared fixtures."""

import asyncio
import os
from unittest.mock import MagicMock

import pytest

# Keep the developer's environment out of the settings under test
for _key in list(os.environ):
    if _key.startswith("MINIKUBE_RUNNER_"):
        del os.environ[_key]

from minikube_runner.services.process import Platform, ProcessRunner


class FakeStream:
    """Stand-in for an asyncio StreamReader fed with fixed chunks."""

    def __init__(self, chunks=(), eof: bool = True):
        self._chunks = list(chunks)
        self._eof = asyncio.Event()
        if eof:
            self._eof.set()

    async def read(self, n: int = -1) -> bytes:
        if self._chunks:
            return self._chunks.pop(0)
        await self._eof.wait()
        if self._chunks:
            return self._chunks.pop(0)
        return b""

    def feed_eof(self) -> None:
        self._eof.set()


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process.

    A process created with ``exits=False`` runs until ``kill()`` or
    ``finish()`` is called.
    """

    def __init__(self, stdout=(), stderr=(), returncode: int = 0, exits: bool = True, pid: int = 4242):
        self.pid = pid
        self.stdout = FakeStream(stdout, eof=exits)
        self.stderr = FakeStream(stderr, eof=exits)
        self.returncode = None
        self._final_code = returncode
        self._exited = asyncio.Event()
        if exits:
            self._exited.set()
        self.kill = MagicMock(side_effect=self._on_kill)

    async def wait(self) -> int:
        await self._exited.wait()
        self.returncode = self._final_code
        return self.returncode

    def finish(self, returncode: int = 0) -> None:
        self._final_code = returncode
        self.stdout.feed_eof()
        self.stderr.feed_eof()
        self._exited.set()

    def _on_kill(self) -> None:
        self.finish(-9)


@pytest.fixture
def fake_process():
    """Factory for fake processes."""
    return FakeProcess


@pytest.fixture
def posix_runner():
    """Runner behaving as on macOS."""
    return ProcessRunner(platform=Platform.MAC, termination_grace_seconds=0.2)


@pytest.fixture
def linux_runner():
    """Runner behaving as on Linux."""
    return ProcessRunner(platform=Platform.LINUX, termination_grace_seconds=0.2)


@pytest.fixture
def windows_runner():
    """Runner behaving as on Windows."""
    return ProcessRunner(platform=Platform.WINDOWS, termination_grace_seconds=0.05)


@pytest.fixture
def output_logger():
    """Mock output logger collaborator."""
    return MagicMock(spec=["log", "error", "warn"])


@pytest.fixture
def telemetry():
    """Mock telemetry logger collaborator."""
    return MagicMock(spec=["log_usage", "log_error"])
