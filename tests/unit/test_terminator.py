"""Unit tests for process termination strategies."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from minikube_runner.models import Success
from minikube_runner.services.process import (
    Platform,
    RunHandle,
    RunState,
    SignalTerminator,
    TaskkillTerminator,
    get_terminator,
)


def running_process(pid: int = 1234):
    process = MagicMock()
    process.pid = pid
    process.returncode = None
    return process


def exited_process(pid: int = 1234, returncode: int = 0):
    process = MagicMock()
    process.pid = pid
    process.returncode = returncode
    return process


class TestGetTerminator:
    """Tests for strategy selection."""

    @pytest.mark.parametrize(
        "platform,expected",
        [
            (Platform.MAC, SignalTerminator),
            (Platform.LINUX, SignalTerminator),
            (Platform.WINDOWS, TaskkillTerminator),
        ],
    )
    def test_selection(self, platform, expected):
        assert isinstance(get_terminator(platform), expected)


class TestSignalTerminator:
    """Tests for signal based termination."""

    @pytest.mark.asyncio
    async def test_kills_running_process(self):
        handle = RunHandle("minikube", running_process())

        await SignalTerminator().terminate(handle)

        handle.process.kill.assert_called_once()
        assert handle.kill_requested is True

    @pytest.mark.asyncio
    async def test_exited_process_is_left_alone(self):
        handle = RunHandle("minikube", exited_process())

        await SignalTerminator().terminate(handle)

        handle.process.kill.assert_not_called()

    @pytest.mark.asyncio
    async def test_process_lookup_error_ignored(self):
        process = running_process()
        process.kill.side_effect = ProcessLookupError()
        handle = RunHandle("minikube", process)

        await SignalTerminator().terminate(handle)

        process.kill.assert_called_once()

    @pytest.mark.asyncio
    async def test_terminate_twice_keeps_outcome(self):
        handle = RunHandle("minikube", exited_process())
        outcome = Success(stdout="done")
        handle.settle(outcome, RunState.EXITED)
        terminator = SignalTerminator()

        await terminator.terminate(handle)
        await terminator.terminate(handle)

        assert handle.outcome is outcome
        assert handle.state == RunState.EXITED
        handle.process.kill.assert_not_called()


class TestTaskkillTerminator:
    """Tests for taskkill based termination."""

    @pytest.mark.asyncio
    async def test_runs_taskkill_for_pid(self):
        handle = RunHandle("minikube", running_process(pid=777))
        taskkill = MagicMock()
        taskkill.wait = AsyncMock(return_value=0)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=taskkill)) as spawn:
            await TaskkillTerminator().terminate(handle)

        assert spawn.call_args.args == ("taskkill", "/pid", "777", "/f", "/t")
        assert spawn.call_args.kwargs["stdout"] == asyncio.subprocess.DEVNULL
        handle.process.kill.assert_not_called()
        assert handle.kill_requested is True

    @pytest.mark.asyncio
    async def test_exited_process_skips_taskkill(self):
        handle = RunHandle("minikube", exited_process())

        with patch("asyncio.create_subprocess_exec", AsyncMock()) as spawn:
            await TaskkillTerminator().terminate(handle)
            await TaskkillTerminator().terminate(handle)

        spawn.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_zero_taskkill_exit_does_not_raise(self):
        handle = RunHandle("minikube", running_process())
        taskkill = MagicMock()
        taskkill.wait = AsyncMock(return_value=128)

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=taskkill)):
            await TaskkillTerminator().terminate(handle)

    @pytest.mark.asyncio
    async def test_missing_taskkill_does_not_raise(self):
        handle = RunHandle("minikube", running_process())

        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("taskkill"))):
            await TaskkillTerminator().terminate(handle)


class TestRunHandle:
    """Tests for single settlement of run handles."""

    def test_first_settle_wins(self):
        handle = RunHandle("minikube", running_process())
        first = Success(stdout="a")

        assert handle.settle(first, RunState.EXITED) is True
        assert handle.settle(Success(stdout="b"), RunState.KILLED) is False
        assert handle.outcome is first
        assert handle.state == RunState.EXITED

    def test_handle_without_process(self):
        handle = RunHandle("minikube")

        assert handle.has_exited is True
        assert handle.pid is None
        assert handle.state == RunState.SPAWN_FAILED
