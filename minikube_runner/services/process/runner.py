"""Process runner - spawns a CLI process and supervises it to a single outcome."""

import asyncio
import os
import subprocess
from typing import Any, Dict, Optional, Sequence

import structlog

from ...config import settings
from ...models import Cancelled, CommandSpec, Failure, RunOutcome, SpawnFailed, Success
from ..interfaces import CancellationToken
from .handle import RunHandle, RunState
from .paths import Platform, current_platform, quote_for_platform
from .sinks import AccumulatingSink, pump, sinks_for
from .terminator import ProcessTerminator, get_terminator

logger = structlog.get_logger(__name__)


class ProcessRunner:
    """Runs external commands with output streaming and cancellation.

    Each call to ``run`` owns one OS process. stdout and stderr are read
    incrementally; every chunk is accumulated for the returned outcome and
    forwarded to the caller's output logger. A cancellation token, when
    given, races against process exit and the first terminal event decides
    the outcome.
    """

    def __init__(
        self,
        platform: Optional[Platform] = None,
        terminator: Optional[ProcessTerminator] = None,
        chunk_size: Optional[int] = None,
        termination_grace_seconds: Optional[float] = None,
    ):
        """Initialize the runner.

        Args:
            platform: Target platform (defaults to the current one)
            terminator: Termination strategy (defaults to the platform's)
            chunk_size: Bytes read per stream iteration
            termination_grace_seconds: Time to wait for exit after a kill
        """
        self.platform = platform or current_platform()
        self.terminator = terminator or get_terminator(self.platform)
        self.chunk_size = chunk_size or settings.output_chunk_size
        self.termination_grace_seconds = (
            settings.termination_grace_seconds if termination_grace_seconds is None else termination_grace_seconds
        )

    async def run(
        self,
        command: str,
        args: Sequence[Any] = (),
        env: Optional[Dict[str, str]] = None,
        output_logger: Optional[Any] = None,
        token: Optional[CancellationToken] = None,
        cwd: Optional[str] = None,
    ) -> RunOutcome:
        """Run a command to completion.

        Args:
            command: Executable name or path
            args: Command arguments
            env: Environment overrides merged over the process environment
            output_logger: Output logger receiving stdout (log) and stderr (error) chunks
            token: Optional cancellation token
            cwd: Working directory

        Returns:
            Success, Failure, Cancelled or SpawnFailed
        """
        args = [str(arg) for arg in args]

        if token is not None and token.is_cancellation_requested:
            logger.info("Cancellation requested before spawn", command=command)
            return Cancelled()

        try:
            process = await self._spawn(command, args, env, cwd)
        except OSError as e:
            logger.warning("Failed to start process", command=command, error=str(e))
            return SpawnFailed(e)

        handle = RunHandle(command, process)
        logger.debug("Started process", run_id=handle.run_id, command=command, args=args, pid=handle.pid)

        stdout = AccumulatingSink()
        stderr = AccumulatingSink()
        exit_task = asyncio.ensure_future(self._wait_for_exit(handle, stdout, stderr, output_logger))

        try:
            if token is None:
                await asyncio.wait({exit_task})
                return self._settle_exit(handle, exit_task, stdout, stderr)
            return await self._supervise(handle, exit_task, token, stdout, stderr)
        except asyncio.CancelledError:
            # The awaiting task was cancelled; the process must not outlive it
            if not handle.has_exited:
                await self.terminator.terminate(handle)
            exit_task.cancel()
            raise

    async def execute(
        self,
        command: str,
        args: Sequence[Any] = (),
        env: Optional[Dict[str, str]] = None,
        output_logger: Optional[Any] = None,
        token: Optional[CancellationToken] = None,
        cwd: Optional[str] = None,
    ) -> Success:
        """Run a command and raise unless it succeeded.

        Raises:
            SpawnError, ExecutionFailure or ExecutionCancelled
        """
        outcome = await self.run(command, args, env=env, output_logger=output_logger, token=token, cwd=cwd)
        return outcome.raise_for_status(command)

    async def run_spec(
        self,
        spec: CommandSpec,
        output_logger: Optional[Any] = None,
        token: Optional[CancellationToken] = None,
    ) -> RunOutcome:
        """Run a CommandSpec."""
        return await self.run(
            spec.executable,
            spec.arguments,
            env=dict(spec.environment),
            output_logger=output_logger,
            token=token,
            cwd=spec.working_directory,
        )

    async def _spawn(self, command: str, args: list[str], env: Optional[Dict[str, str]], cwd: Optional[str]):
        environment = {**os.environ, **(env or {})}

        if self.platform == Platform.WINDOWS:
            command_line = " ".join([quote_for_platform(command, self.platform), subprocess.list2cmdline(args)])
            return await asyncio.create_subprocess_shell(
                command_line.strip(),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=environment,
                cwd=cwd,
            )

        return await asyncio.create_subprocess_exec(
            command,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=environment,
            cwd=cwd,
        )

    async def _wait_for_exit(
        self,
        handle: RunHandle,
        stdout: AccumulatingSink,
        stderr: AccumulatingSink,
        output_logger: Optional[Any],
    ) -> int:
        process = handle.process
        await asyncio.gather(
            pump(process.stdout, sinks_for(stdout, output_logger, "log"), self.chunk_size),
            pump(process.stderr, sinks_for(stderr, output_logger, "error"), self.chunk_size),
        )
        return await process.wait()

    async def _supervise(
        self,
        handle: RunHandle,
        exit_task: asyncio.Future,
        token: CancellationToken,
        stdout: AccumulatingSink,
        stderr: AccumulatingSink,
    ) -> RunOutcome:
        loop = asyncio.get_running_loop()
        cancel_requested = asyncio.Event()

        def on_cancel():
            # Tokens may fire from other threads
            if not loop.is_closed():
                loop.call_soon_threadsafe(cancel_requested.set)

        registration = token.on_cancellation_requested(on_cancel)
        cancel_task = asyncio.ensure_future(cancel_requested.wait())
        try:
            done, _ = await asyncio.wait({exit_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
            if exit_task in done:
                return self._settle_exit(handle, exit_task, stdout, stderr)
            return await self._cancel(handle, exit_task)
        finally:
            cancel_task.cancel()
            dispose = getattr(registration, "dispose", None)
            if callable(dispose):
                dispose()

    def _settle_exit(
        self,
        handle: RunHandle,
        exit_task: asyncio.Future,
        stdout: AccumulatingSink,
        stderr: AccumulatingSink,
    ) -> RunOutcome:
        exit_code = exit_task.result()
        if exit_code == 0:
            outcome = Success(stdout=stdout.getvalue(), stderr=stderr.getvalue())
        else:
            outcome = Failure(exit_code=exit_code, stdout=stdout.getvalue(), stderr=stderr.getvalue())

        if handle.settle(outcome, RunState.EXITED):
            logger.debug("Process exited", run_id=handle.run_id, command=handle.command, exit_code=exit_code)
        return handle.outcome

    async def _cancel(self, handle: RunHandle, exit_task: asyncio.Future) -> RunOutcome:
        handle.settle(Cancelled(), RunState.KILLED)
        logger.info("Cancelling execution", run_id=handle.run_id, command=handle.command, pid=handle.pid)

        await self.terminator.terminate(handle)

        done, _ = await asyncio.wait({exit_task}, timeout=self.termination_grace_seconds)
        if not done:
            logger.warning(
                "Process exit not confirmed after termination",
                run_id=handle.run_id,
                pid=handle.pid,
                grace_seconds=self.termination_grace_seconds,
            )
            exit_task.cancel()
            self._release(handle)
        elif not exit_task.cancelled() and exit_task.exception() is not None:
            logger.debug("Output reader failed after termination", run_id=handle.run_id, error=str(exit_task.exception()))
        return handle.outcome

    def _release(self, handle: RunHandle) -> None:
        """Close the pipes of a process that outlived its termination.

        Closing the subprocess transport kills a child that is still running
        and lets the event loop reap it once it exits.
        """
        transport = getattr(handle.process, "_transport", None)
        if transport is None:
            return
        try:
            transport.close()
        except Exception as e:
            logger.warning("Failed to close process transport", run_id=handle.run_id, error=str(e))


_default_runner: Optional[ProcessRunner] = None


def get_process_runner() -> ProcessRunner:
    """Get the shared runner for the current platform."""
    global _default_runner
    if _default_runner is None:
        _default_runner = ProcessRunner()
    return _default_runner


async def run_cli_command(
    command: str,
    args: Sequence[Any] = (),
    env: Optional[Dict[str, str]] = None,
    output_logger: Optional[Any] = None,
    token: Optional[CancellationToken] = None,
) -> Success:
    """Run a command with the shared runner and raise unless it succeeded."""
    return await get_process_runner().execute(command, args, env=env, output_logger=output_logger, token=token)
