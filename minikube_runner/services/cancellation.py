"""Cancellation tokens for cooperative cancellation of process runs.

Usage:
    source = CancellationTokenSource()
    source.cancel_after(300)

    await runner.run("minikube", ["start"], token=source.token)

    # from a signal handler or another task
    source.cancel()
"""

import asyncio
from typing import Any, Callable, List, Optional

import structlog

from .interfaces import CancellationToken, Disposable

logger = structlog.get_logger(__name__)


class CallbackDisposable(Disposable):
    """Disposable that runs a function once."""

    def __init__(self, func: Optional[Callable[[], None]] = None):
        self._func = func

    def dispose(self) -> None:
        func, self._func = self._func, None
        if func is not None:
            func()


class SourceToken(CancellationToken):
    """Token handed out by a CancellationTokenSource."""

    def __init__(self, source: "CancellationTokenSource"):
        self._source = source

    @property
    def is_cancellation_requested(self) -> bool:
        return self._source.is_cancelled

    def on_cancellation_requested(self, callback: Callable[[], Any]) -> Disposable:
        return self._source._register(callback)


class CancellationTokenSource:
    """Owner side of a cancellation token.

    Callbacks registered through the token run once, in registration order,
    when ``cancel()`` is called. A callback registered after cancellation
    runs immediately.
    """

    def __init__(self):
        self._cancelled = False
        self._callbacks: List[Callable[[], Any]] = []
        self._timer: Optional[asyncio.TimerHandle] = None
        self.token = SourceToken(self)

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def _register(self, callback: Callable[[], Any]) -> Disposable:
        if self._cancelled:
            callback()
            return CallbackDisposable()

        self._callbacks.append(callback)

        def remove():
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return CallbackDisposable(remove)

    def cancel(self) -> None:
        """Request cancellation and run registered callbacks."""
        if self._cancelled:
            return
        self._cancelled = True
        self._clear_timer()

        callbacks, self._callbacks = self._callbacks, []
        logger.debug("Cancellation requested", callback_count=len(callbacks))
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error("Cancellation callback failed", error=str(e))

    def cancel_after(self, seconds: float) -> None:
        """Schedule cancellation on the running event loop."""
        self._clear_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(seconds, self._on_timeout, seconds)

    def _on_timeout(self, seconds: float) -> None:
        logger.warning("Cancelling after timeout", timeout_seconds=seconds)
        self._timer = None
        self.cancel()

    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def dispose(self) -> None:
        """Drop pending callbacks and timers without cancelling."""
        self._clear_timer()
        self._callbacks = []
