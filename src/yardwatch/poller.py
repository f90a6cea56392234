"""Fixed-cadence live feed poller.

One timer task ticks every ``interval`` seconds. A tick starts a fetch
only when none is in flight; otherwise it is dropped, never queued. Every
run of the poller owns a :class:`CancellationToken`. ``stop`` cancels it,
and the completion path checks it before handing results on, so a fetch
that finishes after ``stop`` changes nothing. Manual cycles from
``run_once`` take the same in-flight slot and token as timer ticks.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationToken:
    """One-way flag shared by a poller run and its fetches."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class LiveFeedPoller(Generic[T]):
    """Periodically call ``fetch`` and pass each result to ``on_result``.

    Parameters
    ----------
    fetch : callable
        Coroutine function returning one cycle's data.
    on_result : callable
        Synchronous completion handler. It is the single writer of
        whatever state the result feeds, and is only called while the
        run that started the fetch is still active.
    interval : float
        Seconds between ticks.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        on_result: Callable[[T], None],
        *,
        interval: float,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._fetch = fetch
        self._on_result = on_result
        self._interval = interval
        self._token = CancellationToken()
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: asyncio.Task[T | None] | None = None
        self.skipped_ticks = 0
        self.failed_cycles = 0
        self.discarded_results = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    def start(self) -> None:
        """Begin ticking; the first tick fires immediately.

        Must be called with a running event loop. Calling ``start`` on a
        running poller does nothing.
        """
        if self.is_running:
            return
        self._timer = asyncio.get_running_loop().create_task(self._run(self._token), name="yardwatch-poll-timer")
        _logger.debug("Poller started (interval=%.1fs)", self._interval)

    def stop(self) -> None:
        """Stop ticking and discard every fetch still in flight.

        This covers timer ticks and ``run_once`` alike. The poller can be
        started or run again afterwards with a fresh token.
        """
        self._token.cancel()
        self._token = CancellationToken()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            _logger.debug("Poller stopped")

    def tick(self) -> bool:
        """Start one fetch now unless one is in flight.

        Returns ``True`` if a fetch was started. Ticks on a stopped poller
        are ignored.
        """
        if not self.is_running:
            return False
        if self.in_flight:
            self.skipped_ticks += 1
            _logger.debug("Previous fetch still running; dropping tick")
            return False
        self._in_flight = asyncio.get_running_loop().create_task(
            self._cycle(self._token, propagate=False), name="yardwatch-poll-fetch"
        )
        return True

    async def run_once(self) -> T | None:
        """Run one cycle now and wait for it.

        Waits for any fetch already in flight, then takes the same slot,
        so manual and timer cycles never overlap or apply out of order.
        Errors from ``fetch`` and ``on_result`` propagate. Returns the
        applied result, or ``None`` if ``stop`` was called meanwhile.
        """
        token = self._token
        while self.in_flight:
            await self.wait_idle()
        if token.cancelled:
            return None
        task = asyncio.get_running_loop().create_task(
            self._cycle(token, propagate=True), name="yardwatch-poll-manual"
        )
        self._in_flight = task
        return await asyncio.shield(task)

    async def wait_idle(self) -> None:
        """Wait until no fetch is in flight. Never raises the fetch's error."""
        task = self._in_flight
        if task is not None and not task.done():
            await asyncio.wait({task})

    async def _run(self, token: CancellationToken) -> None:
        while not token.cancelled:
            self.tick()
            await asyncio.sleep(self._interval)

    async def _cycle(self, token: CancellationToken, *, propagate: bool) -> T | None:
        try:
            result = await self._fetch()
        except Exception as exc:
            if propagate:
                raise
            self.failed_cycles += 1
            _logger.warning("Live feed fetch failed: %s", exc)
            _logger.debug("Live feed fetch failure detail", exc_info=True)
            return None

        if token.cancelled:
            self.discarded_results += 1
            _logger.debug("Poller stopped during fetch; discarding result")
            return None

        if propagate:
            self._on_result(result)
            return result
        try:
            self._on_result(result)
        except Exception:
            self.failed_cycles += 1
            _logger.warning("Live feed result handler failed", exc_info=True)
            return None
        return result
