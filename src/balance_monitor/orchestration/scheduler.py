"""
Round Scheduler
===============

Drives sampling rounds on a fixed interval. Each tick launches one round as an
independent asyncio task; the scheduler does not wait for it. With the default
``concurrent`` policy rounds may overlap without bound and their writes may
reach the sink out of order. The ``skip`` policy drops a tick while an earlier
round is still running.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

from balance_monitor.config.state import OverlapPolicy
from balance_monitor.infrastructure.observability import get_pipeline_logger

RoundFactory = Callable[[], Awaitable[Any]]


class Scheduler:
    """Fixed-interval, fire-and-forget round launcher."""

    def __init__(
        self,
        round_factory: RoundFactory,
        interval: timedelta | float,
        overlap_policy: OverlapPolicy = OverlapPolicy.CONCURRENT,
    ):
        seconds = interval.total_seconds() if isinstance(interval, timedelta) else float(interval)
        if seconds <= 0:
            raise ValueError(f"Scheduler interval must be positive, got {seconds}")

        self.round_factory = round_factory
        self.interval = seconds
        self.overlap_policy = OverlapPolicy(overlap_policy)
        self._in_flight: set[asyncio.Task] = set()
        self._stop_event = asyncio.Event()
        self._launched = 0
        self._log = get_pipeline_logger(
            "scheduler", interval_seconds=seconds, overlap_policy=self.overlap_policy.value
        )

    @property
    def in_flight(self) -> int:
        """Number of rounds currently running."""
        return len(self._in_flight)

    @property
    def launched(self) -> int:
        """Number of rounds launched since construction."""
        return self._launched

    async def run(self, max_ticks: int | None = None) -> int:
        """
        Tick until stopped (or until ``max_ticks`` ticks have fired).

        The first tick fires one interval after start.

        Returns:
            Number of rounds launched by this call
        """
        loop = asyncio.get_running_loop()
        self._stop_event.clear()
        launched_before = self._launched
        ticks = 0
        next_tick = loop.time() + self.interval

        self._log.info("scheduler_started")
        while max_ticks is None or ticks < max_ticks:
            delay = max(0.0, next_tick - loop.time())
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
                break
            except asyncio.TimeoutError:
                pass

            ticks += 1
            now = loop.time()
            next_tick += self.interval
            if next_tick <= now:
                # fell behind by more than one interval: drop the missed ticks
                next_tick = now + self.interval

            if self.overlap_policy is OverlapPolicy.SKIP and self._in_flight:
                self._log.warning("tick_skipped", tick=ticks, in_flight=len(self._in_flight))
                continue

            self._launch()

        launched = self._launched - launched_before
        self._log.info("scheduler_stopped", ticks=ticks, launched=launched)
        return launched

    def stop(self) -> None:
        """Stop ticking. Rounds already in flight keep running."""
        self._stop_event.set()

    async def drain(self) -> None:
        """Wait for every in-flight round to finish."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def shutdown(self, timeout: float | None = None) -> None:
        """Stop ticking, give in-flight rounds ``timeout`` seconds, cancel the rest."""
        self.stop()
        if not self._in_flight:
            return
        pending = list(self._in_flight)
        _, still_running = await asyncio.wait(pending, timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            self._log.warning("rounds_cancelled", count=len(still_running))
            await asyncio.gather(*still_running, return_exceptions=True)

    def _launch(self) -> None:
        self._launched += 1
        task = asyncio.create_task(self.round_factory(), name=f"round-{self._launched}")
        self._in_flight.add(task)
        task.add_done_callback(self._on_round_done)
        self._log.debug("round_launched", in_flight=len(self._in_flight))

    def _on_round_done(self, task: asyncio.Task) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log.error(
                "round_task_error",
                task=task.get_name(),
                error_type=type(exc).__name__,
                error=str(exc),
            )
