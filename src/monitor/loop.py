"""Sampling loop — sample, evaluate, alert, log, sleep, repeat."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable

import structlog

from src.core.config import Settings
from src.core.types import CycleResult, ReadingValue
from src.monitor.activity_log import ActivityLog
from src.monitor.dispatcher import AlertDispatcher
from src.monitor.evaluator import ConstraintEvaluator
from src.probes.base import ResourceProbe

logger = structlog.get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class WatchdogLoop:
    """Runs one sampling cycle every ``settings.interval`` seconds.

    :meth:`tick` is a single cycle and holds all the per-cycle logic;
    :meth:`run_forever` only adds start-up pruning and the sleep between
    cycles. No error raised inside a cycle ends the loop.

    Usage::

        loop = WatchdogLoop(settings, probes, evaluator, dispatcher, activity_log)
        await loop.start()
        # ...
        await loop.stop()
    """

    def __init__(
        self,
        settings: Settings,
        probes: dict[str, ResourceProbe],
        evaluator: ConstraintEvaluator,
        dispatcher: AlertDispatcher,
        activity_log: ActivityLog,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._probes = probes
        self._evaluator = evaluator
        self._dispatcher = dispatcher
        self._log = activity_log
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self._running = False
        self._cycle_count = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # ── Single cycle ────────────────────────────────────────────

    async def tick(self) -> CycleResult:
        result = CycleResult()
        planned: list[str] = []

        for name in self._settings.resources:
            if name in planned:
                continue
            if self._evaluator.limit_for(name) is None:
                self._log.log(
                    f'Configuration error: Resource "{name}" has no matching constraint.',
                    level="error",
                )
                result.skipped.append(name)
                continue
            if name not in self._probes:
                self._log.log(
                    f'Configuration error: Resource "{name}" has no probe available.',
                    level="error",
                )
                result.skipped.append(name)
                continue
            planned.append(name)

        values = await asyncio.gather(*(self._sample(name) for name in planned))
        for name, value in zip(planned, values):
            if value is None:
                result.failed.append(name)
            else:
                result.readings[name] = value

        self._log.log(f"Readings: {json.dumps(result.readings)}")

        result.alerts = self._evaluator.evaluate(result.readings)
        if result.alerts:
            result.dispatched = await self._dispatcher.dispatch(result.alerts, result.readings)

        self._cycle_count += 1
        return result

    async def _sample(self, name: str) -> ReadingValue | None:
        probe = self._probes[name]
        try:
            return await probe.sample()
        except Exception as exc:
            logger.debug("probe_failed", resource=name, error_type=type(exc).__name__)
            reason = str(exc) or type(exc).__name__
            self._log.log(f'Probe error: Resource "{name}": {reason}', level="error")
            return None

    # ── Scheduling ──────────────────────────────────────────────

    async def run_forever(self) -> None:
        """Prune old logs once, then tick and sleep until cancelled."""
        self._running = True
        try:
            self._log.log("Resource watchdog started...")
            self._log.prune_old()
        except Exception:
            logger.exception("watchdog_startup_error")

        while self._running:
            try:
                await self.tick()
                self._log.prune_if_new_day()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("watchdog_cycle_error", cycle=self._cycle_count)

            await self._sleep(self._settings.interval)

    async def start(self) -> None:
        """Run :meth:`run_forever` as a background task."""
        if self._task is not None:
            return
        self._running = True
        self._task = asyncio.create_task(self.run_forever())
        self._task.add_done_callback(self._on_task_done)
        logger.info(
            "watchdog_started",
            resources=self._settings.resources,
            interval=self._settings.interval,
        )

    async def serve(self, stop_event: asyncio.Event) -> int:
        """Run until *stop_event* is set or the loop task dies.

        Returns a process exit code: 0 after a requested stop, 1 if the
        loop task ended on its own.
        """
        await self.start()
        assert self._task is not None
        task = self._task
        stop_waiter = asyncio.create_task(stop_event.wait())
        try:
            await asyncio.wait({task, stop_waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop_waiter.cancel()

        failed = task.done() and not stop_event.is_set()
        await self.stop()
        return 1 if failed else 0

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._running = False
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "watchdog_task_failed",
                cycles=self._cycle_count,
                exc_info=exc,
            )

    async def stop(self) -> None:
        """Cancel the background task and release the alert channel."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except Exception:
                # Already reported by _on_task_done.
                pass
            self._task = None
        await self._dispatcher.close()
        logger.info("watchdog_stopped", cycles=self._cycle_count)
