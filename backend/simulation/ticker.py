"""Fixed-interval driver for the tick orchestrator."""

import asyncio
import logging

from core.snapshot import FacilitySnapshot
from simulation.orchestrator import TickOrchestrator

logger = logging.getLogger(__name__)


class Ticker:
    """Runs one tick, then sleeps the configured interval, forever.

    Ticks are synchronous, so a tick is never interrupted: ``stop`` can only
    cancel the sleep between two ticks.

    A tick that raises is logged and waiters are still woken, so the next
    scheduled tick runs as usual.
    """

    def __init__(self, orchestrator: TickOrchestrator, interval_s: float | None = None) -> None:
        self.orchestrator = orchestrator
        self.interval_s = interval_s if interval_s is not None else orchestrator.config.tick_interval_s
        self._task: asyncio.Task[None] | None = None
        self._tick_event = asyncio.Event()
        self.failed_ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="facility-ticker")
        logger.info("Ticker started, interval %.1fs", self.interval_s)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Ticker task had already failed")
        self._task = None
        logger.info("Ticker stopped after tick %d", self.orchestrator.state.tick)

    async def wait_for_tick(self) -> FacilitySnapshot:
        """Block until the next tick completes, then return its snapshot."""
        await self._tick_event.wait()
        return self.orchestrator.snapshot()

    async def _run(self) -> None:
        while True:
            try:
                self.orchestrator.tick()
            except Exception:
                self.failed_ticks += 1
                logger.exception("Tick failed, retrying in %.1fs", self.interval_s)
            # Wake current waiters and hand later ones a fresh event.
            event, self._tick_event = self._tick_event, asyncio.Event()
            event.set()
            await asyncio.sleep(self.interval_s)
