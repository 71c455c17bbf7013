"""Periodic capture driver.

Runs capture cycles strictly one after another: acquire a fix, record it,
wait ``logging_interval_minutes``, repeat.  Cadence is best effort; the
wait starts after the previous cycle finishes.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime

from pycubetrack.acquisition import FixSource, acquire_single_fix
from pycubetrack.capture import CaptureResult, capture_observation
from pycubetrack.config import TrackerConfig
from pycubetrack.exceptions import MissingFixError
from pycubetrack.models._base import utcnow
from pycubetrack.models.fix import GeographicFix
from pycubetrack.store.store import ObservationStore

_logger = logging.getLogger(__name__)


class CaptureRunner:
    """Drive capture cycles against one store.

    Usage::

        runner = CaptureRunner(TrackerConfig.from_env(), source)
        task = asyncio.create_task(runner.run())
        ...
        runner.stop()
        await task
    """

    def __init__(
        self,
        config: TrackerConfig,
        source: FixSource,
        *,
        store: ObservationStore | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._config = config
        self._source = source
        self._store = store or ObservationStore(config.store_path, atomic_writes=config.atomic_writes)
        self._clock = clock
        self._stop_event = asyncio.Event()
        self._cycles = 0

    @property
    def store(self) -> ObservationStore:
        return self._store

    @property
    def cycles(self) -> int:
        """Number of cycles run so far, including skipped and failed ones."""
        return self._cycles

    async def run_cycle(self) -> CaptureResult | None:
        """Acquire one fix and record it.  Never raises pycubetrack errors."""
        fix: GeographicFix | None
        try:
            fix = await acquire_single_fix(self._source, timeout=self._config.fix_timeout)
        except MissingFixError:
            fix = None

        self._cycles += 1
        # File I/O is blocking; keep it off the event loop.
        return await asyncio.to_thread(capture_observation, fix, store=self._store, clock=self._clock)

    async def run(self, max_cycles: int | None = None) -> None:
        """Run cycles until :meth:`stop` is called or *max_cycles* complete."""
        completed = 0
        _logger.debug("Capture runner started store=%s", self._store.path)
        while not self._stop_event.is_set():
            await self.run_cycle()
            completed += 1
            if max_cycles is not None and completed >= max_cycles:
                break
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._stop_event.wait(), self._config.logging_interval_seconds)
        _logger.debug("Capture runner stopped after %d cycles", completed)

    def stop(self) -> None:
        self._stop_event.set()
