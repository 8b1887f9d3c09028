"""Fixed-delay probe loop running as a background asyncio task."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from healthwatch.config.models import ComponentSpec
from healthwatch.events.emitter import EventEmitter
from healthwatch.monitor.models import HealthRecord
from healthwatch.monitor.prober import probe_component
from healthwatch.monitor.store import StatusStore

logger = logging.getLogger(__name__)


class ProbeScheduler:
    """Probes every component in order, sleeps the interval, repeats.

    The sleep starts only after a cycle finishes, so a slow cycle pushes
    the next one back instead of overlapping it.
    """

    def __init__(
        self,
        components: Sequence[ComponentSpec],
        store: StatusStore,
        interval: float,
        emitter: EventEmitter | None = None,
    ) -> None:
        self._components = list(components)
        self._store = store
        self._interval = interval
        self._emitter = emitter
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_cycle(self, client: httpx.AsyncClient) -> list[HealthRecord]:
        """Probe each component once, sequentially in configured order."""
        records: list[HealthRecord] = []
        for component in self._components:
            try:
                record = await probe_component(component, client, self._store, self._emitter)
            except Exception:
                logger.exception("Probe of %s failed", component.name)
                continue
            records.append(record)
        return records

    async def run_forever(self, client: httpx.AsyncClient) -> None:
        while True:
            await self.run_cycle(client)
            await asyncio.sleep(self._interval)

    def start(self, client: httpx.AsyncClient) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self.run_forever(client), name="healthwatch-probes")
        logger.info(
            "Probe scheduler started: %d components every %gs",
            len(self._components),
            self._interval,
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info("Probe scheduler stopped")
