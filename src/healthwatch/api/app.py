"""FastAPI application factory for healthwatch."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from healthwatch.api.routes import health
from healthwatch.config.models import MonitorConfig
from healthwatch.events.emitter import EventEmitter
from healthwatch.events.sink import JsonLinesSink
from healthwatch.monitor.prober import PROBE_TIMEOUT
from healthwatch.monitor.scheduler import ProbeScheduler
from healthwatch.monitor.store import StatusStore

logger = logging.getLogger(__name__)


def create_app(
    config: MonitorConfig,
    *,
    emitter: EventEmitter | None = None,
    run_scheduler: bool = True,
) -> FastAPI:
    """Wire store, probe log and scheduler onto a new app.

    Without an injected *emitter* the probe log is opened in
    ``config.log_directory``; an unusable directory raises ``OSError``.
    """
    sink: JsonLinesSink | None = None
    if emitter is None:
        sink = JsonLinesSink(config.log_directory)
        emitter = EventEmitter()
        emitter.add_sink(sink)

    store = StatusStore()
    scheduler = ProbeScheduler(
        config.components,
        store,
        interval=config.check_interval_seconds,
        emitter=emitter,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with httpx.AsyncClient(timeout=PROBE_TIMEOUT) as client:
            if run_scheduler:
                scheduler.start(client)
            try:
                yield
            finally:
                await scheduler.stop()
                if sink is not None:
                    sink.close()

    app = FastAPI(
        title="healthwatch",
        version="0.1.0",
        description="Periodic health probes with an aggregate report",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store
    app.state.emitter = emitter
    app.state.scheduler = scheduler

    app.include_router(health.router)
    logger.debug("App created with %d components", len(config.components))
    return app
