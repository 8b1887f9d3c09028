"""Probe a single component: GET, classify, store, emit."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

import httpx

from healthwatch.config.models import ComponentSpec
from healthwatch.events.emitter import EventEmitter, ProbeEvent
from healthwatch.monitor.classifier import classify
from healthwatch.monitor.models import Classification, HealthRecord
from healthwatch.monitor.store import StatusStore

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 5.0
MAX_BODY_BYTES = 1 << 20


def describe_transport_error(url: str, exc: Exception) -> str:
    """Human-readable text for a failed call, never empty."""
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        detail = f"timeout after {PROBE_TIMEOUT:g}s"
        if str(exc):
            detail = f"{detail} ({exc})"
    else:
        detail = str(exc) or exc.__class__.__name__
    return f"GET {url}: {detail}"


async def _read_capped(resp: httpx.Response) -> bytes:
    body = bytearray()
    async for chunk in resp.aiter_bytes():
        body.extend(chunk)
        if len(body) >= MAX_BODY_BYTES:
            break
    return bytes(body[:MAX_BODY_BYTES])


async def fetch(client: httpx.AsyncClient, url: str) -> Classification:
    """Issue the GET and classify whatever came back.

    Connecting, the headers and the body read share one PROBE_TIMEOUT
    deadline. The response is closed on every path, including when the
    body is cut off at MAX_BODY_BYTES.
    """
    try:
        async with asyncio.timeout(PROBE_TIMEOUT):
            async with client.stream("GET", url, timeout=PROBE_TIMEOUT) as resp:
                body = await _read_capped(resp)
    except Exception as exc:
        return classify(describe_transport_error(url, exc))
    return classify(None, resp.status_code, body)


async def probe_component(
    component: ComponentSpec,
    client: httpx.AsyncClient,
    store: StatusStore,
    emitter: EventEmitter | None = None,
) -> HealthRecord:
    verdict = await fetch(client, component.endpoint)
    record = HealthRecord.from_classification(component.name, verdict, datetime.now(UTC))
    store.update(component.name, record)
    logger.debug("Probe %s: %s (%s)", component.name, record.status.value, record.http_result)
    if emitter is not None:
        await emitter.emit(ProbeEvent.from_record(record))
    return record
