"""Probe event, sink protocol, and the fan-out emitter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from healthwatch.monitor.models import HealthRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeEvent:
    """One line of the probe log, mirroring the stored record."""

    time: datetime
    component: str
    status: str
    endpoint_status: str
    http_result: str
    error: str = ""

    @classmethod
    def from_record(cls, record: HealthRecord) -> ProbeEvent:
        return cls(
            time=record.last_checked,
            component=record.name,
            status=record.status.value,
            endpoint_status=record.endpoint_status.value,
            http_result=record.http_result,
            error=record.error,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "time": self.time.isoformat(),
            "component": self.component,
            "status": self.status,
            "endpoint_status": self.endpoint_status,
            "http_result": self.http_result,
        }
        if self.error:
            data["error"] = self.error
        return data


class EventSink(Protocol):
    """Protocol for consuming probe events."""

    def on_event(self, event: ProbeEvent) -> None: ...


class EventEmitter:
    """Dispatches probe events to sinks. A failing sink is logged, never raised."""

    def __init__(self) -> None:
        self._sinks: list[EventSink] = []

    def add_sink(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    async def emit(self, event: ProbeEvent) -> None:
        for sink in self._sinks:
            try:
                sink.on_event(event)
            except Exception:
                logger.exception("Event sink error for %s", event.component)
