"""Data models for component health records and the aggregate report."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class HealthStatus(str, Enum):
    OK = "ok"
    UNREACHABLE = "unreachable"
    INVALID_RESPONSE = "invalid_response"
    UNKNOWN = "unknown"


class EndpointStatus(str, Enum):
    OK = "ok"
    NOT_OK = "not_ok"


@dataclass(frozen=True)
class Classification:
    """Verdict produced by the classifier for one probe outcome."""

    status: HealthStatus
    endpoint_status: EndpointStatus
    http_result: str
    error: str = ""


@dataclass(frozen=True)
class HealthRecord:
    """Last known health of one component. Replaced whole on every probe."""

    name: str
    status: HealthStatus
    endpoint_status: EndpointStatus
    http_result: str
    last_checked: datetime
    error: str = ""

    @classmethod
    def from_classification(
        cls, name: str, verdict: Classification, checked_at: datetime
    ) -> HealthRecord:
        return cls(
            name=name,
            status=verdict.status,
            endpoint_status=verdict.endpoint_status,
            http_result=verdict.http_result,
            last_checked=checked_at,
            error=verdict.error,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "status": self.status.value,
            "endpoint_status": self.endpoint_status.value,
            "http_result": self.http_result,
            "last_checked": self.last_checked.isoformat(),
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class AggregateReport:
    """Rollup over every known record. Built per request, never stored."""

    status: str
    components: list[HealthRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "components": [c.to_dict() for c in self.components],
        }


def build_report(records: Iterable[HealthRecord]) -> AggregateReport:
    """Aggregate is ``ok`` only when every known record is ``ok`` (vacuously for none)."""
    components = list(records)
    healthy = all(r.status is HealthStatus.OK for r in components)
    return AggregateReport(status="ok" if healthy else "degraded", components=components)
