"""Probing, classification and the in-memory status table."""

from healthwatch.monitor.classifier import classify
from healthwatch.monitor.models import (
    AggregateReport,
    Classification,
    EndpointStatus,
    HealthRecord,
    HealthStatus,
    build_report,
)
from healthwatch.monitor.prober import PROBE_TIMEOUT, probe_component
from healthwatch.monitor.scheduler import ProbeScheduler
from healthwatch.monitor.store import StatusStore

__all__ = [
    "PROBE_TIMEOUT",
    "AggregateReport",
    "Classification",
    "EndpointStatus",
    "HealthRecord",
    "HealthStatus",
    "ProbeScheduler",
    "StatusStore",
    "build_report",
    "classify",
    "probe_component",
]
