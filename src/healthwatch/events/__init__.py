"""Probe event log for healthwatch."""

from __future__ import annotations

from healthwatch.events.emitter import EventEmitter, EventSink, ProbeEvent
from healthwatch.events.sink import JsonLinesSink, cleanup_logs

__all__ = [
    "EventEmitter",
    "EventSink",
    "JsonLinesSink",
    "ProbeEvent",
    "cleanup_logs",
]
