"""In-memory table of the latest health record per component."""

from __future__ import annotations

import threading

from healthwatch.monitor.models import HealthRecord


class StatusStore:
    """Latest :class:`HealthRecord` per component name.

    Records are immutable and replaced whole under a lock, so a snapshot
    from :meth:`get_all` never holds a half-written record. Records are
    never removed; a component that was never probed is simply absent.
    """

    def __init__(self) -> None:
        self._records: dict[str, HealthRecord] = {}
        self._lock = threading.Lock()

    def update(self, name: str, record: HealthRecord) -> None:
        if record.name != name:
            raise ValueError(f"record for {record.name!r} cannot be stored under {name!r}")
        with self._lock:
            self._records[name] = record

    def get(self, name: str) -> HealthRecord | None:
        with self._lock:
            return self._records.get(name)

    def get_all(self) -> list[HealthRecord]:
        with self._lock:
            return list(self._records.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
