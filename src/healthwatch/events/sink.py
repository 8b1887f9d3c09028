"""Daily JSON-lines probe log and its retention cleanup."""

from __future__ import annotations

import json
import logging
import threading
from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from typing import IO

from healthwatch.events.emitter import ProbeEvent

logger = logging.getLogger(__name__)


def log_path_for(directory: Path, day: date) -> Path:
    return directory / f"{day.isoformat()}.log"


class JsonLinesSink:
    """Appends one JSON object per probe to ``<directory>/<YYYY-MM-DD>.log``.

    The file is opened eagerly so an unusable directory fails at startup
    with :class:`OSError`. Implements the EventSink protocol.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._day = datetime.now(UTC).date()
        self._fh: IO[str] | None = self._open(self._day)

    @property
    def current_path(self) -> Path:
        return log_path_for(self._directory, self._day)

    def _open(self, day: date) -> IO[str]:
        return log_path_for(self._directory, day).open("a", encoding="utf-8")

    def on_event(self, event: ProbeEvent) -> None:
        line = json.dumps(event.to_dict(), separators=(",", ":"))
        day = event.time.astimezone(UTC).date()
        with self._lock:
            if self._fh is None or day != self._day:
                if self._fh is not None:
                    self._fh.close()
                self._day = day
                self._fh = self._open(day)
            self._fh.write(line + "\n")
            self._fh.flush()

    def close(self) -> None:
        with self._lock:
            if self._fh is not None:
                self._fh.close()
                self._fh = None


def cleanup_logs(
    directory: str | Path,
    retention_days: int,
    now: datetime | None = None,
) -> list[Path]:
    """Delete regular files older than *retention_days*. Returns what was removed."""
    if retention_days <= 0:
        return []
    cutoff = (now or datetime.now(UTC)) - timedelta(days=retention_days)
    removed: list[Path] = []
    try:
        entries = list(Path(directory).iterdir())
    except OSError as exc:
        logger.warning("Failed to read log dir %s: %s", directory, exc)
        return removed
    for entry in entries:
        try:
            if not entry.is_file():
                continue
            mtime = datetime.fromtimestamp(entry.stat().st_mtime, UTC)
            if mtime < cutoff:
                entry.unlink()
                removed.append(entry)
        except OSError as exc:
            logger.warning("Could not remove old log %s: %s", entry, exc)
    if removed:
        logger.info("Removed %d log file(s) older than %d days", len(removed), retention_days)
    return removed
