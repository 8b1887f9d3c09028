"""Shared fixtures for healthwatch tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict

import httpx
import pytest
import yaml

from healthwatch.config.models import MonitorConfig
from healthwatch.monitor.models import EndpointStatus, HealthRecord, HealthStatus

SAMPLE_CONFIG: Dict[str, Any] = {
    "components": [
        {"name": "db", "endpoint": "http://db.internal:9001/health"},
        {"name": "cache", "endpoint": "http://cache.internal:9002/health"},
    ],
    "check_interval_seconds": 15,
    "log_directory": "logs",
    "log_retention_days": 3,
    "listen_address": ":8080",
}


@pytest.fixture()
def sample_config(tmp_path: Path) -> MonitorConfig:
    """Return a parsed MonitorConfig whose log directory lives under tmp_path."""
    data = dict(SAMPLE_CONFIG, log_directory=str(tmp_path / "logs"))
    return MonitorConfig(**data)


@pytest.fixture()
def sample_config_dict() -> Dict[str, Any]:
    return dict(SAMPLE_CONFIG)


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    """Write sample config to a temp healthwatch.yaml and return the path."""
    path = tmp_path / "healthwatch.yaml"
    with path.open("w") as fh:
        yaml.dump(SAMPLE_CONFIG, fh)
    return path


def _record(name: str, status: HealthStatus = HealthStatus.OK, error: str = "") -> HealthRecord:
    ok = status is HealthStatus.OK
    return HealthRecord(
        name=name,
        status=status,
        endpoint_status=EndpointStatus.OK if ok else EndpointStatus.NOT_OK,
        http_result="200 OK" if ok else "503 Service Unavailable",
        last_checked=datetime(2026, 10, 17, 12, 0, tzinfo=UTC),
        error=error,
    )


def _mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture()
def make_record() -> Callable[..., HealthRecord]:
    """Factory for HealthRecords with a fixed last_checked timestamp."""
    return _record


@pytest.fixture()
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for AsyncClients whose requests are answered by a handler instead of the network."""
    return _mock_client
