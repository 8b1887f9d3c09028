"""Pydantic models for healthwatch configuration."""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_HOST = "0.0.0.0"


class ComponentSpec(BaseModel):
    """A monitored component and its health endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    endpoint: str

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"endpoint must be an http(s) URL, got {value!r}")
        return value


class MonitorConfig(BaseModel):
    """Root configuration model."""

    components: list[ComponentSpec] = Field(default_factory=list)
    check_interval_seconds: int = Field(default=30, ge=1)
    log_directory: str = "logs"
    log_retention_days: int = Field(default=7, ge=0)  # 0 = keep forever
    listen_address: str = ":8080"

    @model_validator(mode="after")
    def _unique_names(self) -> MonitorConfig:
        seen: set[str] = set()
        for component in self.components:
            if component.name in seen:
                raise ValueError(f"duplicate component name: {component.name!r}")
            seen.add(component.name)
        return self

    @field_validator("listen_address")
    @classmethod
    def _check_listen_address(cls, value: str) -> str:
        parse_listen_address(value)
        return value

    @property
    def bind(self) -> tuple[str, int]:
        return parse_listen_address(self.listen_address)


def parse_listen_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``:port``) into a bind host and port."""
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"listen address must look like 'host:port' or ':port', got {address!r}")
    number = int(port)
    if not 0 < number < 65536:
        raise ValueError(f"listen port out of range: {number}")
    host = host.strip("[]") or DEFAULT_HOST
    return host, number
