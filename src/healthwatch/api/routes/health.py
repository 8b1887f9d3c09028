"""Aggregate health report endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from healthwatch.monitor.models import build_report

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_report(request: Request) -> dict[str, Any]:
    """Snapshot the status table and roll it up. Always 200, even when degraded."""
    store = request.app.state.store
    return build_report(store.get_all()).to_dict()
