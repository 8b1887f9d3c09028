"""Maps the outcome of one health-endpoint call to a verdict.

Components report health in different ways: a JSON ``{"status": "ok"}``
document, a plain-text body, or just a bare 200. The rule, in order:

1. transport failure -> ``unreachable``; the error text is both the
   ``http_result`` and the ``error``.
2. JSON object whose ``status`` is exactly ``"ok"`` -> ``ok``.
3. HTTP 200 -> ``ok`` whatever the body says.
4. anything else -> ``invalid_response`` carrying the body parse error.

Rule 3 accepts every 200, so empty and plain-text "ok" bodies need no
separate check.
"""

from __future__ import annotations

import json

import httpx

from healthwatch.monitor.models import Classification, EndpointStatus, HealthStatus


def status_line(status_code: int) -> str:
    """Render ``200`` as ``"200 OK"``; unknown codes render as the bare number."""
    reason = httpx.codes.get_reason_phrase(status_code)
    return f"{status_code} {reason}" if reason else str(status_code)


def parse_status_field(body: bytes | str) -> tuple[str | None, str]:
    """Return ``(status, error)`` from a JSON health document.

    Never raises: a body that is not JSON, not an object, or has no
    ``status`` field yields ``(None, <reason>)``.
    """
    try:
        document = json.loads(body)
    except (ValueError, RecursionError) as exc:
        return None, str(exc) or exc.__class__.__name__
    if not isinstance(document, dict):
        return None, "response body is not a JSON object"
    if "status" not in document:
        return None, 'response body has no "status" field'
    value = document["status"]
    if value == "ok":
        return value, ""
    return None, f"unexpected status value: {value!r}"


def classify(
    transport_error: str | None,
    status_code: int | None = None,
    body: bytes | str = b"",
) -> Classification:
    if transport_error is not None:
        message = transport_error or "transport error"
        return Classification(
            status=HealthStatus.UNREACHABLE,
            endpoint_status=EndpointStatus.NOT_OK,
            http_result=message,
            error=message,
        )

    code = status_code if status_code is not None else 0
    http_result = status_line(code)
    reported, parse_error = parse_status_field(body)
    if reported == "ok" or code == 200:
        return Classification(
            status=HealthStatus.OK,
            endpoint_status=EndpointStatus.OK,
            http_result=http_result,
        )
    return Classification(
        status=HealthStatus.INVALID_RESPONSE,
        endpoint_status=EndpointStatus.NOT_OK,
        http_result=http_result,
        error=parse_error,
    )
