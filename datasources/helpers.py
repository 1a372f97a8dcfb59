"""
Shared helper functions for data source connectors.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Any, Dict, Optional

import httpx

from datasources.exceptions import (
    BackendRejected,
    MalformedResponse,
    NoData,
    Unreachable,
)

_DURATION_UNITS = (
    ("d", 86400_000),
    ("h", 3600_000),
    ("m", 60_000),
    ("s", 1000),
    ("ms", 1),
)


def prom_duration(window: timedelta) -> str:
    """Render a timedelta as a Prometheus range duration, e.g. ``30d``."""
    total_ms = int(round(window.total_seconds() * 1000))
    if total_ms <= 0:
        raise ValueError(f"window must be positive, got {window}")
    for suffix, unit_ms in _DURATION_UNITS:
        if total_ms % unit_ms == 0:
            return f"{total_ms // unit_ms}{suffix}"
    return f"{total_ms}ms"


def render_query(query: str, window: timedelta) -> str:
    # PromQL label matchers use braces, so str.format is not safe here
    return query.replace("{window}", prom_duration(window))


async def fetch_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    indicator: Optional[str] = None,
) -> Dict[str, Any]:
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url, params=params, headers=headers)
            resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise BackendRejected(
            f"backend returned status {e.response.status_code}: {e.response.text[:200]}",
            status=e.response.status_code,
            indicator=indicator,
        ) from e
    except httpx.TimeoutException as e:
        raise Unreachable(f"query to {url} timed out after {timeout}s", indicator) from e
    except httpx.RequestError as e:
        raise Unreachable(f"cannot reach metrics backend at {url}: {e}", indicator) from e

    try:
        body = resp.json()
    except ValueError as e:
        raise MalformedResponse("response body is not JSON", indicator) from e
    if not isinstance(body, dict):
        raise MalformedResponse(f"expected a JSON object, got {type(body).__name__}", indicator)
    return body


def parse_instant_value(body: Dict[str, Any], indicator: Optional[str] = None) -> float:
    """Extract the first sample of an instant-query response as a float.

    Only bodies of successful HTTP responses reach this point, so a
    body-level ``"status": "error"`` is reported as ``BackendRejected``
    with status 200. ``NaN`` is reported as :class:`NoData`: Prometheus
    yields it for ratios computed over a window with no traffic.
    """
    status = body.get("status")
    if status != "success":
        detail = body.get("error") or status
        raise BackendRejected(f"query failed: {detail}", status=200, indicator=indicator)

    data = body.get("data")
    if not isinstance(data, dict) or not isinstance(data.get("result"), list):
        raise MalformedResponse("missing data.result in response", indicator)

    result = data["result"]
    if not result:
        raise NoData("no data returned from query", indicator)

    first = result[0]
    value = first.get("value") if isinstance(first, dict) else None
    if not isinstance(value, (list, tuple)) or len(value) < 2 or not isinstance(value[1], str):
        raise MalformedResponse(f"invalid value format: {value!r}", indicator)

    try:
        parsed = float(value[1])
    except ValueError as e:
        raise MalformedResponse(f"failed to parse value {value[1]!r}", indicator) from e

    if math.isnan(parsed):
        raise NoData("query returned NaN", indicator)
    if math.isinf(parsed):
        raise MalformedResponse(f"query returned non-finite value {value[1]!r}", indicator)
    return parsed
