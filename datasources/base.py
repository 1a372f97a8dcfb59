"""
Base metric source and shared connector plumbing

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from config import DATASOURCE_TIMEOUT
from datasources.helpers import fetch_json, parse_instant_value, render_query

if TYPE_CHECKING:
    from engine.slo.models import Indicator

log = logging.getLogger(__name__)


class MetricSource(ABC):
    """Current value of an indicator over its window.

    Implementations issue one backend request per call and neither retry nor
    cache; wrap a source to add either.
    """

    @abstractmethod
    async def measure(self, indicator: Indicator) -> float: ...


class PrometheusQueryConnector(MetricSource):
    """Instant queries against a Prometheus-compatible HTTP API."""

    query_path: str = "/api/v1/query"
    health_path: str = ""

    def __init__(
        self,
        base_url: str,
        timeout: float = DATASOURCE_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = str(base_url).rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport

    @property
    def query_url(self) -> str:
        return f"{self.base_url}{self.query_path}"

    @property
    def health_url(self) -> str:
        if not self.health_path:
            raise NotImplementedError("connector must define health_path")
        return f"{self.base_url}{self.health_path}"

    def request_headers(self) -> Dict[str, str]:
        """Basic header set applied to every outbound request."""
        return dict(self.headers)

    async def query(self, query: str, indicator: Optional[str] = None) -> Dict[str, Any]:
        return await fetch_json(
            self.query_url,
            params={"query": query},
            headers=self.request_headers(),
            timeout=self.timeout,
            transport=self.transport,
            indicator=indicator,
        )

    async def measure(self, indicator: Indicator) -> float:
        query = render_query(indicator.query, indicator.window)
        log.debug("measure indicator=%s query=%s", indicator.name, query)
        body = await self.query(query, indicator=indicator.name)
        value = parse_instant_value(body, indicator=indicator.name)
        log.debug("measure indicator=%s value=%s", indicator.name, value)
        return value
