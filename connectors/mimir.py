# datasource/connectors/mimir.py

import httpx
from typing import Dict, Optional

from config import DATASOURCE_TIMEOUT
from datasources.base import PrometheusQueryConnector


class MimirConnector(PrometheusQueryConnector):
    query_path = "/prometheus/api/v1/query"
    health_path = "/ready"

    def __init__(
        self,
        base_url: str,
        tenant_id: str,
        timeout: float = DATASOURCE_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, timeout, headers, transport)
        self.tenant_id = tenant_id

    def request_headers(self) -> Dict[str, str]:
        return {**self.headers, "X-Scope-OrgID": self.tenant_id}
