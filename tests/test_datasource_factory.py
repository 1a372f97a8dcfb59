"""
Tests for datasource factory connector construction.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from config import METRICS_BACKEND_MIMIR, METRICS_BACKEND_PROMETHEUS, METRICS_BACKEND_VICTORIAMETRICS
from connectors.mimir import MimirConnector
from connectors.prometheus import PrometheusConnector
from connectors.victoria import VictoriaMetricsConnector
from datasources.factory import DataSourceFactory


def _cfg(backend):
    return SimpleNamespace(
        metrics_backend=backend,
        backend_url="http://metrics:9090/",
        tenant_id="tenant",
        request_timeout=42,
    )


@pytest.mark.parametrize(
    "backend,cls",
    [
        (METRICS_BACKEND_PROMETHEUS, PrometheusConnector),
        (METRICS_BACKEND_MIMIR, MimirConnector),
        (METRICS_BACKEND_VICTORIAMETRICS, VictoriaMetricsConnector),
    ],
)
def test_factory_builds_connector_with_timeout(backend, cls):
    conn = DataSourceFactory.create_metrics(_cfg(backend))
    assert isinstance(conn, cls)
    assert conn.timeout == 42
    assert conn.base_url == "http://metrics:9090"


def test_factory_passes_tenant_to_mimir():
    conn = DataSourceFactory.create_metrics(_cfg(METRICS_BACKEND_MIMIR))
    assert conn.request_headers()["X-Scope-OrgID"] == "tenant"


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError):
        DataSourceFactory.create_metrics(_cfg("graphite"))
