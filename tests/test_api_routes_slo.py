"""
Test Suite for API Routes - SLO
"""

import pytest
from fastapi import HTTPException

from api.requests import SloReportRequest
from api.routes import slo as slo_route
from config import load_settings
from conftest import FakeSource, availability, latency
from datasources.exceptions import Unreachable


@pytest.fixture
def wire(monkeypatch):
    def install(values, objectives=None):
        source = FakeSource(values)
        monkeypatch.setattr(slo_route, "get_source", lambda: source)
        monkeypatch.setattr(slo_route, "get_settings", lambda: load_settings())
        monkeypatch.setattr(slo_route, "get_objectives", lambda: objectives or [availability(), latency()])
        return source

    return install


@pytest.mark.asyncio
async def test_report_for_declared_objectives(wire):
    wire({"availability": 0.9995, "latency_p95": 0.6})
    res = await slo_route.slo_report(SloReportRequest())
    assert res["passed"] is True
    assert [e["sli"] for e in res["evaluations"]] == ["availability", "latency_p95"]


@pytest.mark.asyncio
async def test_request_objectives_override(wire):
    source = wire({"checkout": 0.5})
    req = SloReportRequest(objectives=[{"name": "checkout", "query": "x", "target": 0.99}])
    res = await slo_route.slo_report(req)
    assert source.calls == ["checkout"]
    assert res["passed"] is False
    assert res["evaluations"][0]["status"] == "breached"


@pytest.mark.asyncio
async def test_measurement_failure_is_502(wire):
    wire({"availability": Unreachable("down", "availability"), "latency_p95": 0.1})
    with pytest.raises(HTTPException) as exc:
        await slo_route.slo_report(SloReportRequest())
    assert exc.value.status_code == 502
    assert "availability" in exc.value.detail


@pytest.mark.asyncio
async def test_invalid_override_is_422(wire):
    wire({})
    req = SloReportRequest(objectives=[
        {"name": "a", "query": "x", "target": 0.9},
        {"name": "a", "query": "y", "target": 0.9},
    ])
    with pytest.raises(HTTPException) as exc:
        await slo_route.slo_report(req)
    assert exc.value.status_code == 422


@pytest.mark.asyncio
async def test_unexpected_error_is_500(wire, monkeypatch):
    wire({})

    def broken():
        raise RuntimeError("settings exploded")

    monkeypatch.setattr(slo_route, "get_settings", broken)
    with pytest.raises(HTTPException) as exc:
        await slo_route.slo_report(SloReportRequest())
    assert exc.value.status_code == 500
