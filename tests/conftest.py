import asyncio
import os
import sys
from datetime import timedelta
from typing import Dict, Optional

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from datasources.base import MetricSource
from engine.enums import Direction
from engine.slo.models import Indicator, Objective

WINDOW = timedelta(days=30)


class FakeSource(MetricSource):
    """In-memory metric source keyed by indicator name.

    ``values`` entries may be floats or exceptions to raise; ``delays`` holds
    per-indicator sleeps so completion order can differ from declaration order.
    """

    def __init__(self, values: Dict[str, object], delays: Optional[Dict[str, float]] = None):
        self.values = values
        self.delays = delays or {}
        self.calls: list[str] = []
        self.completed: list[str] = []

    async def measure(self, indicator: Indicator) -> float:
        self.calls.append(indicator.name)
        delay = self.delays.get(indicator.name, 0.0)
        if delay:
            await asyncio.sleep(delay)
        value = self.values[indicator.name]
        self.completed.append(indicator.name)
        if isinstance(value, BaseException):
            raise value
        return value


def availability(target: float = 0.999, name: str = "availability", window: timedelta = WINDOW) -> Objective:
    return Objective(
        indicator=Indicator(name=name, query="sum(rate(ok[{window}])) / sum(rate(all[{window}]))", window=window),
        target=target,
        direction=Direction.higher_is_better,
        description="Availability",
    )


def latency(
    target: float = 0.5,
    error_budget: float = 0.05,
    scaling_factor: float = 0.1,
    name: str = "latency_p95",
    window: timedelta = WINDOW,
) -> Objective:
    return Objective(
        indicator=Indicator(name=name, query="histogram_quantile(0.95, rate(h[{window}]))", window=window),
        target=target,
        direction=Direction.lower_is_better,
        error_budget=error_budget,
        scaling_factor=scaling_factor,
        description="Latency (p95)",
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("SLO_REPORTER_"):
            monkeypatch.delenv(key, raising=False)
