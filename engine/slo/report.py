"""
Report assembly over all declared SLOs.

A report is all-or-nothing: if any indicator cannot be measured the whole
report fails, since a skipped SLO would otherwise read as healthy.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Sequence, Tuple

from datasources.exceptions import MeasurementError
from engine.enums import Status
from engine.instrumentation import MetricsSink, NullMetricsSink
from engine.slo.estimators import ViolationEstimator
from engine.slo.evaluator import Evaluation, evaluate
from engine.slo.models import Objective

if TYPE_CHECKING:
    from datasources.base import MetricSource

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportError(Exception):
    def __init__(self, objective: Optional[str], cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.objective = objective
        self.cause = cause
        if message is None:
            message = f"failed to measure objective {objective!r}: {cause}"
        super().__init__(message)


class ReportDeadlineExceeded(ReportError):
    def __init__(self, deadline: float):
        self.deadline = deadline
        super().__init__(None, message=f"report not completed within {deadline}s deadline")


@dataclass(frozen=True)
class Report:
    evaluations: Tuple[Evaluation, ...]
    generated_at: datetime
    window: timedelta

    @property
    def passed(self) -> bool:
        return all(e.status is not Status.breached for e in self.evaluations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at.isoformat(),
            "window_seconds": self.window.total_seconds(),
            "passed": self.passed,
            "evaluations": [e.to_dict() for e in self.evaluations],
        }


def _common_window(objectives: Sequence[Objective]) -> timedelta:
    if not objectives:
        raise ValueError("at least one objective is required")
    windows = {o.indicator.window for o in objectives}
    if len(windows) != 1:
        raise ValueError(f"objectives must share one window, got {sorted(windows)}")
    return windows.pop()


def _first_failed(tasks: Sequence[asyncio.Task]) -> Optional[int]:
    for idx, task in enumerate(tasks):
        if task.done() and not task.cancelled() and task.exception() is not None:
            return idx
    return None


async def _measure_all(
    objectives: Sequence[Objective],
    source: MetricSource,
    max_parallel: int,
    sink: MetricsSink,
) -> Dict[int, float]:
    sem = asyncio.Semaphore(max(1, int(max_parallel)))

    async def _measure(obj: Objective) -> float:
        async with sem:
            started = time.monotonic()
            value = await source.measure(obj.indicator)
            sink.record_measurement(obj.name, time.monotonic() - started)
            return value

    tasks = [asyncio.create_task(_measure(o)) for o in objectives]
    try:
        pending = set(tasks)
        while pending:
            _, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
            failed = _first_failed(tasks)
            if failed is not None:
                # only an earlier objective can still take precedence
                for task in tasks[failed + 1 :]:
                    task.cancel()
                pending = {t for t in tasks[:failed] if not t.done()}
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    failed = _first_failed(tasks)
    if failed is not None:
        obj, exc = objectives[failed], tasks[failed].exception()
        if isinstance(exc, MeasurementError):
            log.warning("measurement objective=%s failed: %s", obj.name, exc)
            sink.record_failure(obj.name, exc)
            raise ReportError(obj.name, exc) from exc
        raise exc
    return {idx: task.result() for idx, task in enumerate(tasks)}


async def build_report(
    objectives: Sequence[Objective],
    source: MetricSource,
    clock: Clock = utc_now,
    *,
    deadline: Optional[float] = None,
    max_parallel: int = 4,
    sink: Optional[MetricsSink] = None,
    estimator: Optional[ViolationEstimator] = None,
) -> Report:
    """Measure and evaluate every objective, in declaration order.

    Measurements run concurrently; failures are reported for the first
    failing objective in declaration order, never by completion order, and
    measurements declared after it are cancelled. With ``deadline`` set,
    the batch is cancelled as a unit once it elapses.
    """
    window = _common_window(objectives)
    sink = sink or NullMetricsSink()

    batch = _measure_all(objectives, source, max_parallel, sink)
    if deadline is None:
        values = await batch
    else:
        try:
            values = await asyncio.wait_for(batch, timeout=deadline)
        except asyncio.TimeoutError as exc:
            log.warning("report deadline of %ss exceeded; discarding partial results", deadline)
            raise ReportDeadlineExceeded(deadline) from exc

    evaluations = []
    for idx in sorted(values):
        ev = evaluate(objectives[idx], values[idx], window, estimator)
        sink.record_evaluation(ev)
        evaluations.append(ev)

    report = Report(evaluations=tuple(evaluations), generated_at=clock(), window=window)
    log.info(
        "report built objectives=%d passed=%s statuses=%s",
        len(evaluations),
        report.passed,
        ",".join(e.status.value for e in evaluations),
    )
    return report
