"""
Self-instrumentation hooks for report generation.

Sinks are passed to the report assembler explicitly rather than living in a
process-wide registry, so evaluation can be tested without one.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datasources.exceptions import MeasurementError
    from engine.slo.evaluator import Evaluation

log = logging.getLogger(__name__)


class MetricsSink(Protocol):
    def record_measurement(self, objective: str, seconds: float) -> None: ...

    def record_failure(self, objective: str, error: MeasurementError) -> None: ...

    def record_evaluation(self, evaluation: Evaluation) -> None: ...


class NullMetricsSink:
    def record_measurement(self, objective: str, seconds: float) -> None:
        pass

    def record_failure(self, objective: str, error: MeasurementError) -> None:
        pass

    def record_evaluation(self, evaluation: Evaluation) -> None:
        pass


class LoggingMetricsSink:
    """Emits each observation as a debug log line."""

    def record_measurement(self, objective: str, seconds: float) -> None:
        log.debug("measurement objective=%s duration=%.3fs", objective, seconds)

    def record_failure(self, objective: str, error: MeasurementError) -> None:
        log.debug("measurement objective=%s failed kind=%s", objective, type(error).__name__)

    def record_evaluation(self, evaluation: Evaluation) -> None:
        log.debug(
            "evaluation objective=%s status=%s burn_rate=%.3f",
            evaluation.objective.name,
            evaluation.status.value,
            evaluation.burn_rate,
        )
