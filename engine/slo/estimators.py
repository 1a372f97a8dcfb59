"""
Violation estimators for lower-is-better indicators.

A single latency quantile does not say what fraction of requests missed the
target; that would need bucket-level counts. Estimators turn the scalar into
an error rate so the evaluator's budget and status logic stays independent
of how the estimate is made.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from engine.slo.models import Objective


class ViolationEstimator(Protocol):
    def estimate(self, objective: Objective, current_value: float) -> float: ...


class ExcessRatioEstimator:
    """Conservative estimate from how far the measured value overshoots target.

    ``error_rate = min(cap, (value - target) / target * scaling_factor)``,
    zero when the target is met. Policy constants come from the objective.
    """

    def estimate(self, objective: Objective, current_value: float) -> float:
        target = objective.target
        if current_value <= target:
            return 0.0
        excess_ratio = (current_value - target) / target
        return min(objective.max_violation_cap, excess_ratio * objective.scaling_factor)


DEFAULT_ESTIMATOR: ViolationEstimator = ExcessRatioEstimator()
