"""
Error budget evaluation for a single SLO against a measured indicator value.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

from engine.enums import Direction, Status
from engine.slo.estimators import DEFAULT_ESTIMATOR, ViolationEstimator
from engine.slo.models import Objective


@dataclass(frozen=True)
class Evaluation:
    objective: Objective
    current_value: float
    error_rate: float
    budget_spent_fraction: float
    budget_left_fraction: float
    burn_rate: float
    status: Status
    projected_exhaustion: Optional[timedelta] = None

    def to_dict(self) -> Dict[str, Any]:
        exhaustion = self.projected_exhaustion
        return {
            "sli": self.objective.name,
            "description": self.objective.label,
            "direction": self.objective.direction.value,
            "current_value": self.current_value,
            "target": self.objective.target,
            "error_budget": self.objective.error_budget,
            "error_rate": self.error_rate,
            "error_budget_spent": self.budget_spent_fraction,
            "error_budget_left": self.budget_left_fraction,
            "burn_rate": self.burn_rate,
            "status": self.status.value,
            "projected_exhaustion_seconds": exhaustion.total_seconds() if exhaustion is not None else None,
        }


def error_rate_for(
    objective: Objective,
    current_value: float,
    estimator: Optional[ViolationEstimator] = None,
) -> float:
    if objective.direction is Direction.higher_is_better:
        # deviation from perfect service, not from the target
        return 1.0 - current_value
    return (estimator or DEFAULT_ESTIMATOR).estimate(objective, current_value)


def evaluate(
    objective: Objective,
    current_value: float,
    window: timedelta,
    estimator: Optional[ViolationEstimator] = None,
) -> Evaluation:
    """Score one objective against a freshly measured value.

    Out-of-domain values are not clamped: an availability above 1.0 yields a
    negative ``budget_spent_fraction`` and is carried as-is.
    """
    error_rate = error_rate_for(objective, current_value, estimator)
    spent = error_rate / objective.error_budget
    burn_rate = spent

    exhaustion: Optional[timedelta] = None
    if burn_rate > 1.0:
        exhaustion = window / burn_rate

    return Evaluation(
        objective=objective,
        current_value=current_value,
        error_rate=error_rate,
        budget_spent_fraction=spent,
        budget_left_fraction=1.0 - spent,
        burn_rate=burn_rate,
        status=Status.from_budget_spent(spent),
        projected_exhaustion=exhaustion,
    )
