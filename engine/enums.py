"""
Enumerations for SLO status and indicator direction

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import (
    BUDGET_BREACH_THRESHOLD,
    BUDGET_WARNING_THRESHOLD,
    DIRECTION_HIGHER_IS_BETTER,
    DIRECTION_LOWER_IS_BETTER,
)


class Status(str, Enum):
    healthy = "healthy"
    warning = "warning"
    breached = "breached"

    @classmethod
    def from_budget_spent(cls, spent: float) -> Status:
        if spent >= BUDGET_BREACH_THRESHOLD:
            return cls.breached
        if spent > BUDGET_WARNING_THRESHOLD:
            return cls.warning
        return cls.healthy

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Status.healthy: "Healthy",
    Status.warning: "Warning",
    Status.breached: "Breached",
}


class Direction(str, Enum):
    higher_is_better = DIRECTION_HIGHER_IS_BETTER
    lower_is_better = DIRECTION_LOWER_IS_BETTER
