"""
Indicator and objective declarations for SLO evaluation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from config import DEFAULT_LATENCY_SCALING_FACTOR, ObjectiveConfig
from engine.enums import Direction


@dataclass(frozen=True)
class Indicator:
    name: str
    query: str
    window: timedelta

    def __post_init__(self) -> None:
        if not self.query.strip():
            raise ValueError(f"indicator {self.name!r} has an empty query")
        if self.window <= timedelta(0):
            raise ValueError(f"indicator {self.name!r} needs a positive window")


@dataclass(frozen=True)
class Objective:
    """An SLO bound to one indicator.

    ``error_budget`` defaults to ``1 - target`` for higher-is-better
    indicators and must be given for lower-is-better ones. ``scaling_factor``
    and ``max_violation_cap`` drive the latency violation estimate; the cap
    defaults to the error budget itself.
    """

    indicator: Indicator
    target: float
    direction: Direction = Direction.higher_is_better
    error_budget: Optional[float] = None
    scaling_factor: float = DEFAULT_LATENCY_SCALING_FACTOR
    max_violation_cap: Optional[float] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        direction = Direction(self.direction)
        object.__setattr__(self, "direction", direction)
        if direction is Direction.lower_is_better and self.target <= 0.0:
            raise ValueError(f"objective {self.name!r}: lower_is_better target must be positive, got {self.target}")

        budget = self.error_budget
        if budget is None:
            if direction is not Direction.higher_is_better:
                raise ValueError(f"objective {self.name!r}: lower_is_better needs an explicit error_budget")
            budget = 1.0 - self.target
            object.__setattr__(self, "error_budget", budget)
        if budget <= 0.0:
            raise ValueError(f"objective {self.name!r}: error budget must be positive, got {budget}")

        if self.max_violation_cap is None:
            object.__setattr__(self, "max_violation_cap", budget)

    @property
    def name(self) -> str:
        return self.indicator.name

    @property
    def label(self) -> str:
        return self.description or self.name

    @classmethod
    def from_config(cls, cfg: ObjectiveConfig) -> Objective:
        return cls(
            indicator=Indicator(name=cfg.name, query=cfg.query, window=cfg.window),
            target=cfg.target,
            direction=Direction(cfg.direction),
            error_budget=cfg.error_budget,
            scaling_factor=cfg.scaling_factor,
            max_violation_cap=cfg.max_violation_cap,
            description=cfg.description,
        )
