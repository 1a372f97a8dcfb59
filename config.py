"""
Constants and configuration for SLO Reporter.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

METRICS_BACKEND_PROMETHEUS = "prometheus"
METRICS_BACKEND_MIMIR = "mimir"
METRICS_BACKEND_VICTORIAMETRICS = "victoriametrics"
METRICS_BACKENDS = {
    METRICS_BACKEND_PROMETHEUS,
    METRICS_BACKEND_MIMIR,
    METRICS_BACKEND_VICTORIAMETRICS,
}

DIRECTION_HIGHER_IS_BETTER = "higher_is_better"
DIRECTION_LOWER_IS_BETTER = "lower_is_better"

OUTPUT_TEXT = "text"
OUTPUT_JSON = "json"

DATASOURCE_TIMEOUT = 30

# budget_spent_fraction cutoffs; status is a fixed function of these
BUDGET_WARNING_THRESHOLD = 0.8
BUDGET_BREACH_THRESHOLD = 1.0

DEFAULT_SERVICE_NAME = "codigo-api"
DEFAULT_WINDOW = timedelta(days=30)
DEFAULT_AVAILABILITY_TARGET = 0.999
DEFAULT_LATENCY_TARGET_P95 = 0.5
DEFAULT_LATENCY_ERROR_BUDGET = 0.05
DEFAULT_LATENCY_SCALING_FACTOR = 0.1

AVAILABILITY_QUERY_TEMPLATE = (
    'sum(rate(http_requests_total{{service=~"{service}", code!~"5.."}}[{{window}}]))'
    " / "
    'sum(rate(http_requests_total{{service=~"{service}"}}[{{window}}]))'
)
LATENCY_P95_QUERY_TEMPLATE = (
    "histogram_quantile(0.95, "
    'sum(rate(http_request_duration_seconds_bucket{{service=~"{service}"}}[{{window}}])) '
    "by (le, service))"
)


class ConfigurationError(Exception):
    """Raised when settings or objective declarations fail validation."""


class ObjectiveConfig(BaseModel):
    """One declared SLO as read from settings or an objectives file."""

    name: str
    query: str
    target: float
    direction: str = DIRECTION_HIGHER_IS_BETTER
    window: timedelta = DEFAULT_WINDOW
    error_budget: Optional[float] = None
    scaling_factor: float = Field(default=DEFAULT_LATENCY_SCALING_FACTOR, gt=0.0)
    max_violation_cap: Optional[float] = Field(default=None, gt=0.0)
    description: Optional[str] = None

    @field_validator("name", "query", mode="before")
    @classmethod
    def not_blank(cls, v: Any) -> str:
        value = str(v or "").strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("direction", mode="before")
    @classmethod
    def validate_direction(cls, v: str) -> str:
        value = str(v or "").strip().lower()
        if value not in {DIRECTION_HIGHER_IS_BETTER, DIRECTION_LOWER_IS_BETTER}:
            raise ValueError(f"Unsupported direction: {value!r}")
        return value

    @field_validator("window")
    @classmethod
    def positive_window(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("window must be positive")
        return v

    @model_validator(mode="after")
    def check_budget_policy(self) -> "ObjectiveConfig":
        if self.direction == DIRECTION_HIGHER_IS_BETTER:
            if not 0.0 <= self.target < 1.0:
                raise ValueError("ratio target must be in [0, 1)")
        else:
            if self.target <= 0.0:
                raise ValueError("latency target must be positive")
            if self.error_budget is None:
                raise ValueError("lower_is_better objectives need an explicit error_budget")
        if self.error_budget is not None and self.error_budget <= 0.0:
            raise ValueError("error_budget must be positive")
        return self


def default_objectives(service: str = DEFAULT_SERVICE_NAME) -> List[ObjectiveConfig]:
    return [
        ObjectiveConfig(
            name="availability",
            description="Availability",
            query=AVAILABILITY_QUERY_TEMPLATE.format(service=service),
            target=DEFAULT_AVAILABILITY_TARGET,
            direction=DIRECTION_HIGHER_IS_BETTER,
        ),
        ObjectiveConfig(
            name="latency_p95",
            description="Latency (p95)",
            query=LATENCY_P95_QUERY_TEMPLATE.format(service=service),
            target=DEFAULT_LATENCY_TARGET_P95,
            direction=DIRECTION_LOWER_IS_BETTER,
            error_budget=DEFAULT_LATENCY_ERROR_BUDGET,
            scaling_factor=DEFAULT_LATENCY_SCALING_FACTOR,
        ),
    ]


class Settings(BaseSettings):
    metrics_backend: str = METRICS_BACKEND_PROMETHEUS
    backend_url: str = "http://localhost:9090"
    tenant_id: str = "anonymous"

    # per-request timeout and whole-report deadline, seconds
    request_timeout: float = Field(default=DATASOURCE_TIMEOUT, gt=0)
    report_deadline: Optional[float] = Field(default=None, gt=0)
    max_parallel_measurements: int = Field(default=4, ge=1)
    startup_timeout: float = Field(default=120, gt=0)

    service: str = DEFAULT_SERVICE_NAME
    objectives_file: Optional[str] = None
    output_format: str = OUTPUT_TEXT

    @field_validator("backend_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        value = str(v or "").strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"backend_url must be an http(s) URL, got {v!r}")
        return value

    @field_validator("metrics_backend", mode="before")
    @classmethod
    def validate_metrics_backend(cls, v: str) -> str:
        value = str(v or "").strip().lower()
        if value not in METRICS_BACKENDS:
            raise ValueError(f"Unsupported metrics backend: {value!r}")
        return value

    @field_validator("output_format", mode="before")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        value = str(v or "").strip().lower()
        if value not in {OUTPUT_TEXT, OUTPUT_JSON}:
            raise ValueError(f"Unsupported output format: {value!r}")
        return value

    model_config = {
        "env_prefix": "SLO_REPORTER_",
        "extra": "ignore",
    }


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def load_settings(**overrides: Any) -> Settings:
    """Build settings from the environment plus explicit overrides.

    Overrides whose value is ``None`` are ignored so CLI flags that were not
    given fall through to the environment and defaults.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid settings: {_describe(exc)}") from exc


def parse_objectives(raw: Any) -> List[ObjectiveConfig]:
    if isinstance(raw, dict):
        raw = raw.get("objectives")
    if not isinstance(raw, list) or not raw:
        raise ConfigurationError("objectives must be a non-empty list")
    configs: List[ObjectiveConfig] = []
    for i, item in enumerate(raw):
        try:
            configs.append(ObjectiveConfig.model_validate(item))
        except ValidationError as exc:
            raise ConfigurationError(f"objective #{i}: {_describe(exc)}") from exc
    names = [c.name for c in configs]
    if len(set(names)) != len(names):
        raise ConfigurationError(f"objective names must be unique: {names}")
    windows = {c.window for c in configs}
    if len(windows) != 1:
        raise ConfigurationError("all objectives in one report must share a window")
    return configs


def load_objectives(settings: Settings) -> List[ObjectiveConfig]:
    """Return the declared objectives, read once at startup."""
    if not settings.objectives_file:
        return default_objectives(settings.service)
    path = Path(settings.objectives_file)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"cannot read objectives file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"objectives file {path} is not valid JSON: {exc}") from exc
    return parse_objectives(raw)
