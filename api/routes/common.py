"""
Shared dependencies for API route modules.

Holds the metric source and declared objectives, both built once from
settings validated at startup.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from config import Settings, load_objectives, load_settings
from datasources.base import MetricSource
from datasources.factory import DataSourceFactory
from engine.slo import Objective


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_source() -> MetricSource:
    return DataSourceFactory.create_metrics(get_settings())


@lru_cache(maxsize=1)
def get_objectives() -> List[Objective]:
    return [Objective.from_config(c) for c in load_objectives(get_settings())]
