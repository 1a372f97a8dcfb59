"""
Factory for creating the metric source connector based on configuration.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from connectors.mimir import MimirConnector
from connectors.prometheus import PrometheusConnector
from connectors.victoria import VictoriaMetricsConnector


class DataSourceFactory:

    @staticmethod
    def create_metrics(config, transport=None):
        from config import (
            METRICS_BACKEND_MIMIR,
            METRICS_BACKEND_PROMETHEUS,
            METRICS_BACKEND_VICTORIAMETRICS,
        )

        timeout = config.request_timeout
        if config.metrics_backend == METRICS_BACKEND_PROMETHEUS:
            return PrometheusConnector(config.backend_url, timeout=timeout, transport=transport)
        if config.metrics_backend == METRICS_BACKEND_MIMIR:
            return MimirConnector(config.backend_url, config.tenant_id, timeout=timeout, transport=transport)
        if config.metrics_backend == METRICS_BACKEND_VICTORIAMETRICS:
            return VictoriaMetricsConnector(config.backend_url, timeout=timeout, transport=transport)
        raise ValueError("Unsupported metrics backend")
