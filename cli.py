#!/usr/bin/env python3

"""
Command-line SLO report for deployment gates and scheduled checks.

Exit codes: 0 report produced, 1 measurement or report failure,
2 configuration error, 3 report breached with ``--fail-on-breach``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from config import (
    METRICS_BACKENDS,
    OUTPUT_JSON,
    OUTPUT_TEXT,
    ConfigurationError,
    load_objectives,
    load_settings,
)
from datasources.factory import DataSourceFactory
from engine.instrumentation import LoggingMetricsSink
from engine.slo import Objective, ReportError, build_report
from engine.slo.render import render_json, render_text

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REPORT_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_BREACHED = 3


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slo-reporter",
        description="Evaluate declared SLOs against a Prometheus-compatible metrics backend",
    )
    parser.add_argument("--backend-url", "--prometheus-url", dest="backend_url",
                        help="metrics backend base URL (default http://localhost:9090)")
    parser.add_argument("--backend", dest="metrics_backend", choices=sorted(METRICS_BACKENDS),
                        help="metrics backend flavour")
    parser.add_argument("--tenant-id", help="tenant sent as X-Scope-OrgID to Mimir")
    parser.add_argument("--output", dest="output_format", choices=[OUTPUT_TEXT, OUTPUT_JSON],
                        help="output format: text or json")
    parser.add_argument("--objectives", dest="objectives_file",
                        help="JSON file declaring the objectives to evaluate")
    parser.add_argument("--service", help="service name used by the default objectives")
    parser.add_argument("--timeout", dest="request_timeout", type=float,
                        help="per-query timeout in seconds")
    parser.add_argument("--deadline", dest="report_deadline", type=float,
                        help="upper bound in seconds for the whole report")
    parser.add_argument("--fail-on-breach", action="store_true",
                        help=f"exit {EXIT_BREACHED} when any objective is breached")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


async def run(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(
            backend_url=args.backend_url,
            metrics_backend=args.metrics_backend,
            tenant_id=args.tenant_id,
            output_format=args.output_format,
            objectives_file=args.objectives_file,
            service=args.service,
            request_timeout=args.request_timeout,
            report_deadline=args.report_deadline,
        )
        objectives = [Objective.from_config(c) for c in load_objectives(settings)]
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    source = DataSourceFactory.create_metrics(settings)
    log.info(
        "evaluating %d objectives against %s (%s)",
        len(objectives), settings.backend_url, settings.metrics_backend,
    )

    try:
        report = await build_report(
            objectives,
            source,
            deadline=settings.report_deadline,
            max_parallel=settings.max_parallel_measurements,
            sink=LoggingMetricsSink(),
        )
    except ReportError as exc:
        print(f"Error calculating SLO report: {exc}", file=sys.stderr)
        return EXIT_REPORT_FAILED

    if settings.output_format == OUTPUT_JSON:
        print(render_json(report))
    else:
        print(render_text(report, title=f"SLO REPORT - {settings.service}"))

    if args.fail_on_breach and not report.passed:
        return EXIT_BREACHED
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
