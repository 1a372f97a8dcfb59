"""
SLO packages for evaluating error budget consumption, burn rate and projected exhaustion per declared objective.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.slo.models import Indicator, Objective
from engine.slo.estimators import ExcessRatioEstimator, ViolationEstimator
from engine.slo.evaluator import Evaluation, evaluate
from engine.slo.report import Report, ReportDeadlineExceeded, ReportError, build_report

__all__ = [
    "Indicator",
    "Objective",
    "ExcessRatioEstimator",
    "ViolationEstimator",
    "Evaluation",
    "evaluate",
    "Report",
    "ReportError",
    "ReportDeadlineExceeded",
    "build_report",
]
