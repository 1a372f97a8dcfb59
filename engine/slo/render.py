"""
Text and JSON renderings of an SLO report.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
from typing import List

from engine.enums import Direction, Status
from engine.slo.evaluator import Evaluation
from engine.slo.report import Report

RULE_WIDTH = 80

_STATUS_MARKERS = {
    Status.healthy: "✅",
    Status.warning: "⚠️",
    Status.breached: "❌",
}


def display_fraction(value: float) -> float:
    """Clamp a budget fraction into [0, 1] for human-facing output only."""
    return min(1.0, max(0.0, value))


def _window_days(report: Report) -> float:
    return report.window.total_seconds() / 86400


def _evaluation_lines(ev: Evaluation) -> List[str]:
    obj = ev.objective
    lines = [
        "-" * RULE_WIDTH,
        f"SLO: {obj.label}",
        f"Status: {_STATUS_MARKERS[ev.status]} {ev.status.label}",
        f"Current Value: {ev.current_value:.4f}",
        f"Target: {obj.target:.4f}",
    ]
    if obj.direction is Direction.higher_is_better:
        lines.append(f"Current {obj.label}: {ev.current_value * 100:.2f}%")
        lines.append(f"Target {obj.label}: {obj.target * 100:.2f}%")
    else:
        lines.append(f"Current {obj.label}: {ev.current_value * 1000:.0f}ms")
        lines.append(f"Target {obj.label}: {obj.target * 1000:.0f}ms")

    lines += [
        "",
        "Error Budget:",
        f"  Total Budget: {obj.error_budget * 100:.2f}%",
        f"  Budget Spent: {display_fraction(ev.budget_spent_fraction) * 100:.2f}%",
        f"  Budget Left: {display_fraction(ev.budget_left_fraction) * 100:.2f}%",
        f"  Burn Rate: {max(0.0, ev.burn_rate):.2f}x",
    ]
    if ev.projected_exhaustion is not None:
        days = ev.projected_exhaustion.total_seconds() / 86400
        lines.append(f"  ⚠️  At current burn rate, error budget will be exhausted in ~{days:.0f} days")
    lines.append("")
    return lines


def render_text(report: Report, title: str = "SLO REPORT") -> str:
    lines = [
        "",
        "=" * RULE_WIDTH,
        title,
        "=" * RULE_WIDTH,
        f"Window: {_window_days(report):g} days",
        f"Generated: {report.generated_at.isoformat()}",
        "",
    ]
    for ev in report.evaluations:
        lines.extend(_evaluation_lines(ev))
    lines.append("=" * RULE_WIDTH)
    return "\n".join(lines)


def render_json(report: Report) -> str:
    # array of evaluations; gates read each entry's "status"
    return json.dumps([e.to_dict() for e in report.evaluations], indent=2)
