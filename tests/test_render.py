import json
from datetime import datetime, timezone

from conftest import WINDOW, availability, latency
from engine.slo.evaluator import evaluate
from engine.slo.render import display_fraction, render_json, render_text
from engine.slo.report import Report

NOW = datetime(2026, 10, 19, tzinfo=timezone.utc)


def _report(*evaluations):
    return Report(evaluations=tuple(evaluations), generated_at=NOW, window=WINDOW)


def test_display_fraction_clamps():
    assert display_fraction(-0.5) == 0.0
    assert display_fraction(0.25) == 0.25
    assert display_fraction(20.0) == 1.0


def test_text_report_sections():
    report = _report(
        evaluate(availability(0.999), 0.98, WINDOW),
        evaluate(latency(0.5), 0.6, WINDOW),
    )
    text = render_text(report, title="SLO REPORT - codigo-api")
    assert "SLO REPORT - codigo-api" in text
    assert "Window: 30 days" in text
    assert f"Generated: {NOW.isoformat()}" in text
    assert "SLO: Availability" in text
    assert "Breached" in text
    assert "Current Availability: 98.00%" in text
    assert "Target Availability: 99.90%" in text
    assert "Current Latency (p95): 600ms" in text
    assert "Target Latency (p95): 500ms" in text
    assert "Budget Spent: 100.00%" in text
    assert "Burn Rate: 20.00x" in text
    assert "exhausted in ~2 days" in text


def test_text_never_shows_negative_percentages():
    text = render_text(_report(evaluate(availability(0.999), 1.2, WINDOW)))
    assert "Budget Spent: 0.00%" in text
    assert "Budget Left: 100.00%" in text
    assert "-" not in text.split("Budget Spent:")[1].splitlines()[0]
    assert "exhausted" not in text


def test_json_is_array_of_evaluations():
    report = _report(
        evaluate(availability(0.999), 1.2, WINDOW),
        evaluate(latency(0.5), 0.45, WINDOW),
    )
    payload = json.loads(render_json(report))
    assert isinstance(payload, list)
    assert [p["sli"] for p in payload] == ["availability", "latency_p95"]
    assert [p["status"] for p in payload] == ["healthy", "healthy"]
    # raw signed value is kept in machine output
    assert payload[0]["error_budget_spent"] < 0
