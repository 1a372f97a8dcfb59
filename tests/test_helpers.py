from datetime import timedelta

import pytest

from datasources.exceptions import BackendRejected, MalformedResponse, NoData
from datasources.helpers import parse_instant_value, prom_duration, render_query


def _body(result, status="success"):
    return {"status": status, "data": {"resultType": "vector", "result": result}}


@pytest.mark.parametrize(
    "window,expected",
    [
        (timedelta(days=30), "30d"),
        (timedelta(hours=6), "6h"),
        (timedelta(minutes=90), "90m"),
        (timedelta(seconds=45), "45s"),
        (timedelta(milliseconds=1500), "1500ms"),
    ],
)
def test_prom_duration(window, expected):
    assert prom_duration(window) == expected


def test_prom_duration_rejects_non_positive():
    with pytest.raises(ValueError):
        prom_duration(timedelta(0))


def test_render_query_keeps_label_braces():
    q = 'sum(rate(http_requests_total{service=~"api", code!~"5.."}[{window}]))'
    assert render_query(q, timedelta(days=30)) == (
        'sum(rate(http_requests_total{service=~"api", code!~"5.."}[30d]))'
    )


def test_parse_first_sample():
    body = _body([{"metric": {}, "value": [1700000000, "0.9995"]}, {"value": [1, "0.1"]}])
    assert parse_instant_value(body) == 0.9995


def test_empty_result_is_no_data():
    with pytest.raises(NoData) as exc:
        parse_instant_value(_body([]), indicator="availability")
    assert exc.value.indicator == "availability"
    assert "availability" in str(exc.value)


def test_nan_is_no_data():
    with pytest.raises(NoData):
        parse_instant_value(_body([{"value": [1, "NaN"]}]))


def test_infinite_is_malformed():
    with pytest.raises(MalformedResponse):
        parse_instant_value(_body([{"value": [1, "+Inf"]}]))


@pytest.mark.parametrize(
    "body",
    [
        {"status": "success"},
        {"status": "success", "data": {"result": "nope"}},
        _body([{"value": [1]}]),
        _body([{"value": [1, 0.5]}]),
        _body([{"value": [1, "abc"]}]),
        _body(["not-a-dict"]),
    ],
)
def test_malformed_payloads(body):
    with pytest.raises(MalformedResponse):
        parse_instant_value(body)


def test_error_status_is_rejected():
    body = {"status": "error", "errorType": "bad_data", "error": "parse error at char 3"}
    with pytest.raises(BackendRejected) as exc:
        parse_instant_value(body)
    assert exc.value.status == 200
    assert "parse error" in str(exc.value)
