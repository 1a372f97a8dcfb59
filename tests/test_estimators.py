import pytest

from conftest import latency
from engine.slo.estimators import DEFAULT_ESTIMATOR, ExcessRatioEstimator


def test_zero_when_target_met():
    assert ExcessRatioEstimator().estimate(latency(0.5), 0.5) == 0.0
    assert ExcessRatioEstimator().estimate(latency(0.5), 0.1) == 0.0


def test_scales_excess_ratio():
    obj = latency(0.2, error_budget=0.05, scaling_factor=0.1)
    # 50% over target
    assert ExcessRatioEstimator().estimate(obj, 0.3) == pytest.approx(0.05 * 1.0)
    obj = latency(1.0, error_budget=0.5, scaling_factor=0.25)
    assert ExcessRatioEstimator().estimate(obj, 1.4) == pytest.approx(0.1)


def test_cap_defaults_to_error_budget():
    obj = latency(0.5, error_budget=0.05)
    assert obj.max_violation_cap == 0.05
    assert DEFAULT_ESTIMATOR.estimate(obj, 50.0) == 0.05


def test_explicit_cap_is_respected():
    from engine.enums import Direction
    from engine.slo.models import Objective

    base = latency(0.5, error_budget=0.05)
    obj = Objective(
        indicator=base.indicator,
        target=0.5,
        direction=Direction.lower_is_better,
        error_budget=0.05,
        max_violation_cap=0.2,
    )
    assert DEFAULT_ESTIMATOR.estimate(obj, 50.0) == 0.2
