"""
Tests for summary metrics over simulated hires.
"""
import numpy as np
import pandas as pd
import pytest

from capacity_model.exceptions import InvalidParameters
from capacity_model.reporting.metrics import probability_exceeding, summarize_hires, summarize_scenarios
from capacity_model.schema.columns import (
    ADJUSTED_ANNUAL_HIRES,
    STAFF_AVAILABILITY_RATIO,
    WORKFORCE_SIZE,
    WORKFORCE_SIZE_FACTOR,
)

pytestmark = pytest.mark.unit


def test_summary_of_known_sequence():
    values = np.arange(1, 101)
    summary = summarize_hires(values, hiring_goal=50)
    assert summary.median == pytest.approx(50.5)
    assert summary.planning_floor == pytest.approx(25.75)
    assert summary.p75 == pytest.approx(75.25)
    assert summary.mean == pytest.approx(50.5)
    assert summary.probability_reach_goal == pytest.approx(50.0)
    assert summary.sample_count == 100
    assert summary.to_dict()["hiring_goal"] == 50.0


def test_goal_probability_uses_strict_inequality():
    assert probability_exceeding([10, 10, 20, 30], 10) == pytest.approx(50.0)
    assert probability_exceeding(pd.Series([1, 2, 3]), 0.5) == pytest.approx(100.0)


def test_planning_floor_leaves_75_percent_above():
    values = np.random.default_rng(1).normal(20000, 3000, 10000)
    summary = summarize_hires(values, hiring_goal=15000)
    assert (values > summary.planning_floor).mean() == pytest.approx(0.75, abs=0.001)


def test_empty_sample_raises():
    with pytest.raises(InvalidParameters):
        summarize_hires([], hiring_goal=10)
    with pytest.raises(InvalidParameters):
        probability_exceeding([], 10)


@pytest.mark.parametrize("goal", [0, -1, float("nan")])
def test_invalid_goal_raises(goal):
    with pytest.raises(InvalidParameters):
        summarize_hires([1, 2, 3], hiring_goal=goal)


def test_scenario_summary_keeps_factor_order():
    table = pd.DataFrame({
        WORKFORCE_SIZE_FACTOR: [1.0, 1.0, 0.5, 0.5],
        WORKFORCE_SIZE: [10, 10, 5, 5],
        ADJUSTED_ANNUAL_HIRES: [100, 300, 40, 60],
        STAFF_AVAILABILITY_RATIO: [0.6, 0.8, 0.6, 0.8],
    })
    summary = summarize_scenarios(table, hiring_goal=50)
    assert summary[WORKFORCE_SIZE_FACTOR].tolist() == [1.0, 0.5]
    assert summary["median_adjusted_hires"].tolist() == [200.0, 50.0]
    assert summary["probability_reach_goal"].tolist() == [100.0, 50.0]
    assert summary["mean_staff_availability_ratio"].tolist() == pytest.approx([0.7, 0.7])


def test_scenario_summary_of_empty_table():
    assert summarize_scenarios(pd.DataFrame(), hiring_goal=10).empty
