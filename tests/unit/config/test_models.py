"""
Tests for planning configuration models.
"""
import pytest
from pydantic import ValidationError

from capacity_model.config.models import (
    PlanningConfig,
    PlanningParameters,
    SimulationControls,
    load_planning_config,
)
from capacity_model.exceptions import InvalidParameters

pytestmark = [pytest.mark.unit, pytest.mark.config]

VALID = dict(
    hiring_goal=15000,
    total_staff=150,
    mean_availability=0.8,
    std_availability=0.05,
    mean_monthly_hiring=15,
    std_monthly_hiring=4.5,
)


def test_valid_parameters():
    params = PlanningParameters(**VALID)
    assert params.total_staff == 150
    assert params.mean_monthly_hiring == 15.0


@pytest.mark.parametrize(
    "field,value",
    [
        ("hiring_goal", 0),
        ("total_staff", 0),
        ("total_staff", 12.5),
        ("mean_availability", 1.0),
        ("mean_availability", 0.0),
        ("std_availability", -0.01),
        ("mean_monthly_hiring", 0),
        ("std_monthly_hiring", -1),
        ("std_monthly_hiring", float("inf")),
    ],
)
def test_invalid_parameter_values(field, value):
    with pytest.raises(ValidationError):
        PlanningParameters(**{**VALID, field: value})


def test_availability_spread_must_stay_below_mean():
    with pytest.raises(ValidationError, match="std_availability"):
        PlanningParameters(**{**VALID, "mean_availability": 0.3, "std_availability": 0.3})


def test_parameters_are_frozen():
    params = PlanningParameters(**VALID)
    with pytest.raises(ValidationError):
        params.total_staff = 10


def test_control_defaults():
    controls = SimulationControls()
    assert controls.sample_count == 20000
    assert controls.seed == 2025
    assert (controls.factor_start, controls.factor_stop, controls.factor_step) == (0.5, 1.0, 0.05)
    assert controls.alpha == 6.0
    assert controls.threshold == 0.7
    assert controls.reseed_per_factor is False
    assert controls.clamp_negative_staff is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"sample_count": 0},
        {"alpha": 0},
        {"factor_step": 0},
        {"factor_start": 1.0, "factor_stop": 0.5},
        {"threshold": float("nan")},
    ],
)
def test_invalid_controls(overrides):
    with pytest.raises(ValidationError):
        SimulationControls(**overrides)


def test_load_planning_config_from_mapping():
    config = load_planning_config({"parameters": VALID, "controls": {"sample_count": 500}})
    assert isinstance(config, PlanningConfig)
    assert config.controls.sample_count == 500
    assert config.parameters.hiring_goal == 15000


def test_load_planning_config_defaults_controls():
    config = load_planning_config({"parameters": VALID})
    assert config.controls == SimulationControls()


def test_load_planning_config_wraps_validation_errors():
    with pytest.raises(InvalidParameters, match="Invalid planning configuration"):
        load_planning_config({"parameters": {**VALID, "total_staff": -1}})
    with pytest.raises(InvalidParameters):
        load_planning_config({})
