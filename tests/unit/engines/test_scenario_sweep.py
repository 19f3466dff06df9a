"""
Tests for the workforce-size scenario sweep.
"""
import numpy as np
import pytest

from capacity_model.dynamics.sampling.lognormal import derive_lognormal_params
from capacity_model.dynamics.sampling.sampler import sample_normal
from capacity_model.engines.saturation import logistic_adjustment
from capacity_model.engines.scenario_sweep import build_factor_grid, run_scenario_sweep
from capacity_model.exceptions import InvalidParameters
from capacity_model.schema.columns import (
    ADJUSTED_ANNUAL_HIRES,
    AVAILABLE_STAFF_TOTAL,
    PRODUCTIVITY_RATE,
    SCENARIO_COLUMNS,
    STAFF_AVAILABILITY_RATIO,
    WORKFORCE_SIZE,
    WORKFORCE_SIZE_FACTOR,
)
from capacity_model.schema.validation import validate_scenario_table

pytestmark = [pytest.mark.unit, pytest.mark.engines]

N = 4000


@pytest.fixture(scope="module")
def adjustment():
    return logistic_adjustment(sample_normal(0.8, 0.05, N, 2025))


@pytest.fixture(scope="module")
def productivity_params():
    return derive_lognormal_params(15, 4.5)


@pytest.fixture(scope="module")
def sweep(adjustment, productivity_params):
    return run_scenario_sweep(
        adjustment, productivity_params, total_staff=150, factors=build_factor_grid(), seed=2025
    )


def test_default_grid_has_eleven_factors():
    grid = build_factor_grid()
    assert len(grid) == 11
    assert grid[0] == 0.5
    assert grid[-1] == 1.0
    assert grid[1] == pytest.approx(0.55)


def test_grid_handles_uneven_stop():
    assert build_factor_grid(0.5, 0.62, 0.05) == [0.5, 0.55, 0.6]


def test_single_point_grid():
    assert build_factor_grid(1.0, 1.0, 0.1) == [1.0]


@pytest.mark.parametrize(
    "start,stop,step",
    [(0.0, 1.0, 0.05), (-0.5, 1.0, 0.05), (0.5, 1.0, 0.0), (0.5, 1.0, -0.1), (1.0, 0.5, 0.05),
     (0.5, float("inf"), 0.05)],
)
def test_malformed_grid_raises(start, stop, step):
    with pytest.raises(InvalidParameters):
        build_factor_grid(start, stop, step)


def test_table_shape_and_order(sweep):
    assert list(sweep.columns) == SCENARIO_COLUMNS
    assert len(sweep) == 11 * N
    blocks = sweep[WORKFORCE_SIZE_FACTOR].to_numpy().reshape(11, N)
    assert (blocks == np.array(build_factor_grid())[:, None]).all()
    assert validate_scenario_table(sweep).is_valid


def test_workforce_size_and_row_formulas(sweep, adjustment):
    first = sweep[sweep[WORKFORCE_SIZE_FACTOR] == 0.5]
    assert (first[WORKFORCE_SIZE] == 75).all()
    expected_staff = np.round(75 * adjustment)
    np.testing.assert_array_equal(first[AVAILABLE_STAFF_TOTAL].to_numpy(), expected_staff)
    expected_hires = np.round(12 * expected_staff * first[PRODUCTIVITY_RATE].to_numpy())
    np.testing.assert_array_equal(first[ADJUSTED_ANNUAL_HIRES].to_numpy(), expected_hires)

    sizes = sweep.groupby(WORKFORCE_SIZE_FACTOR, sort=False)[WORKFORCE_SIZE].first()
    expected_sizes = [int(np.round(150 * f)) for f in build_factor_grid()]
    assert sizes.tolist() == expected_sizes


def test_same_seed_reused_across_factors_by_default(sweep):
    prod = sweep[PRODUCTIVITY_RATE].to_numpy().reshape(11, N)
    for row in prod[1:]:
        np.testing.assert_array_equal(row, prod[0])


def test_reseed_per_factor_draws_fresh_productivity(adjustment, productivity_params):
    table = run_scenario_sweep(
        adjustment, productivity_params, 150, [0.5, 1.0], seed=2025, reseed_per_factor=True
    )
    prod = table[PRODUCTIVITY_RATE].to_numpy().reshape(2, N)
    assert not np.array_equal(prod[0], prod[1])


def test_sweep_is_deterministic(adjustment, productivity_params, sweep):
    again = run_scenario_sweep(
        adjustment, productivity_params, 150, build_factor_grid(), seed=2025
    )
    np.testing.assert_array_equal(
        again[ADJUSTED_ANNUAL_HIRES].to_numpy(), sweep[ADJUSTED_ANNUAL_HIRES].to_numpy()
    )


def test_median_non_decreasing_in_factor(sweep):
    medians = sweep.groupby(WORKFORCE_SIZE_FACTOR, sort=False)[ADJUSTED_ANNUAL_HIRES].median()
    assert (np.diff(medians.to_numpy()) >= 0).all()
    assert medians.iloc[-1] > medians.iloc[0]


def test_availability_ratio_invariant_to_factor(sweep, adjustment):
    ratios = sweep.groupby(WORKFORCE_SIZE_FACTOR, sort=False)[STAFF_AVAILABILITY_RATIO].mean()
    np.testing.assert_allclose(ratios.to_numpy(), adjustment.mean(), atol=0.01)


@pytest.mark.parametrize("factors", [[], [0.5, 0.0], [0.5, -0.2], [float("nan")], [0.001]])
def test_invalid_factors_raise(adjustment, productivity_params, factors):
    with pytest.raises(InvalidParameters):
        run_scenario_sweep(adjustment, productivity_params, 150, factors, seed=1)


def test_empty_adjustment_raises(productivity_params):
    with pytest.raises(InvalidParameters):
        run_scenario_sweep(np.array([]), productivity_params, 150, [1.0], seed=1)
