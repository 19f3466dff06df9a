# capacity_model/simulation.py
"""
Main simulation orchestration module.

This module defines the high-level function that runs one planning pass:
log-normal parameter derivation, Monte Carlo sampling, the baseline forecast,
the saturation adjustment, the workforce-size sweep and the GLS fit.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from capacity_model.config.models import PlanningParameters, SimulationControls
from capacity_model.dynamics.sampling.lognormal import LogNormalParams, derive_lognormal_params
from capacity_model.dynamics.sampling.sampler import (
    AVAILABILITY_STREAM,
    PRODUCTIVITY_STREAM,
    sample_lognormal,
    sample_normal,
    stream_seed,
)
from capacity_model.engines.baseline import run_baseline
from capacity_model.engines.saturation import apply_saturation
from capacity_model.engines.scenario_sweep import build_factor_grid, run_scenario_sweep
from capacity_model.exceptions import CapacityModelError
from capacity_model.ml.gls import RegressionModel, fit_variance_weighted_model
from capacity_model.reporting.metrics import HiresSummary, summarize_hires, summarize_scenarios
from capacity_model.schema.columns import ADJUSTED_HIRES, ANNUAL_HIRES, SATURATION_ADJUSTMENT
from logging_config import PERFORMANCE_LOGGER, SIMULATION_LOGGER

logger = logging.getLogger(SIMULATION_LOGGER)
perf_logger = logging.getLogger(PERFORMANCE_LOGGER)


@dataclass(frozen=True)
class SimulationResult:
    """Everything one planning pass produces for reporting collaborators."""
    parameters: PlanningParameters
    controls: SimulationControls
    productivity_params: LogNormalParams
    baseline: pd.DataFrame
    baseline_summary: HiresSummary
    saturation: pd.DataFrame
    saturation_summary: HiresSummary
    scenarios: pd.DataFrame
    scenario_summary: pd.DataFrame
    regression: Optional[RegressionModel] = None


@contextmanager
def _timed(stage: str):
    start = time.perf_counter()
    yield
    perf_logger.info(f"{stage} completed in {time.perf_counter() - start:.3f}s")


def run_simulation(
    parameters: PlanningParameters,
    controls: Optional[SimulationControls] = None,
) -> SimulationResult:
    """
    Run the full planning pipeline once.

    Args:
        parameters: Historical availability/productivity estimates and the hiring goal.
        controls: Sampling, saturation and sweep controls; defaults when omitted.

    Returns:
        SimulationResult with the baseline, saturation and scenario tables,
        their summaries and (unless disabled) the fitted regression model.

    Raises:
        InvalidParameters: For invalid inputs, raised before any sampling.
        EstimationFailure: If the regression cannot be fitted.
    """
    controls = controls or SimulationControls()
    logger.info(
        f"===== Starting capacity simulation: staff={parameters.total_staff}, "
        f"goal={parameters.hiring_goal:,.0f}, N={controls.sample_count}, seed={controls.seed} ====="
    )

    try:
        with _timed("Parameter derivation"):
            productivity_params = derive_lognormal_params(
                parameters.mean_monthly_hiring, parameters.std_monthly_hiring
            )
            factors = build_factor_grid(
                controls.factor_start, controls.factor_stop, controls.factor_step
            )
        logger.info(
            f"Productivity log-normal: mu={productivity_params.mu:.4f}, "
            f"sigma={productivity_params.sigma:.4f}; {len(factors)} sweep factors"
        )

        with _timed("Sampling"):
            availability = sample_normal(
                parameters.mean_availability,
                parameters.std_availability,
                controls.sample_count,
                stream_seed(controls.seed, AVAILABILITY_STREAM),
            )
            productivity = sample_lognormal(
                productivity_params.mu,
                productivity_params.sigma,
                controls.sample_count,
                stream_seed(controls.seed, PRODUCTIVITY_STREAM),
            )

        with _timed("Baseline model"):
            baseline = run_baseline(
                availability,
                productivity,
                parameters.total_staff,
                clamp_negative=controls.clamp_negative_staff,
            )
            baseline_summary = summarize_hires(baseline[ANNUAL_HIRES], parameters.hiring_goal)

        with _timed("Saturation adjustment"):
            saturation = apply_saturation(
                availability,
                productivity,
                parameters.total_staff,
                alpha=controls.alpha,
                threshold=controls.threshold,
            )
            saturation_summary = summarize_hires(saturation[ADJUSTED_HIRES], parameters.hiring_goal)

        with _timed("Scenario sweep"):
            scenarios = run_scenario_sweep(
                saturation[SATURATION_ADJUSTMENT].to_numpy(),
                productivity_params,
                parameters.total_staff,
                factors,
                seed=controls.seed,
                reseed_per_factor=controls.reseed_per_factor,
            )
            scenario_summary = summarize_scenarios(scenarios, parameters.hiring_goal)

        regression = None
        if controls.fit_regression:
            with _timed("GLS regression"):
                regression = fit_variance_weighted_model(scenarios)
        else:
            logger.info("Regression fit disabled by controls")

    except CapacityModelError as e:
        logger.error(f"Capacity simulation failed: {e}")
        raise

    logger.info(
        f"===== Capacity simulation finished: baseline median={baseline_summary.median:,.0f}, "
        f"P(goal)={baseline_summary.probability_reach_goal:.1f}% ====="
    )
    return SimulationResult(
        parameters=parameters,
        controls=controls,
        productivity_params=productivity_params,
        baseline=baseline,
        baseline_summary=baseline_summary,
        saturation=saturation,
        saturation_summary=saturation_summary,
        scenarios=scenarios,
        scenario_summary=scenario_summary,
        regression=regression,
    )
