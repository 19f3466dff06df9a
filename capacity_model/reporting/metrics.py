# capacity_model/reporting/metrics.py
"""
Functions to calculate summary metrics from simulation results.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict

import numpy as np
import pandas as pd

from capacity_model.exceptions import InvalidParameters
from capacity_model.schema.columns import (
    ADJUSTED_ANNUAL_HIRES,
    STAFF_AVAILABILITY_RATIO,
    WORKFORCE_SIZE,
    WORKFORCE_SIZE_FACTOR,
)

logger = logging.getLogger(__name__)

# The 25th percentile is the planning floor: 75% of outcomes land above it.
PLANNING_FLOOR_PERCENTILE = 25


@dataclass(frozen=True)
class HiresSummary:
    """Distribution summary of simulated annual hires against a goal."""
    median: float
    mean: float
    std: float
    planning_floor: float
    p75: float
    probability_reach_goal: float
    hiring_goal: float
    sample_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def probability_exceeding(values, target: float) -> float:
    """Share of ``values`` strictly above ``target``, on a 0-100 scale."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise InvalidParameters("Cannot compute a probability over an empty sample")
    return float((arr > target).mean() * 100.0)


def summarize_hires(values, hiring_goal: float) -> HiresSummary:
    """
    Summarize a vector of simulated annual hires.

    Args:
        values: Simulated annual hires (array-like or Series).
        hiring_goal: Fiscal-year target used for the goal probability.

    Returns:
        HiresSummary with median, planning floor (25th percentile) and the
        probability (0-100) of exceeding ``hiring_goal``.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise InvalidParameters("Cannot summarize an empty sample")
    if not np.isfinite(arr).all():
        raise InvalidParameters("Simulated hires contain non-finite values")
    if not np.isfinite(hiring_goal) or hiring_goal <= 0:
        raise InvalidParameters(f"Hiring goal must be positive and finite, got {hiring_goal}")

    summary = HiresSummary(
        median=float(np.median(arr)),
        mean=float(arr.mean()),
        std=float(arr.std(ddof=1)) if arr.size > 1 else 0.0,
        planning_floor=float(np.percentile(arr, PLANNING_FLOOR_PERCENTILE)),
        p75=float(np.percentile(arr, 75)),
        probability_reach_goal=probability_exceeding(arr, hiring_goal),
        hiring_goal=float(hiring_goal),
        sample_count=int(arr.size),
    )
    logger.info(
        f"Hires summary (N={summary.sample_count}): median={summary.median:,.0f}, "
        f"planning floor={summary.planning_floor:,.0f}, "
        f"P(> {summary.hiring_goal:,.0f})={summary.probability_reach_goal:.1f}%"
    )
    return summary


def summarize_scenarios(scenario_df: pd.DataFrame, hiring_goal: float) -> pd.DataFrame:
    """
    Per-factor planning summary of a scenario sweep table.

    Args:
        scenario_df: Long-form scenario table from the sweep.
        hiring_goal: Fiscal-year target used for the goal probability.

    Returns:
        One row per workforce-size factor, in sweep order, with workforce size,
        median and planning floor of adjusted hires, mean staff availability
        ratio and the goal probability.
    """
    if scenario_df is None or scenario_df.empty:
        logger.warning("Scenario table is empty. Returning empty summary.")
        return pd.DataFrame()

    grouped = scenario_df.groupby(WORKFORCE_SIZE_FACTOR, sort=False)
    hires = grouped[ADJUSTED_ANNUAL_HIRES]
    summary = pd.DataFrame({
        WORKFORCE_SIZE: grouped[WORKFORCE_SIZE].first(),
        "median_adjusted_hires": hires.median(),
        "planning_floor": hires.quantile(PLANNING_FLOOR_PERCENTILE / 100.0),
        "mean_staff_availability_ratio": grouped[STAFF_AVAILABILITY_RATIO].mean(),
        "probability_reach_goal": hires.apply(lambda s: probability_exceeding(s, hiring_goal)),
    }).reset_index()

    for row in summary.itertuples(index=False):
        logger.info(
            f"Scenario factor={getattr(row, WORKFORCE_SIZE_FACTOR):.2f}: "
            f"workforce={getattr(row, WORKFORCE_SIZE)}, "
            f"median hires={row.median_adjusted_hires:,.0f}"
        )
    return summary
