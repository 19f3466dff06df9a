# capacity_model/engines/baseline.py
"""
Baseline production model: availability x productivity -> annual hires.

Each row of the output table comes from the same draw index of the two
input vectors.
"""

import logging

import numpy as np
import pandas as pd

from capacity_model.dynamics.sampling.sampler import SampleVector
from capacity_model.exceptions import InvalidParameters
from capacity_model.schema.columns import (
    ANNUAL_HIRES,
    AVAILABILITY_FRACTION,
    AVAILABLE_STAFF,
    PRODUCTIVITY_RATE,
)

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def _check_pair(availability: SampleVector, productivity: SampleVector) -> None:
    if len(availability) != len(productivity):
        raise InvalidParameters(
            f"Availability and productivity samples must have equal length "
            f"({len(availability)} != {len(productivity)})"
        )
    if len(availability) == 0:
        raise InvalidParameters("Sample vectors must not be empty")


def clamp_staff_counts(staff: np.ndarray, label: str = "available staff") -> np.ndarray:
    """Clamp negative staff counts at zero, logging how many rows were touched."""
    negative = int((staff < 0).sum())
    if negative:
        logger.warning(
            f"[BASELINE] Clamped {negative} negative {label} counts to zero "
            f"(min={staff.min():.0f})"
        )
    return np.clip(staff, 0, None)


def run_baseline(
    availability: SampleVector,
    productivity: SampleVector,
    total_staff: int,
    clamp_negative: bool = True,
) -> pd.DataFrame:
    """
    Combine availability and productivity draws into annual hiring output.

        available_staff_i = round(total_staff * availability_i)
        annual_hires_i    = round(12 * available_staff_i * productivity_i)

    Args:
        availability: Sampled availability fractions.
        productivity: Sampled monthly hires per available staffer.
        total_staff: Talent-acquisition headcount (> 0).
        clamp_negative: Clamp negative staff counts from extreme low-tail
            availability draws at zero. When False the raw rounded counts
            (and the negative hires they imply) are kept.

    Returns:
        DataFrame with one row per draw: availability fraction, productivity
        rate, available staff and annual hires.
    """
    _check_pair(availability, productivity)
    if isinstance(total_staff, bool) or int(total_staff) != total_staff or total_staff <= 0:
        raise InvalidParameters(f"total_staff must be a positive integer, got {total_staff}")

    avail = np.asarray(availability, dtype=float)
    prod = np.asarray(productivity, dtype=float)

    staff = np.round(total_staff * avail)
    if clamp_negative:
        staff = clamp_staff_counts(staff)
    elif (staff < 0).any():
        logger.warning(
            f"[BASELINE] {int((staff < 0).sum())} rows have negative available staff; "
            f"keeping raw values"
        )
    hires = np.round(MONTHS_PER_YEAR * staff * prod)

    df = pd.DataFrame({
        AVAILABILITY_FRACTION: avail,
        PRODUCTIVITY_RATE: prod,
        AVAILABLE_STAFF: staff.astype(np.int64),
        ANNUAL_HIRES: hires.astype(np.int64),
    })
    logger.info(
        f"[BASELINE] Simulated {len(df)} years of output for {total_staff} staff; "
        f"median annual hires={np.median(hires):,.0f}"
    )
    return df
