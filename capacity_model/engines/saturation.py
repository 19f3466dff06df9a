# capacity_model/engines/saturation.py
"""
Logistic capacity-saturation adjustment.

Raw availability scaling is linear and unbounded. The logistic transform maps
availability into a smooth multiplier in (0, 1): below ``threshold`` extra
availability adds little, above it returns flatten out. ``alpha`` and
``threshold`` are policy parameters, not estimated from data.
"""

import logging
import math

import numpy as np
import pandas as pd
from scipy.special import expit

from capacity_model.dynamics.sampling.sampler import SampleVector
from capacity_model.exceptions import InvalidParameters
from capacity_model.schema.columns import (
    ADJUSTED_HIRES,
    AVAILABILITY_FRACTION,
    PRODUCTIVITY_RATE,
    SATURATION_ADJUSTMENT,
)
from .baseline import MONTHS_PER_YEAR

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 6.0
DEFAULT_THRESHOLD = 0.7

# Closest representable values to 0 and 1 from inside the open interval.
_LOWER = np.nextafter(0.0, 1.0)
_UPPER = np.nextafter(1.0, 0.0)


def _check_shape(alpha: float, threshold: float) -> None:
    if not (math.isfinite(alpha) and math.isfinite(threshold)):
        raise InvalidParameters(f"Logistic parameters must be finite (alpha={alpha}, threshold={threshold})")
    if alpha <= 0:
        raise InvalidParameters(f"Logistic steepness alpha must be positive, got {alpha}")


def logistic_adjustment(
    availability,
    alpha: float = DEFAULT_ALPHA,
    threshold: float = DEFAULT_THRESHOLD,
) -> np.ndarray:
    """
    Compute ``1 / (1 + exp(-alpha * (availability - threshold)))`` element-wise.

    The result is kept strictly inside (0, 1) even where the float logistic
    would round to exactly 0 or 1.
    """
    _check_shape(alpha, threshold)
    avail = np.asarray(availability, dtype=float)
    if not np.isfinite(avail).all():
        raise InvalidParameters("Availability draws contain non-finite values")
    adjustment = expit(alpha * (avail - threshold))
    return np.clip(adjustment, _LOWER, _UPPER)


def apply_saturation(
    availability: SampleVector,
    productivity: SampleVector,
    total_staff: int,
    alpha: float = DEFAULT_ALPHA,
    threshold: float = DEFAULT_THRESHOLD,
) -> pd.DataFrame:
    """
    Saturation-adjusted annual hires.

        adjustment_i     = logistic(availability_i; alpha, threshold)
        adjusted_hires_i = round(adjustment_i * total_staff * productivity_i * 12)

    Args:
        availability: Sampled availability fractions.
        productivity: Sampled monthly hires per staffer (same length).
        total_staff: Talent-acquisition headcount (> 0).
        alpha: Logistic steepness (> 0).
        threshold: Availability level at the inflection point.

    Returns:
        DataFrame with availability, productivity, adjustment and adjusted hires.
    """
    if len(availability) != len(productivity):
        raise InvalidParameters(
            f"Availability and productivity samples must have equal length "
            f"({len(availability)} != {len(productivity)})"
        )
    if isinstance(total_staff, bool) or int(total_staff) != total_staff or total_staff <= 0:
        raise InvalidParameters(f"total_staff must be a positive integer, got {total_staff}")

    adjustment = logistic_adjustment(availability, alpha=alpha, threshold=threshold)
    prod = np.asarray(productivity, dtype=float)
    adjusted = np.round(adjustment * total_staff * prod * MONTHS_PER_YEAR)

    df = pd.DataFrame({
        AVAILABILITY_FRACTION: np.asarray(availability, dtype=float),
        PRODUCTIVITY_RATE: prod,
        SATURATION_ADJUSTMENT: adjustment,
        ADJUSTED_HIRES: adjusted.astype(np.int64),
    })
    logger.info(
        f"[SATURATION] alpha={alpha}, threshold={threshold}: mean adjustment="
        f"{adjustment.mean():.4f}, median adjusted hires={np.median(adjusted):,.0f}"
    )
    return df
