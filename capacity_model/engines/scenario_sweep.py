# capacity_model/engines/scenario_sweep.py
"""
Scenario sweep across workforce-size scaling factors.

The saturation adjustment vector is computed once against the baseline
availability draws and reused for every factor; each factor draws its own
productivity vector from a deterministic scenario seed.
"""

import logging
import math
from typing import List, Sequence

import numpy as np
import pandas as pd

from capacity_model.dynamics.sampling.lognormal import LogNormalParams
from capacity_model.dynamics.sampling.sampler import (
    SCENARIO_STREAM,
    sample_lognormal,
    stream_seed,
)
from capacity_model.exceptions import InvalidParameters
from capacity_model.schema.columns import (
    ADJUSTED_ANNUAL_HIRES,
    AVAILABLE_STAFF_TOTAL,
    PRODUCTIVITY_RATE,
    SATURATION_ADJUSTMENT,
    SCENARIO_COLUMNS,
    STAFF_AVAILABILITY_RATIO,
    WORKFORCE_SIZE,
    WORKFORCE_SIZE_FACTOR,
)
from .baseline import MONTHS_PER_YEAR

logger = logging.getLogger(__name__)

# Factor grid values are rounded to this many decimals to drop float noise.
_FACTOR_DECIMALS = 10


def build_factor_grid(start: float = 0.5, stop: float = 1.0, step: float = 0.05) -> List[float]:
    """
    Inclusive grid of workforce-size factors, ``start, start + step, ..., stop``.

    The defaults give the 11 factors 0.50, 0.55, ..., 1.00.
    """
    if not all(math.isfinite(v) for v in (start, stop, step)):
        raise InvalidParameters(f"Factor range must be finite (start={start}, stop={stop}, step={step})")
    if start <= 0:
        raise InvalidParameters(f"Factor range must start above zero, got {start}")
    if step <= 0:
        raise InvalidParameters(f"Factor step must be positive, got {step}")
    if stop < start:
        raise InvalidParameters(f"Factor range stop ({stop}) is below start ({start})")

    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    return [round(start + i * step, _FACTOR_DECIMALS) for i in range(count)]


def _workforce_sizes(factors: Sequence[float], total_staff: int) -> List[int]:
    sizes = []
    for f in factors:
        if not math.isfinite(f) or f <= 0:
            raise InvalidParameters(f"Workforce-size factors must be positive and finite, got {f}")
        size = int(np.round(total_staff * f))
        if size <= 0:
            raise InvalidParameters(
                f"Factor {f} gives a non-positive workforce size ({size}) for {total_staff} staff"
            )
        sizes.append(size)
    return sizes


def _scenario_block(
    factor: float,
    workforce_size: int,
    adjustment: np.ndarray,
    productivity: np.ndarray,
) -> pd.DataFrame:
    """Rows for a single factor; each row uses the same draw index throughout."""
    available_total = np.round(workforce_size * adjustment)
    adjusted_hires = np.round(MONTHS_PER_YEAR * available_total * productivity)
    n = adjustment.shape[0]
    return pd.DataFrame({
        WORKFORCE_SIZE_FACTOR: np.full(n, factor, dtype=float),
        WORKFORCE_SIZE: np.full(n, workforce_size, dtype=np.int64),
        SATURATION_ADJUSTMENT: adjustment,
        PRODUCTIVITY_RATE: productivity,
        AVAILABLE_STAFF_TOTAL: available_total.astype(np.int64),
        ADJUSTED_ANNUAL_HIRES: adjusted_hires.astype(np.int64),
        STAFF_AVAILABILITY_RATIO: available_total / workforce_size,
    }, columns=SCENARIO_COLUMNS)


def run_scenario_sweep(
    adjustment,
    productivity_params: LogNormalParams,
    total_staff: int,
    factors: Sequence[float],
    seed: int,
    reseed_per_factor: bool = False,
) -> pd.DataFrame:
    """
    Repeat the saturation-adjusted forecast for every workforce-size factor.

    For each factor ``f`` (in the given order):

        workforce_size          = round(total_staff * f)
        productivity            ~ LogNormal(mu, sigma), N draws from the scenario seed
        available_staff_total_i = round(workforce_size * adjustment_i)
        adjusted_annual_hires_i = round(12 * available_staff_total_i * productivity_i)

    Args:
        adjustment: Saturation adjustment vector, reused for every factor.
            Its length sets the number of rows per factor.
        productivity_params: Log-normal parameters of monthly productivity.
        total_staff: Talent-acquisition headcount (> 0).
        factors: Workforce-size scaling factors.
        seed: Base seed. By default every factor reuses the same scenario
            seed, so differences between scenarios come from the factor alone.
        reseed_per_factor: Give every factor its own child seed instead.

    Returns:
        Long-form scenario table, ``len(factors) * N`` rows in factor order.
    """
    adj = np.asarray(adjustment, dtype=float)
    if adj.ndim != 1 or adj.size == 0:
        raise InvalidParameters("Adjustment vector must be a non-empty 1-D array")
    if not np.isfinite(adj).all():
        raise InvalidParameters("Adjustment vector contains non-finite values")
    if isinstance(total_staff, bool) or int(total_staff) != total_staff or total_staff <= 0:
        raise InvalidParameters(f"total_staff must be a positive integer, got {total_staff}")
    factors = list(factors)
    if not factors:
        raise InvalidParameters("At least one workforce-size factor is required")
    sizes = _workforce_sizes(factors, total_staff)

    sample_count = adj.size
    blocks = []
    for idx, (factor, size) in enumerate(zip(factors, sizes)):
        if reseed_per_factor:
            scenario_seed = stream_seed(seed, SCENARIO_STREAM, idx + 1)
        else:
            scenario_seed = stream_seed(seed, SCENARIO_STREAM)
        productivity = sample_lognormal(
            productivity_params.mu,
            productivity_params.sigma,
            sample_count,
            scenario_seed,
        )
        block = _scenario_block(factor, size, adj, np.asarray(productivity))
        logger.debug(
            f"[SWEEP] factor={factor:.2f} workforce={size}: "
            f"median adjusted hires={block[ADJUSTED_ANNUAL_HIRES].median():,.0f}"
        )
        blocks.append(block)

    table = pd.concat(blocks, ignore_index=True)
    logger.info(
        f"[SWEEP] Built scenario table: {len(factors)} factors x {sample_count} draws "
        f"= {len(table)} rows (reseed_per_factor={reseed_per_factor})"
    )
    return table
