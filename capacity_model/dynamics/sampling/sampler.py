# capacity_model/dynamics/sampling/sampler.py
"""
Reproducible Monte Carlo draws for availability and productivity.

Every call builds its own numpy Generator from the seed it is given, so the
output depends only on the arguments and never on call order or global
random state.
"""

import logging
import math
from dataclasses import dataclass
from typing import Union

import numpy as np
from numpy.random import SeedSequence, default_rng

from capacity_model.exceptions import InvalidParameters
from capacity_model.schema.columns import AVAILABILITY_FRACTION, PRODUCTIVITY_RATE

logger = logging.getLogger(__name__)

SeedLike = Union[int, SeedSequence]

# Stream keys for stream_seed()
AVAILABILITY_STREAM = 0
PRODUCTIVITY_STREAM = 1
SCENARIO_STREAM = 2


@dataclass(frozen=True)
class SampleVector:
    """An ordered, read-only vector of draws for one random variable."""
    name: str
    values: np.ndarray

    def __post_init__(self):
        values = np.array(self.values, dtype=float, copy=True)
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return self.values.shape[0]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self.values
        return self.values.astype(dtype)


def stream_seed(seed: int, *keys: int) -> SeedSequence:
    """
    Derive an independent child seed for a named random stream.

    ``stream_seed(2025, SCENARIO_STREAM)`` always yields the same sequence,
    and distinct keys yield statistically independent streams.
    """
    if seed < 0 or any(k < 0 for k in keys):
        raise InvalidParameters(f"Seeds and stream keys must be non-negative (seed={seed}, keys={keys})")
    return SeedSequence([seed, *keys])


def _check_count(count: int) -> None:
    if isinstance(count, bool) or int(count) != count or count <= 0:
        raise InvalidParameters(f"Sample count must be a positive integer, got {count}")


def sample_normal(
    mean: float,
    std: float,
    count: int,
    seed: SeedLike,
    name: str = AVAILABILITY_FRACTION,
) -> SampleVector:
    """
    Draw ``count`` i.i.d. normal values.

    Args:
        mean: Location of the distribution.
        std: Standard deviation (>= 0).
        count: Number of draws (> 0).
        seed: Integer seed or SeedSequence; identical seeds give identical draws.
        name: Label of the random variable.

    Returns:
        SampleVector of length ``count``.
    """
    _check_count(count)
    if not (math.isfinite(mean) and math.isfinite(std)):
        raise InvalidParameters(f"Normal parameters must be finite (mean={mean}, std={std})")
    if std < 0:
        raise InvalidParameters(f"Normal standard deviation must be non-negative, got {std}")

    rng = default_rng(seed)
    draws = rng.normal(loc=mean, scale=std, size=int(count))
    logger.debug(
        f"[SAMPLER] {name}: N={count}, mean={draws.mean():.4f}, std={draws.std():.4f}"
    )
    return SampleVector(name=name, values=draws)


def sample_lognormal(
    mu: float,
    sigma: float,
    count: int,
    seed: SeedLike,
    name: str = PRODUCTIVITY_RATE,
) -> SampleVector:
    """
    Draw ``count`` i.i.d. log-normal values with ``log(X) ~ N(mu, sigma)``.

    Args:
        mu: Mean of the underlying normal.
        sigma: Standard deviation of the underlying normal (>= 0).
        count: Number of draws (> 0).
        seed: Integer seed or SeedSequence; identical seeds give identical draws.
        name: Label of the random variable.

    Returns:
        SampleVector of length ``count``.
    """
    _check_count(count)
    if not (math.isfinite(mu) and math.isfinite(sigma)):
        raise InvalidParameters(f"Log-normal parameters must be finite (mu={mu}, sigma={sigma})")
    if sigma < 0:
        raise InvalidParameters(f"Log-normal sigma must be non-negative, got {sigma}")

    rng = default_rng(seed)
    draws = rng.lognormal(mean=mu, sigma=sigma, size=int(count))
    logger.debug(
        f"[SAMPLER] {name}: N={count}, mean={draws.mean():.4f}, median={np.median(draws):.4f}"
    )
    return SampleVector(name=name, values=draws)
