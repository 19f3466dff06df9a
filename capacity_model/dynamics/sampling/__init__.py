# capacity_model/dynamics/sampling/__init__.py
"""
Sampling helpers for the Monte Carlo engine.
"""

from .lognormal import LogNormalParams, derive_lognormal_params
from .sampler import (
    AVAILABILITY_STREAM,
    PRODUCTIVITY_STREAM,
    SCENARIO_STREAM,
    SampleVector,
    sample_lognormal,
    sample_normal,
    stream_seed,
)

__all__ = [
    "LogNormalParams",
    "derive_lognormal_params",
    "SampleVector",
    "sample_normal",
    "sample_lognormal",
    "stream_seed",
    "AVAILABILITY_STREAM",
    "PRODUCTIVITY_STREAM",
    "SCENARIO_STREAM",
]
