# capacity_model/engines/__init__.py
"""
Production engines: baseline output, saturation adjustment and scenario sweep.
"""

from .baseline import MONTHS_PER_YEAR, run_baseline
from .saturation import DEFAULT_ALPHA, DEFAULT_THRESHOLD, apply_saturation, logistic_adjustment
from .scenario_sweep import build_factor_grid, run_scenario_sweep

__all__ = [
    "MONTHS_PER_YEAR",
    "run_baseline",
    "DEFAULT_ALPHA",
    "DEFAULT_THRESHOLD",
    "apply_saturation",
    "logistic_adjustment",
    "build_factor_grid",
    "run_scenario_sweep",
]
