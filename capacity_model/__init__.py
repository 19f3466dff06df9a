"""
Stochastic hiring-capacity planning.

Monte Carlo forecast of annual hiring output from staff availability and
per-staffer productivity, with a logistic saturation adjustment, a sweep over
workforce sizes and a variance-weighted (GLS/REML) regression of the sweep.
"""

__version__ = "0.1.0"

from capacity_model.config.models import PlanningConfig, PlanningParameters, SimulationControls, load_planning_config
from capacity_model.exceptions import CapacityModelError, EstimationFailure, InvalidParameters
from capacity_model.simulation import SimulationResult, run_simulation

__all__ = [
    "__version__",
    "PlanningConfig",
    "PlanningParameters",
    "SimulationControls",
    "load_planning_config",
    "CapacityModelError",
    "EstimationFailure",
    "InvalidParameters",
    "SimulationResult",
    "run_simulation",
]
