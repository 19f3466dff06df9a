"""
Configuration management for the capacity model.

This module provides:
- Planning parameters (historical availability and productivity estimates)
- Simulation controls (sample size, seed, sweep grid, saturation shape)
- Validation of plain mappings into typed configuration
"""

from capacity_model.config.models import (
    PlanningConfig,
    PlanningParameters,
    SimulationControls,
    load_planning_config,
)

__all__ = [
    "PlanningConfig",
    "PlanningParameters",
    "SimulationControls",
    "load_planning_config",
]
