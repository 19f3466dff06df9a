# capacity_model/config/models.py
"""
Pydantic models for validating planning parameters and simulation controls.
"""

import logging
import math
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from capacity_model.exceptions import InvalidParameters

logger = logging.getLogger(__name__)


class PlanningParameters(BaseModel):
    """Historical estimates that drive the hiring forecast."""

    model_config = ConfigDict(frozen=True)

    hiring_goal: float = Field(
        ..., gt=0, description="Fiscal-year hiring target (hires per year)"
    )
    total_staff: int = Field(
        ..., gt=0, description="Talent-acquisition headcount"
    )
    mean_availability: float = Field(
        ..., gt=0.0, lt=1.0, description="Average fraction of staff available to recruit"
    )
    std_availability: float = Field(
        ..., ge=0.0, lt=1.0, description="Standard deviation of the availability fraction"
    )
    mean_monthly_hiring: float = Field(
        ..., gt=0.0, description="Average hires per available staffer per month"
    )
    std_monthly_hiring: float = Field(
        ..., ge=0.0, description="Standard deviation of monthly hires per staffer"
    )

    @field_validator(
        "hiring_goal",
        "mean_availability",
        "std_availability",
        "mean_monthly_hiring",
        "std_monthly_hiring",
    )
    @classmethod
    def check_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("value must be finite")
        return v

    @model_validator(mode='after')
    def check_availability_spread(self) -> 'PlanningParameters':
        """The availability spread must stay below its mean."""
        if self.std_availability >= self.mean_availability:
            raise ValueError(
                f"std_availability ({self.std_availability}) must be smaller than "
                f"mean_availability ({self.mean_availability})"
            )
        return self


class SimulationControls(BaseModel):
    """Sampling, saturation and sweep controls."""

    model_config = ConfigDict(frozen=True)

    sample_count: int = Field(20000, gt=0, description="Monte Carlo draws per run")
    seed: int = Field(2025, ge=0, description="Base seed for every random stream")
    factor_start: float = Field(0.5, gt=0.0, description="Smallest workforce-size factor")
    factor_stop: float = Field(1.0, gt=0.0, description="Largest workforce-size factor (inclusive)")
    factor_step: float = Field(0.05, gt=0.0, description="Spacing between workforce-size factors")
    alpha: float = Field(6.0, gt=0.0, description="Logistic steepness")
    threshold: float = Field(0.7, description="Logistic inflection point on the availability scale")
    reseed_per_factor: bool = Field(
        False,
        description="Draw scenario productivity from a distinct child seed per factor "
        "instead of reusing one scenario seed",
    )
    clamp_negative_staff: bool = Field(
        True, description="Clamp negative available-staff counts from tail draws at zero"
    )
    fit_regression: bool = Field(True, description="Fit the GLS model on the scenario table")

    @field_validator("factor_start", "factor_stop", "factor_step", "alpha", "threshold")
    @classmethod
    def check_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("value must be finite")
        return v

    @model_validator(mode='after')
    def check_factor_range(self) -> 'SimulationControls':
        if self.factor_stop < self.factor_start:
            raise ValueError(
                f"factor_stop ({self.factor_stop}) must not be below factor_start ({self.factor_start})"
            )
        return self


class PlanningConfig(BaseModel):
    """Complete input for one planning run."""

    model_config = ConfigDict(frozen=True)

    parameters: PlanningParameters
    controls: SimulationControls = Field(default_factory=SimulationControls)


def load_planning_config(data: Mapping[str, Any]) -> PlanningConfig:
    """
    Build a PlanningConfig from a plain mapping.

    Args:
        data: Mapping with a ``parameters`` section and an optional ``controls`` section.

    Returns:
        The validated configuration.

    Raises:
        InvalidParameters: If the mapping fails validation.
    """
    try:
        config = PlanningConfig.model_validate(dict(data))
    except ValidationError as e:
        logger.error(f"Planning configuration failed validation: {e}")
        raise InvalidParameters(f"Invalid planning configuration: {e}") from e
    logger.debug(f"Loaded planning configuration: {config.model_dump()}")
    return config
