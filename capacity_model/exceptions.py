"""
Custom exception classes for the capacity model.

Provides specific exception types for the two failure modes of the pipeline:
bad inputs (caught eagerly at the start of each component) and regression
estimation problems.
"""


class CapacityModelError(Exception):
    """Base exception for all capacity-model errors."""

    pass


class InvalidParameters(CapacityModelError, ValueError):
    """Raised when scale/shape inputs, sample counts or factor ranges are invalid."""

    pass


class EstimationFailure(CapacityModelError, RuntimeError):
    """Raised when the weighted regression cannot be estimated.

    The message carries the underlying linear-algebra condition (matrix rank,
    condition number or optimiser status) so a caller can decide whether to
    retry with different centering or weights.
    """

    pass
