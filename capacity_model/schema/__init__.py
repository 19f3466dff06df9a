"""
Column names and table validation for the capacity model.

Example Usage:
    >>> from capacity_model.schema import columns, validate_scenario_table
    >>> validate_scenario_table(sweep.table).raise_if_invalid("scenario table")
"""

from . import columns
from .validation import (
    ValidationResult,
    validate_table,
    validate_baseline_table,
    validate_scenario_table,
)

__all__ = [
    'columns',
    'ValidationResult',
    'validate_table',
    'validate_baseline_table',
    'validate_scenario_table',
]
