"""
Schema validation utilities for simulation and scenario tables.

Checks that a table handed between pipeline stages carries the expected
columns and only finite numeric values before any computation starts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from capacity_model.exceptions import InvalidParameters
from .columns import BASELINE_COLUMNS, SCENARIO_COLUMNS


@dataclass
class ValidationResult:
    """Result of schema validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Add an error to the validation result."""
        self.errors.append(message)
        self.is_valid = False
        if context:
            self.metadata.setdefault("error_contexts", []).append(context)

    def add_warning(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Add a warning to the validation result."""
        self.warnings.append(message)
        if context:
            self.metadata.setdefault("warning_contexts", []).append(context)

    def has_issues(self) -> bool:
        return bool(self.errors or self.warnings)

    def raise_if_invalid(self, table_name: str) -> None:
        """Raise InvalidParameters carrying every collected error."""
        if not self.is_valid:
            raise InvalidParameters(
                f"{table_name} failed validation: " + "; ".join(self.errors)
            )


def validate_table(
    df: pd.DataFrame,
    required_columns: Sequence[str],
    table_name: str = "table",
) -> ValidationResult:
    """Validate that ``df`` is non-empty, has ``required_columns`` and finite values.

    Args:
        df: Table to validate
        required_columns: Columns that must be present and numeric
        table_name: Label used in error messages

    Returns:
        Validation result with any issues found
    """
    result = ValidationResult(is_valid=True)

    if not isinstance(df, pd.DataFrame):
        result.add_error(f"expected a pandas DataFrame, got {type(df).__name__}")
        return result
    if df.empty:
        result.add_error("table is empty")
        return result

    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        result.add_error(f"missing required columns: {missing}")
        return result

    for col in required_columns:
        if not pd.api.types.is_numeric_dtype(df[col]):
            result.add_error(f"column '{col}' is not numeric (dtype={df[col].dtype})")
            continue
        values = df[col].to_numpy(dtype=float)
        bad = int((~np.isfinite(values)).sum())
        if bad:
            result.add_error(
                f"column '{col}' has {bad} non-finite values",
                context={"column": col, "non_finite": bad},
            )

    extra = [col for col in df.columns if col not in required_columns]
    if extra:
        result.add_warning(f"unexpected columns ignored: {extra}")

    return result


def validate_baseline_table(df: pd.DataFrame) -> ValidationResult:
    return validate_table(df, BASELINE_COLUMNS, "baseline table")


def validate_scenario_table(df: pd.DataFrame) -> ValidationResult:
    return validate_table(df, SCENARIO_COLUMNS, "scenario table")
