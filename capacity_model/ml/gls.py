# capacity_model/ml/gls.py
"""
Variance-weighted regression of adjusted hires on workforce size and staff
availability.

Model, on inputs centered at their table means:

    adjusted_annual_hires = b0 + b1 * ws_c + b2 * ratio_c + e
    Var(e_i)              = sigma^2 * exp(2 * delta * ws_c_i)

``delta`` (the variance exponent) is estimated by restricted maximum
likelihood: for a fixed ``delta`` the coefficients and ``sigma^2`` have closed
forms, so the REML log-likelihood is profiled down to a one-dimensional
function of ``delta`` and maximized with a bounded scalar search. The
coefficients are the generalized least-squares estimates at that optimum.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd
from scipy import linalg
from scipy.optimize import minimize_scalar

from capacity_model.exceptions import EstimationFailure, InvalidParameters
from capacity_model.schema.columns import (
    ADJUSTED_ANNUAL_HIRES,
    AVAILABLE_STAFF_TOTAL,
    REGRESSION_TERMS,
    WORKFORCE_SIZE,
)
from capacity_model.schema.validation import validate_table

logger = logging.getLogger(__name__)

# Search range for delta, expressed as the log of the largest residual
# standard-deviation ratio allowed between the mean and the extreme workforce size.
MAX_LOG_SD_RATIO = 10.0

REQUIRED_COLUMNS = [WORKFORCE_SIZE, AVAILABLE_STAFF_TOTAL, ADJUSTED_ANNUAL_HIRES]


@dataclass(frozen=True)
class RegressionModel:
    """Fitted GLS model with an exponential variance function of workforce size."""
    coefficients: pd.Series
    standard_errors: pd.Series
    variance_exponent: float
    residual_standard_error: float
    mean_workforce_size: float
    mean_staff_availability_ratio: float
    log_likelihood: float
    aic: float
    bic: float
    nobs: int
    converged: bool = True

    def predict(self, workforce_size, staff_availability_ratio) -> np.ndarray:
        """Expected adjusted annual hires for raw (uncentered) inputs."""
        ws_c = np.asarray(workforce_size, dtype=float) - self.mean_workforce_size
        ratio_c = np.asarray(staff_availability_ratio, dtype=float) - self.mean_staff_availability_ratio
        b0, b1, b2 = self.coefficients.to_numpy()
        return b0 + b1 * ws_c + b2 * ratio_c

    def residual_sd(self, workforce_size) -> np.ndarray:
        """Modelled residual standard deviation at a given workforce size."""
        ws_c = np.asarray(workforce_size, dtype=float) - self.mean_workforce_size
        return self.residual_standard_error * np.exp(self.variance_exponent * ws_c)

    def to_frame(self) -> pd.DataFrame:
        """Coefficient table (estimate, standard error, t value) indexed by term."""
        return pd.DataFrame({
            "estimate": self.coefficients,
            "std_error": self.standard_errors,
            "t_value": self.coefficients / self.standard_errors,
        })

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["coefficients"] = self.coefficients.to_dict()
        data["standard_errors"] = self.standard_errors.to_dict()
        return data


@dataclass(frozen=True)
class _GLSStep:
    beta: np.ndarray
    cov_unscaled: np.ndarray
    sigma2: float
    log_likelihood: float


def build_design(scenario_df: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray, np.ndarray, float, float]:
    """
    Centered design matrix for the scenario table.

    Returns:
        (X, y, ws_c, mean_workforce_size, mean_staff_availability_ratio); the
        columns of X follow REGRESSION_TERMS.
    """
    validate_table(scenario_df, REQUIRED_COLUMNS, "scenario table").raise_if_invalid("scenario table")

    ws = scenario_df[WORKFORCE_SIZE].to_numpy(dtype=float)
    if (ws <= 0).any():
        raise InvalidParameters("workforce_size must be positive in every row")
    ratio = scenario_df[AVAILABLE_STAFF_TOTAL].to_numpy(dtype=float) / ws
    y = scenario_df[ADJUSTED_ANNUAL_HIRES].to_numpy(dtype=float)

    mean_ws = float(ws.mean())
    mean_ratio = float(ratio.mean())
    ws_c = ws - mean_ws
    X = np.column_stack([np.ones_like(ws), ws_c, ratio - mean_ratio])
    return X, y, ws_c, mean_ws, mean_ratio


def _gls_step(X: np.ndarray, y: np.ndarray, ws_c: np.ndarray, delta: float) -> _GLSStep:
    """GLS fit and profiled REML log-likelihood for a fixed variance exponent."""
    n, p = X.shape
    sqrt_w = np.exp(-delta * ws_c)
    Xw = X * sqrt_w[:, None]
    yw = y * sqrt_w

    xtx = Xw.T @ Xw
    try:
        factor = linalg.cho_factor(xtx, lower=True)
    except linalg.LinAlgError as e:
        raise EstimationFailure(
            f"Weighted normal equations are singular at delta={delta:.6g} "
            f"(condition number={np.linalg.cond(xtx):.3g})"
        ) from e

    beta = linalg.cho_solve(factor, Xw.T @ yw)
    resid = yw - Xw @ beta
    sigma2 = float(resid @ resid) / (n - p)
    if not sigma2 > 0:
        raise EstimationFailure("Residual variance is zero; the variance function is not identifiable")

    logdet_xtx = 2.0 * float(np.log(np.diag(factor[0])).sum())
    logdet_var = 2.0 * delta * float(ws_c.sum())
    log_likelihood = -0.5 * (
        (n - p) * (math.log(2.0 * math.pi * sigma2) + 1.0) + logdet_var + logdet_xtx
    )
    cov_unscaled = linalg.cho_solve(factor, np.eye(p))
    return _GLSStep(beta=beta, cov_unscaled=cov_unscaled, sigma2=sigma2, log_likelihood=log_likelihood)


def fit_variance_weighted_model(scenario_df: pd.DataFrame) -> RegressionModel:
    """
    Fit adjusted annual hires on centered workforce size and centered staff
    availability ratio with an exponential variance function, by REML.

    Args:
        scenario_df: Scenario table with workforce size, available staff total
            and adjusted annual hires columns. The staff availability ratio is
            recomputed from the first two.

    Returns:
        The fitted RegressionModel.

    Raises:
        InvalidParameters: If the table is empty, lacks columns or holds non-finite values.
        EstimationFailure: If the design is rank deficient, the weighted normal
            equations are singular, or the REML search does not converge.
    """
    X, y, ws_c, mean_ws, mean_ratio = build_design(scenario_df)
    n, p = X.shape

    if n <= p:
        raise EstimationFailure(f"Need more than {p} rows to fit the model, got {n}")
    rank = np.linalg.matrix_rank(X)
    if rank < p:
        raise EstimationFailure(
            f"Design matrix is rank deficient (rank={rank} < {p}); "
            f"workforce size or staff availability ratio does not vary"
        )

    span = float(np.abs(ws_c).max())
    bound = MAX_LOG_SD_RATIO / span
    logger.info(f"[GLS] Fitting REML model on {n} rows (delta search in [{-bound:.4g}, {bound:.4g}])")

    def objective(delta: float) -> float:
        return -_gls_step(X, y, ws_c, delta).log_likelihood

    res = minimize_scalar(
        objective,
        bounds=(-bound, bound),
        method="bounded",
        options={"xatol": 1e-8 * bound, "maxiter": 500},
    )
    if not res.success:
        raise EstimationFailure(f"REML search for the variance exponent did not converge: {res.message}")

    delta = float(res.x)
    if abs(abs(delta) - bound) < 1e-6 * bound:
        logger.warning(f"[GLS] Variance exponent {delta:.6g} sits at the search bound")

    step = _gls_step(X, y, ws_c, delta)
    sigma = math.sqrt(step.sigma2)
    std_errors = np.sqrt(np.diag(step.cov_unscaled) * step.sigma2)

    # beta, sigma and delta
    n_params = p + 2
    aic = -2.0 * step.log_likelihood + 2.0 * n_params
    bic = -2.0 * step.log_likelihood + n_params * math.log(n - p)

    model = RegressionModel(
        coefficients=pd.Series(step.beta, index=REGRESSION_TERMS, name="estimate"),
        standard_errors=pd.Series(std_errors, index=REGRESSION_TERMS, name="std_error"),
        variance_exponent=delta,
        residual_standard_error=sigma,
        mean_workforce_size=mean_ws,
        mean_staff_availability_ratio=mean_ratio,
        log_likelihood=step.log_likelihood,
        aic=aic,
        bic=bic,
        nobs=n,
        converged=bool(res.success),
    )
    logger.info(
        f"[GLS] Coefficients: {model.coefficients.round(4).to_dict()}, "
        f"variance exponent={delta:.6g}, residual SE={sigma:,.2f}, REML logLik={step.log_likelihood:,.2f}"
    )
    return model
