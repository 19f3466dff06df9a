# capacity_model/ml/__init__.py
from .gls import RegressionModel, build_design, fit_variance_weighted_model

__all__ = ["RegressionModel", "build_design", "fit_variance_weighted_model"]
