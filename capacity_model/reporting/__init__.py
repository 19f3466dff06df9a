# capacity_model/reporting/__init__.py
from .metrics import HiresSummary, probability_exceeding, summarize_hires, summarize_scenarios

__all__ = ["HiresSummary", "probability_exceeding", "summarize_hires", "summarize_scenarios"]
