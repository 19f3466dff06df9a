import os
import sys

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from capacity_model.config.models import PlanningParameters, SimulationControls


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "slow: mark a test as a slow test")
    config.addinivalue_line("markers", "config: mark a test as a config test")
    config.addinivalue_line("markers", "dynamics: mark a test as a dynamics test")
    config.addinivalue_line("markers", "engines: mark a test as an engines test")
    config.addinivalue_line("markers", "ml: mark a test as a regression-model test")


@pytest.fixture
def planning_parameters():
    """Reference planning inputs: 150 staff, 80% +/- 5% availability, 15 +/- 4.5 hires/month."""
    return PlanningParameters(
        hiring_goal=15000,
        total_staff=150,
        mean_availability=0.8,
        std_availability=0.05,
        mean_monthly_hiring=15,
        std_monthly_hiring=4.5,
    )


@pytest.fixture
def small_controls():
    return SimulationControls(sample_count=2000, seed=2025)
