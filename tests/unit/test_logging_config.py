"""
Tests for the structured logging configuration.
"""
import logging

import pytest

import logging_config
from logging_config import (
    DEBUG_LOGGER,
    PERFORMANCE_LOGGER,
    SIMULATION_LOGGER,
    clear_logs,
    reset_logging,
    setup_logging,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def fresh_logging():
    root = logging.getLogger()
    saved_level = root.level
    reset_logging()
    yield
    reset_logging()
    root.setLevel(saved_level)


def _flush():
    for h in logging.getLogger().handlers + logging.getLogger(SIMULATION_LOGGER).handlers:
        h.flush()


def test_setup_creates_concern_specific_files(tmp_path, fresh_logging):
    setup_logging(tmp_path, debug=False)
    logging.getLogger(SIMULATION_LOGGER).info("stage event")
    logging.getLogger(PERFORMANCE_LOGGER).info("stage timing")
    logging.getLogger("capacity_model.engines").warning("clamped rows")
    _flush()

    assert "stage event" in (tmp_path / "simulation_events.log").read_text()
    assert "stage timing" in (tmp_path / "performance_metrics.log").read_text()
    warnings_log = (tmp_path / "warnings_errors.log").read_text()
    assert "clamped rows" in warnings_log
    assert "stage event" not in warnings_log
    combined = (tmp_path / "combined.log").read_text()
    assert "stage event" in combined and "clamped rows" in combined
    assert not (tmp_path / "debug_detail.log").exists()


def test_debug_file_only_with_debug_flag(tmp_path, fresh_logging):
    setup_logging(tmp_path, debug=True)
    logging.getLogger(DEBUG_LOGGER).debug("draw details")
    for h in logging.getLogger(DEBUG_LOGGER).handlers:
        h.flush()
    assert "draw details" in (tmp_path / "debug_detail.log").read_text()


def test_setup_is_idempotent(tmp_path, fresh_logging):
    setup_logging(tmp_path)
    count = len(logging.getLogger().handlers)
    setup_logging(tmp_path / "other")
    assert len(logging.getLogger().handlers) == count
    assert not (tmp_path / "other").exists()
    assert logging_config._LOGGING_CONFIGURED


def test_clear_logs_removes_known_files(tmp_path):
    (tmp_path / "combined.log").write_text("old")
    (tmp_path / "notes.txt").write_text("keep")
    clear_logs(tmp_path)
    assert not (tmp_path / "combined.log").exists()
    assert (tmp_path / "notes.txt").exists()
