"""
Structured logging configuration for the capacity-model project.

This module provides a centralized way to configure logging across the application
with different log levels and output files for different concerns.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Set

# Define logger names for different concerns
SIMULATION_LOGGER = "capacity_model.simulation"
PERFORMANCE_LOGGER = "capacity_model.performance"
ERROR_LOGGER = "capacity_model.errors"
DEBUG_LOGGER = "capacity_model.debug"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = Path("output_dev/simulation_logs")

LOG_FILES = [
    "simulation_events.log",
    "performance_metrics.log",
    "warnings_errors.log",
    "debug_detail.log",
    "combined.log",
]

# Track if logging is already configured and the handlers we installed
_LOGGING_CONFIGURED = False
_installed_handlers: Set[logging.Handler] = set()


def clear_logs(log_dir: Path) -> None:
    """
    Clear all log files in the specified directory.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILES:
        log_file = log_dir / name
        if log_file.exists():
            try:
                log_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Could not delete {log_file}: {e}")


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8',
        mode='a'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    _installed_handlers.add(handler)
    return handler


def _attach(logger_name: str, handler: logging.Handler, level: int) -> None:
    named = logging.getLogger(logger_name)
    for h in named.handlers[:]:
        named.removeHandler(h)
    named.setLevel(level)
    named.addHandler(handler)
    named.propagate = True  # Allow to bubble up to root


def setup_logging(log_dir: Path, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Configure structured logging for the application.

    Creates separate log files for different concerns:
    - simulation_events.log: Pipeline stage events (INFO+)
    - performance_metrics.log: Stage timings (INFO+)
    - warnings_errors.log: Warnings and errors (WARNING+)
    - debug_detail.log: Detailed debug information (DEBUG, only if debug=True)
    - combined.log: Combined log of all messages (INFO+)

    Args:
        log_dir: Directory where log files will be stored
        debug: If True, enables debug logging and creates debug_detail.log
        clear_existing: If True, clears existing log files before starting
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if clear_existing:
        clear_logs(log_dir)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Formatters
    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_formatter = logging.Formatter("%(levelname)-8s %(message)s")

    # Console handler (for warnings and above)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(console_formatter)
    _installed_handlers.add(console)
    root_logger.addHandler(console)

    root_logger.addHandler(_file_handler(log_dir / "combined.log", logging.INFO, file_formatter))
    root_logger.addHandler(_file_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter))

    _attach(
        SIMULATION_LOGGER,
        _file_handler(log_dir / "simulation_events.log", logging.INFO, file_formatter),
        logging.INFO,
    )
    _attach(
        PERFORMANCE_LOGGER,
        _file_handler(log_dir / "performance_metrics.log", logging.INFO, file_formatter),
        logging.INFO,
    )

    if debug:
        _attach(
            DEBUG_LOGGER,
            _file_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter),
            logging.DEBUG,
        )

    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Detach and close every handler installed by setup_logging."""
    global _LOGGING_CONFIGURED

    loggers = [logging.getLogger()] + [
        logging.getLogger(name)
        for name in (SIMULATION_LOGGER, PERFORMANCE_LOGGER, ERROR_LOGGER, DEBUG_LOGGER)
    ]
    for lg in loggers:
        for h in lg.handlers[:]:
            if h in _installed_handlers:
                lg.removeHandler(h)
    for h in _installed_handlers:
        h.close()
    _installed_handlers.clear()
    _LOGGING_CONFIGURED = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a properly configured logger instance.

    Args:
        name: Logger name (e.g., __name__). If None, returns root logger.

    Returns:
        Configured logger instance
    """
    if not _LOGGING_CONFIGURED:
        setup_logging(DEFAULT_LOG_DIR, debug=False)
    return logging.getLogger(name)
