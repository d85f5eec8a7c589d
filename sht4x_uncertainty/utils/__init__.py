"""
SHT4x Calibration Utils Module - Initialization
================================================

Utility functions and helpers.

Submodules:
-----------
1. config.py  - Configuration loading and validation
2. logging.py - Logging setup and diagnostics
3. io.py      - JSON, CSV and sample-dump output

Usage:
------
from sht4x_uncertainty.utils import load_default_config, setup_logging

setup_logging(level="INFO")
config = load_default_config()

Version: 1.0.0
Author: Sensor Calibration Team
Date: October 17, 2026
"""

from .config import (
    load_config,
    load_default_config,
    validate_config,
    merge_configs,
    get_config_value,
    ConfigError,
)

from .logging import (
    setup_logging,
    get_logger,
    log_statistics,
    log_error,
)

from .io import (
    OutputRecord,
    write_json,
    write_csv_snapshot,
    save_monte_carlo_samples,
    format_benchmark_line,
)

__all__ = [
    # Config functions
    "load_config",
    "load_default_config",
    "validate_config",
    "merge_configs",
    "get_config_value",
    "ConfigError",
    # Logging functions
    "setup_logging",
    "get_logger",
    "log_statistics",
    "log_error",
    # I/O
    "OutputRecord",
    "write_json",
    "write_csv_snapshot",
    "save_monte_carlo_samples",
    "format_benchmark_line",
]

__version__ = "1.0.0"
