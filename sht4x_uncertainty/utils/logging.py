"""
SHT4x Calibration Utils - Logging & Diagnostics
================================================

Logging setup and diagnostic helpers.

Results (calibrated values, tail probabilities, JSON records, benchmark
lines) are written to stdout by the emitter. Diagnostics go through the
logging system, whose console handler writes to stderr so the two streams
never interleave.

Log Format:
-----------
[2026-10-17 12:30:45.123] [INFO    ] [sht4x_uncertainty.pipeline.runner] Message here
[TIMESTAMP] [LEVEL] [MODULE] Message

Example:
--------
>>> from sht4x_uncertainty.utils import setup_logging, get_logger
>>>
>>> setup_logging(level="INFO")
>>> logger = get_logger(__name__)
>>> logger.info("Run started")

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional, Any
from datetime import datetime


_loggers = {}


class StructuredFormatter(logging.Formatter):
    """Structured logging formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with structure.

        Args:
            record: Log record

        Returns:
            Formatted string
        """
        timestamp = datetime.fromtimestamp(record.created).strftime(
            "%Y-%m-%d %H:%M:%S.%f"
        )[:-3]

        message = (
            f"[{timestamp}] [{record.levelname:8}] "
            f"[{record.name}] {record.getMessage()}"
        )
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(level: str = "WARNING",
                  log_dir: Optional[str] = None,
                  console_output: bool = True) -> None:
    """
    Set up logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for a rotating log file, or None for console only
        console_output: Enable console (stderr) output

    Example:
        >>> setup_logging(level="DEBUG", log_dir="logs/")
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = StructuredFormatter()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"sht4x_calibration_{timestamp}.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5,
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging configured: level={level}, dir={log_dir}")


def get_logger(name: str) -> logging.Logger:
    """
    Get logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_statistics(stats: Dict[str, Any],
                   title: str = "Statistics Summary") -> None:
    """
    Log statistics summary.

    Args:
        stats: Statistics dictionary
        title: Heading line

    Example:
        >>> log_statistics({"mean": 42.5, "variance": 1.2, "count": 1000})
    """
    logger = get_logger(__name__)

    logger.info(f"=== {title} ===")
    for key, value in stats.items():
        if isinstance(value, float):
            logger.info(f"{key}: {value:.6f}")
        else:
            logger.info(f"{key}: {value}")


def log_error(error: Exception,
              context: str = "") -> None:
    """
    Log an error with context.

    Args:
        error: Exception that occurred
        context: Context information

    Example:
        >>> try:
        ...     runner.run()
        ... except ConfigError as e:
        ...     log_error(e, context="Invalid configuration")
    """
    logger = get_logger(__name__)

    if context:
        logger.error(f"{context}: {str(error)}")
    else:
        logger.error(f"Error: {str(error)}")

    logger.debug("", exc_info=True)
