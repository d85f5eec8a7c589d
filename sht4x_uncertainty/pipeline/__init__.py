"""
SHT4x Calibration Pipeline Module - Initialization
===================================================

End-to-end run orchestration and reporting.

Components:
-----------
1. runner.py    - RunConfiguration, CalibrationEngine, CalibrationPipeline
2. reporting.py - Tail-probability computation and text report

Usage:
------
from sht4x_uncertainty.pipeline import CalibrationPipeline, RunConfiguration

pipeline = CalibrationPipeline(RunConfiguration())
result = pipeline.execute()

Version: 1.0.0
Author: Sensor Calibration Team
Date: October 17, 2026
"""

from .reporting import (
    THRESHOLDS,
    ProbabilityFault,
    TailProbabilities,
    TailProbabilityReporter,
)

from .runner import (
    RunConfiguration,
    RunResult,
    CalibrationEngine,
    CalibrationPipeline,
)

__all__ = [
    # Reporting
    "THRESHOLDS",
    "ProbabilityFault",
    "TailProbabilities",
    "TailProbabilityReporter",
    # Runner
    "RunConfiguration",
    "RunResult",
    "CalibrationEngine",
    "CalibrationPipeline",
]

__version__ = "1.0.0"
