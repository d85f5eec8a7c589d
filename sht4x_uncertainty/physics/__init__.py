"""
SHT4x Calibration Physics Module - Initialization
==================================================

Datasheet conversion equations for the SHT4xI-analog sensor.

Components:
-----------
1. calibration.py - Input/output channels, coefficient table, evaluate()

Usage:
------
from sht4x_uncertainty.physics import InputSample, OutputChannel, evaluate

result = evaluate(InputSample(vrh=2.5, vt=2.5, vsupply=5.0), OutputChannel.ALL)

Version: 1.0.0
Author: Sensor Calibration Team
Date: October 17, 2026
"""

from .calibration import (
    InputChannel,
    OutputChannel,
    InputSample,
    CalibrationCoefficients,
    CalibrationResult,
    CALIBRATION_TABLE,
    evaluate,
)

__all__ = [
    "InputChannel",
    "OutputChannel",
    "InputSample",
    "CalibrationCoefficients",
    "CalibrationResult",
    "CALIBRATION_TABLE",
    "evaluate",
]

__version__ = "1.0.0"
