"""
SHT4x Calibration with Uncertainty Propagation
==============================================

Converts the three analog outputs of an SHT4xI-analog sensor into relative
humidity and temperature while propagating input uncertainty.

Modules:
--------
- core: Distribution providers (native, Monte Carlo) and aggregation
- physics: Datasheet calibration equations
- pipeline: Run orchestration and tail-probability reporting
- telemetry: Input distribution source
- utils: Configuration, logging and result I/O
- cli: Command line entry point

Features:
---------
✅ Native distributional arithmetic (single pass)
✅ Monte Carlo sampling with population statistics
✅ Tail probabilities at ±5 %, ±50 %, ±100 %, ±200 %
✅ Text, JSON, CSV and benchmark output
✅ YAML configuration of input ranges

Quick Start:
-----------
from sht4x_uncertainty.pipeline import CalibrationPipeline, RunConfiguration
from sht4x_uncertainty.physics import OutputChannel

run_config = RunConfiguration(output_select=OutputChannel.RELATIVE_HUMIDITY)
CalibrationPipeline(run_config).execute()

Version: 1.0.0
Author: Sensor Calibration Team
Date: October 17, 2026
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Sensor Calibration Team"
__date__ = "2026-10-17"
__all__ = [
    "core",
    "physics",
    "pipeline",
    "telemetry",
    "utils",
]
