"""
SHT4x Calibration Telemetry Module - Initialization
====================================================

Input acquisition for the calibration pipeline.

Components:
-----------
1. sources.py - Uniform input ranges and the distribution source

Usage:
------
from sht4x_uncertainty.core import make_provider
from sht4x_uncertainty.telemetry import DistributionSource

source = DistributionSource(make_provider(monte_carlo=True, seed=3))
sample = source.draw_inputs()

Version: 1.0.0
Author: Sensor Calibration Team
Date: October 17, 2026
"""

from .sources import (
    ChannelRange,
    DistributionSource,
    DEFAULT_RANGES,
    ranges_from_config,
)

__all__ = [
    "ChannelRange",
    "DistributionSource",
    "DEFAULT_RANGES",
    "ranges_from_config",
]

__version__ = "1.0.0"
