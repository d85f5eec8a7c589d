"""
SHT4x Calibration Core Module - Initialization
===============================================

Core module provides the uncertainty propagation engine.

Components:
-----------
1. distributions.py - Distribution providers (native, Monte Carlo) and
                      distributional values
2. aggregation.py   - Sample buffer and mean/variance aggregation

Usage:
------
from sht4x_uncertainty.core import make_provider, aggregate

provider = make_provider(monte_carlo=False, representation_size=4096, seed=1)
vt = provider.uniform(2.3, 2.7)

Version: 1.0.0
Author: Sensor Calibration Team
Date: October 17, 2026
"""

from .distributions import (
    DistributionalValue,
    EmpiricalDistribution,
    DistributionProvider,
    NativeDistributionProvider,
    MonteCarloProvider,
    make_provider,
    point_estimate,
)

from .aggregation import (
    AllocationError,
    MeanAndVariance,
    SampleBuffer,
    aggregate,
)

__all__ = [
    # Distributions
    "DistributionalValue",
    "EmpiricalDistribution",
    "DistributionProvider",
    "NativeDistributionProvider",
    "MonteCarloProvider",
    "make_provider",
    "point_estimate",
    # Aggregation
    "AllocationError",
    "MeanAndVariance",
    "SampleBuffer",
    "aggregate",
]

__version__ = "1.0.0"
