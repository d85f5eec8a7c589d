"""
SHT4x Calibration Core - Monte Carlo Aggregation
=================================================

Sample retention and summary statistics for sampling mode.

Components:
-----------
1. SampleBuffer     - Preallocated, sequentially written output samples
2. MeanAndVariance  - Summary of a sample sequence
3. aggregate()      - Mean and population variance in one pass

Statistics:
-----------
    mean     = (1/N) × Σ x_i
    variance = (1/N) × Σ (x_i - mean)²     (population form, not N-1)

Example:
--------
>>> buffer = SampleBuffer(3)
>>> for x in (1.0, 2.0, 3.0):
...     buffer.append(x)
>>> aggregate(buffer.freeze())
MeanAndVariance(mean=2.0, variance=0.666..., count=3)

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Union
import logging

logger = logging.getLogger(__name__)


class AllocationError(Exception):
    """Sample buffer could not be reserved."""
    pass


@dataclass(frozen=True)
class MeanAndVariance:
    """Summary statistics of a sample sequence."""
    mean: float
    variance: float
    count: int

    @property
    def std(self) -> float:
        return float(np.sqrt(self.variance))


def aggregate(samples: Union[Sequence[float], np.ndarray]) -> MeanAndVariance:
    """
    Reduce samples to mean and population variance.

    Args:
        samples: Sequence of N >= 1 scalar outputs

    Returns:
        MeanAndVariance with count N

    Raises:
        ValueError: If samples is empty
    """
    data = np.asarray(samples, dtype=float)
    n = data.size
    if n == 0:
        raise ValueError("Cannot aggregate an empty sample sequence")

    mean = float(np.mean(data))
    # Clamp rounding residue; the sum of squares is never negative
    variance = max(float(np.mean((data - mean) ** 2)), 0.0)

    return MeanAndVariance(mean=mean, variance=variance, count=n)


class SampleBuffer:
    """
    Fixed-size buffer of Monte Carlo outputs.

    Allocated once up front with exactly `capacity` slots, written strictly
    in order by the iteration loop, then frozen read-only for aggregation
    and reporting.

    Args:
        capacity: Number of iterations N

    Raises:
        AllocationError: If the buffer cannot be reserved
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Buffer capacity must be >= 1, got {capacity}")

        try:
            self._data = np.empty(capacity, dtype=float)
        except (MemoryError, ValueError) as e:
            raise AllocationError(
                f"Unable to reserve sample buffer of {capacity} values: {e}"
            ) from e

        self.capacity = capacity
        self.count = 0
        self.frozen = False

        logger.debug(f"SampleBuffer allocated: {capacity} slots")

    def append(self, value: float) -> None:
        if self.frozen:
            raise RuntimeError("SampleBuffer is frozen")
        if self.count >= self.capacity:
            raise IndexError(f"SampleBuffer full ({self.capacity} samples)")

        self._data[self.count] = value
        self.count += 1

    def freeze(self) -> np.ndarray:
        """Stop writes and return a read-only view of the samples."""
        self.frozen = True
        view = self._data[:self.count]
        view.flags.writeable = False
        return view

    def __len__(self):
        return self.count
