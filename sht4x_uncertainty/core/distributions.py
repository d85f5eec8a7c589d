"""
SHT4x Calibration Core - Distribution Providers
================================================

Pluggable providers of uncertain input values and tail-probability queries.

Two execution strategies share one interface:

1. NativeDistributionProvider
   - uniform(low, high) returns a DistributionalValue: a weighted particle
     ensemble that supports arithmetic, so the calibration formulas propagate
     the whole distribution in a single evaluation.
   - Leaf ensembles are stratified (Latin hypercube) quantiles of
     scipy.stats.uniform, independently permuted per input so that the
     elementwise pairing of particles represents independent inputs.
   - probability_gt() is exact over the representation (weighted mass).

2. MonteCarloProvider
   - uniform(low, high) returns one pseudo-random float per call.
   - The loop retains N outputs; probability_gt() is the empirical
     exceedance fraction count(x > c) / N over an EmpiricalDistribution.

Arithmetic Model:
-----------------
Particles with the same index across distributional values belong to the
same joint draw. Operations between two values combine particle by
particle; operations with scalars broadcast:

    x = uniform(2.3, 2.7)      # particles x_i
    y = uniform(4.8, 5.4)      # particles y_i, independent permutation
    z = -12.5 + 125 * (x / y)  # particles z_i = -12.5 + 125 * x_i / y_i

Example:
--------
>>> provider = NativeDistributionProvider(representation_size=4096, seed=7)
>>> vrh = provider.uniform(2.3, 2.7)
>>> vsupply = provider.uniform(4.8, 5.4)
>>> rh = -12.5 + 125 * (vrh / vsupply)
>>> provider.probability_gt(rh, rh.mean)
0.49...

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import numpy as np
from scipy import stats
from abc import ABC, abstractmethod
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)


Number = Union[int, float]


class DistributionalValue:
    """
    Weighted particle ensemble representing one uncertain quantity.

    Attributes:
        particles: Support points of the distribution
        weights: Probability mass of each support point (sums to 1)
    """

    # Make numpy scalars defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(self,
                 particles: np.ndarray,
                 weights: Optional[np.ndarray] = None):
        particles = np.asarray(particles, dtype=float)
        if particles.ndim != 1 or particles.size == 0:
            raise ValueError("Particles must be a non-empty 1-D array")

        if weights is None:
            weights = np.full(particles.size, 1.0 / particles.size)
        else:
            weights = np.asarray(weights, dtype=float)
            if weights.shape != particles.shape:
                raise ValueError("Weights must match particles in shape")
            total = np.sum(weights)
            if not total > 0:
                raise ValueError("Weights must have positive total mass")
            weights = weights / total

        self.particles = particles
        self.weights = weights

    @property
    def size(self) -> int:
        return self.particles.size

    @property
    def mean(self) -> float:
        return float(np.average(self.particles, weights=self.weights))

    @property
    def variance(self) -> float:
        """Population variance of the ensemble."""
        deviation = self.particles - self.mean
        return float(np.average(deviation ** 2, weights=self.weights))

    def min(self) -> float:
        return float(np.min(self.particles))

    def max(self) -> float:
        return float(np.max(self.particles))

    def probability_gt(self, threshold: float) -> float:
        """Probability mass strictly above threshold."""
        return float(np.sum(self.weights[self.particles > threshold]))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _combine(self, other, op) -> "DistributionalValue":
        if isinstance(other, DistributionalValue):
            if other.size != self.size:
                raise ValueError(
                    f"Representation sizes differ: {self.size} != {other.size}"
                )
            # One joint draw per index, so both operands must carry the same mass
            if not np.allclose(self.weights, other.weights, rtol=1e-9, atol=0.0):
                raise ValueError("Particle weights differ between operands")
            return DistributionalValue(op(self.particles, other.particles), self.weights)
        return DistributionalValue(op(self.particles, float(other)), self.weights)

    def _rcombine(self, other, op) -> "DistributionalValue":
        return DistributionalValue(op(float(other), self.particles), self.weights)

    def __add__(self, other):
        return self._combine(other, np.add)

    def __radd__(self, other):
        return self._rcombine(other, np.add)

    def __sub__(self, other):
        return self._combine(other, np.subtract)

    def __rsub__(self, other):
        return self._rcombine(other, np.subtract)

    def __mul__(self, other):
        return self._combine(other, np.multiply)

    def __rmul__(self, other):
        return self._rcombine(other, np.multiply)

    def __truediv__(self, other):
        return self._combine(other, np.divide)

    def __rtruediv__(self, other):
        return self._rcombine(other, np.divide)

    def __neg__(self):
        return DistributionalValue(-self.particles, self.weights)

    def __float__(self) -> float:
        return self.mean

    def __repr__(self):
        return (
            f"DistributionalValue(mean={self.mean:.6g}, "
            f"variance={self.variance:.6g}, size={self.size})"
        )


class EmpiricalDistribution(DistributionalValue):
    """
    Equally weighted distribution over retained Monte Carlo samples.

    probability_gt(c) reduces to count(samples > c) / N.
    """

    def __init__(self, samples: np.ndarray):
        super().__init__(samples)

    @property
    def samples(self) -> np.ndarray:
        return self.particles

    def probability_gt(self, threshold: float) -> float:
        return float(np.count_nonzero(self.particles > threshold)) / self.size


def lower_bound(value: Union[Number, DistributionalValue]) -> float:
    """Smallest support point of a scalar or distributional value."""
    if isinstance(value, DistributionalValue):
        return value.min()
    return float(value)


def upper_bound(value: Union[Number, DistributionalValue]) -> float:
    """Largest support point of a scalar or distributional value."""
    if isinstance(value, DistributionalValue):
        return value.max()
    return float(value)


def point_estimate(value: Union[Number, DistributionalValue]) -> float:
    """Scalar summary of a value: the mean for distributions."""
    if isinstance(value, DistributionalValue):
        return value.mean
    return float(value)


class DistributionProvider(ABC):
    """
    Strategy interface for uncertain inputs and exceedance queries.

    A provider is selected once per run and decides how many iterations
    the pipeline loop executes.
    """

    name = "provider"

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    @property
    @abstractmethod
    def is_sampling(self) -> bool:
        """True when the loop must retain and aggregate scalar outputs."""
        pass

    @abstractmethod
    def uniform(self, low: float, high: float):
        """Return a value uniformly distributed on [low, high]."""
        pass

    def probability_gt(self, value: DistributionalValue, threshold: float) -> float:
        """
        Probability that the uncertain value exceeds threshold.

        Args:
            value: Distributional or empirical value
            threshold: Scalar comparison point

        Returns:
            Probability (validated by the reporting layer)
        """
        if not isinstance(value, DistributionalValue):
            raise TypeError(
                f"{self.name} provider cannot query a plain {type(value).__name__}"
            )
        return value.probability_gt(threshold)


class NativeDistributionProvider(DistributionProvider):
    """
    Single-pass distributional arithmetic provider.

    Args:
        representation_size: Particles per distributional value
        seed: Seed for the stratification and permutation draws
    """

    name = "native"

    def __init__(self,
                 representation_size: int = 4096,
                 seed: Optional[int] = None):
        super().__init__(seed)
        if representation_size < 1:
            raise ValueError("representation_size must be positive")
        self.representation_size = representation_size

        logger.debug(
            f"NativeDistributionProvider: {representation_size} particles, seed={seed}"
        )

    @property
    def is_sampling(self) -> bool:
        return False

    def uniform(self, low: float, high: float) -> DistributionalValue:
        n = self.representation_size
        width = high - low

        if width == 0:
            return DistributionalValue(np.full(n, float(low)))

        # One uniform draw inside each of n equal-probability strata
        strata = (np.arange(n) + self.rng.random(n)) / n
        particles = stats.uniform(loc=low, scale=width).ppf(strata)

        return DistributionalValue(self.rng.permutation(particles))


class MonteCarloProvider(DistributionProvider):
    """
    Explicit sampling provider.

    Each uniform() call is an independent pseudo-random scalar draw.
    """

    name = "monte_carlo"

    @property
    def is_sampling(self) -> bool:
        return True

    def uniform(self, low: float, high: float) -> float:
        if high == low:
            return float(low)
        return float(self.rng.uniform(low, high))

    def probability_gt(self, value: DistributionalValue, threshold: float) -> float:
        if not isinstance(value, EmpiricalDistribution):
            raise TypeError(
                "Monte Carlo exceedance queries need an EmpiricalDistribution"
            )
        return value.probability_gt(threshold)


def make_provider(monte_carlo: bool,
                  representation_size: int = 4096,
                  seed: Optional[int] = None) -> DistributionProvider:
    """
    Select the execution strategy once at configuration time.

    Args:
        monte_carlo: Use explicit sampling instead of native arithmetic
        representation_size: Particles for the native provider
        seed: Random seed (None for fresh entropy)

    Returns:
        DistributionProvider instance
    """
    if monte_carlo:
        return MonteCarloProvider(seed=seed)
    return NativeDistributionProvider(representation_size=representation_size, seed=seed)
