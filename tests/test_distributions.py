"""
SHT4x Calibration Tests - Distribution Providers
=================================================

Unit tests for distributional values and the two providers:
- NativeDistributionProvider (particle ensembles)
- MonteCarloProvider (scalar draws, empirical queries)

Test Coverage:
--------------
1. Uniform Draws
   - Support within [low, high]
   - Mean near the midpoint
   - Degenerate ranges
   - Independence between native inputs
   - Seed reproducibility

2. Probability Queries
   - Exact weighted mass
   - Empirical exceedance fraction

3. Arithmetic
   - Scalar and elementwise operations
   - Reflected operators with numpy scalars
   - Mismatched representation sizes

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import unittest
import numpy as np
import logging

from sht4x_uncertainty.core import (
    DistributionalValue,
    EmpiricalDistribution,
    MonteCarloProvider,
    NativeDistributionProvider,
    make_provider,
    point_estimate,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TestNativeUniform(unittest.TestCase):
    """Native provider uniform leaves."""

    def setUp(self):
        """Set up test fixtures."""
        self.provider = NativeDistributionProvider(representation_size=4096, seed=2024)

    def test_support_within_range(self):
        for low, high in [(2.3, 2.7), (4.8, 5.4), (-1.0, 1.0)]:
            value = self.provider.uniform(low, high)

            self.assertEqual(value.size, 4096)
            self.assertGreaterEqual(value.min(), low)
            self.assertLessEqual(value.max(), high)

    def test_moments(self):
        """Stratified particles reproduce the uniform mean and variance."""
        value = self.provider.uniform(2.3, 2.7)

        self.assertAlmostEqual(value.mean, 2.5, places=3)
        self.assertAlmostEqual(value.variance, 0.4 ** 2 / 12, places=4)

    def test_degenerate_range(self):
        value = self.provider.uniform(5.0, 5.0)

        np.testing.assert_array_equal(value.particles, np.full(4096, 5.0))
        self.assertEqual(value.variance, 0.0)

    def test_independent_inputs(self):
        """Separate draws are uncorrelated particle by particle."""
        x = self.provider.uniform(2.3, 2.7)
        y = self.provider.uniform(4.8, 5.4)

        correlation = np.corrcoef(x.particles, y.particles)[0, 1]
        self.assertLess(abs(correlation), 0.1)

    def test_seed_reproducibility(self):
        a = NativeDistributionProvider(representation_size=256, seed=5).uniform(0.0, 1.0)
        b = NativeDistributionProvider(representation_size=256, seed=5).uniform(0.0, 1.0)

        np.testing.assert_array_equal(a.particles, b.particles)

    def test_invalid_representation_size(self):
        with self.assertRaises(ValueError):
            NativeDistributionProvider(representation_size=0)


class TestMonteCarloUniform(unittest.TestCase):
    """Monte Carlo provider scalar draws."""

    def test_draws_within_range(self):
        provider = MonteCarloProvider(seed=99)

        for low, high in [(2.3, 2.7), (4.8, 5.4)]:
            draws = [provider.uniform(low, high) for _ in range(2000)]

            self.assertTrue(all(isinstance(d, float) for d in draws))
            self.assertGreaterEqual(min(draws), low)
            self.assertLessEqual(max(draws), high)

    def test_draws_are_independent_calls(self):
        provider = MonteCarloProvider(seed=1)
        draws = {provider.uniform(0.0, 1.0) for _ in range(100)}

        self.assertEqual(len(draws), 100)

    def test_degenerate_range(self):
        self.assertEqual(MonteCarloProvider(seed=0).uniform(4.8, 4.8), 4.8)

    def test_sampling_flag(self):
        self.assertTrue(MonteCarloProvider().is_sampling)
        self.assertFalse(NativeDistributionProvider(representation_size=8).is_sampling)


class TestProbabilityQueries(unittest.TestCase):
    """P(X > c) over ensembles."""

    def test_equal_weights(self):
        value = DistributionalValue(np.array([1.0, 2.0, 3.0, 4.0]))

        self.assertEqual(value.probability_gt(2.0), 0.5)
        self.assertEqual(value.probability_gt(0.0), 1.0)
        self.assertEqual(value.probability_gt(4.0), 0.0)

    def test_weighted_mass(self):
        value = DistributionalValue(np.array([0.0, 1.0]), weights=np.array([1.0, 3.0]))

        self.assertAlmostEqual(value.probability_gt(0.5), 0.75)
        self.assertAlmostEqual(value.mean, 0.75)

    def test_weighted_self_sum(self):
        """Each index keeps its own mass under arithmetic."""
        a = DistributionalValue(np.array([0.0, 1.0]), weights=np.array([0.25, 0.75]))

        total = a + a

        np.testing.assert_allclose(total.particles, [0.0, 2.0])
        np.testing.assert_allclose(total.weights, [0.25, 0.75])
        self.assertAlmostEqual(total.probability_gt(1.0), 0.75)
        self.assertAlmostEqual(total.mean, 1.5)

    def test_mismatched_weights_rejected(self):
        a = DistributionalValue(np.array([0.0, 1.0]), weights=np.array([0.25, 0.75]))
        b = DistributionalValue(np.array([0.0, 1.0]))

        with self.assertRaises(ValueError):
            a * b

    def test_empirical_fraction(self):
        samples = EmpiricalDistribution(np.array([1.0, 2.0, 3.0, 4.0, 5.0]))

        self.assertAlmostEqual(samples.probability_gt(3.0), 0.4)
        self.assertAlmostEqual(samples.mean, 3.0)

    def test_native_symmetric_output(self):
        """A symmetric input leaves half the mass above the mean."""
        provider = NativeDistributionProvider(representation_size=4096, seed=3)
        value = provider.uniform(-1.0, 1.0)

        self.assertAlmostEqual(provider.probability_gt(value, value.mean), 0.5, delta=0.01)

    def test_monte_carlo_requires_empirical(self):
        provider = MonteCarloProvider(seed=0)

        with self.assertRaises(TypeError):
            provider.probability_gt(DistributionalValue(np.array([1.0, 2.0])), 1.5)

        with self.assertRaises(TypeError):
            provider.probability_gt(1.5, 1.0)

        empirical = EmpiricalDistribution(np.array([1.0, 2.0]))
        self.assertEqual(provider.probability_gt(empirical, 1.5), 0.5)


class TestArithmetic(unittest.TestCase):
    """Distributional arithmetic."""

    def setUp(self):
        self.x = DistributionalValue(np.array([1.0, 2.0, 4.0]))
        self.y = DistributionalValue(np.array([2.0, 2.0, 8.0]))

    def test_scalar_operations(self):
        np.testing.assert_allclose((self.x + 1).particles, [2.0, 3.0, 5.0])
        np.testing.assert_allclose((1 - self.x).particles, [0.0, -1.0, -3.0])
        np.testing.assert_allclose((2 * self.x).particles, [2.0, 4.0, 8.0])
        np.testing.assert_allclose((4 / self.x).particles, [4.0, 2.0, 1.0])
        np.testing.assert_allclose((-self.x).particles, [-1.0, -2.0, -4.0])

    def test_elementwise_operations(self):
        np.testing.assert_allclose((self.x / self.y).particles, [0.5, 1.0, 0.5])
        np.testing.assert_allclose((self.x * self.y).particles, [2.0, 4.0, 32.0])
        np.testing.assert_allclose((self.y - self.x).particles, [1.0, 0.0, 4.0])

    def test_numpy_scalar_on_left(self):
        result = np.float64(3.0) * self.x

        self.assertIsInstance(result, DistributionalValue)
        np.testing.assert_allclose(result.particles, [3.0, 6.0, 12.0])

    def test_size_mismatch(self):
        with self.assertRaises(ValueError):
            self.x + DistributionalValue(np.array([1.0, 2.0]))

    def test_invalid_construction(self):
        with self.assertRaises(ValueError):
            DistributionalValue(np.array([]))
        with self.assertRaises(ValueError):
            DistributionalValue(np.array([1.0, 2.0]), weights=np.array([0.0, 0.0]))

    def test_point_estimate(self):
        self.assertAlmostEqual(point_estimate(self.x), 7.0 / 3.0)
        self.assertEqual(point_estimate(2.5), 2.5)
        self.assertAlmostEqual(float(self.x), 7.0 / 3.0)


class TestProviderSelection(unittest.TestCase):
    """Strategy chosen once from configuration."""

    def test_make_provider(self):
        native = make_provider(monte_carlo=False, representation_size=64, seed=1)
        sampling = make_provider(monte_carlo=True, seed=1)

        self.assertIsInstance(native, NativeDistributionProvider)
        self.assertEqual(native.representation_size, 64)
        self.assertIsInstance(sampling, MonteCarloProvider)


if __name__ == "__main__":
    unittest.main()
