"""
SHT4x Calibration Tests - Tail Probability Reporting
=====================================================

Unit tests for the tail-probability reporter.

Test Coverage:
--------------
1. Exact Values
   - Hand-computed probabilities over a small empirical distribution
   - Zero representative value

2. Monotonicity
   - Larger downward margins are less probable (native and empirical)

3. Provider Faults
   - Probabilities above 1, below 0, NaN

4. Report Text
   - Header and probability lines

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import io
import unittest
import numpy as np
import logging

from sht4x_uncertainty.core import (
    DistributionProvider,
    EmpiricalDistribution,
    MonteCarloProvider,
    NativeDistributionProvider,
)
from sht4x_uncertainty.physics import InputSample, OutputChannel, evaluate
from sht4x_uncertainty.pipeline import ProbabilityFault, TailProbabilityReporter

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FixedAnswerProvider(DistributionProvider):
    """Provider answering every exceedance query with one number."""

    name = "fixed"

    def __init__(self, answer):
        super().__init__(seed=0)
        self.answer = answer

    @property
    def is_sampling(self) -> bool:
        return False

    def uniform(self, low, high):
        return 0.5 * (low + high)

    def probability_gt(self, value, threshold):
        return self.answer


class TestExactProbabilities(unittest.TestCase):
    """Hand-checked tail probabilities."""

    def setUp(self):
        """Samples 1..4, mean 2.5."""
        self.value = EmpiricalDistribution(np.array([1.0, 2.0, 3.0, 4.0]))
        self.reporter = TailProbabilityReporter(MonteCarloProvider(seed=0), stream=io.StringIO())

    def test_smaller(self):
        probabilities = self.reporter.compute(self.value)

        self.assertEqual(probabilities.value, 2.5)
        np.testing.assert_allclose(probabilities.smaller, [0.5, 0.25, 0.0, 0.0])

    def test_greater(self):
        probabilities = self.reporter.compute(self.value)

        np.testing.assert_allclose(probabilities.greater, [0.5, 0.25, 0.0, 0.0])

    def test_reference_override(self):
        probabilities = self.reporter.compute(self.value, reference=2.0)

        # thresholds 1.9, 1.0, 0.0, -2.0 below; 2.1, 3.0, 4.0, 6.0 above
        np.testing.assert_allclose(probabilities.smaller, [0.25, 0.25, 0.0, 0.0])
        np.testing.assert_allclose(probabilities.greater, [0.5, 0.25, 0.0, 0.0])

    def test_zero_reference(self):
        """Every threshold collapses to zero without dividing by v."""
        value = EmpiricalDistribution(np.array([-1.0, 0.0, 1.0]))
        probabilities = self.reporter.compute(value)

        self.assertEqual(probabilities.value, 0.0)
        np.testing.assert_allclose(probabilities.smaller, [2.0 / 3.0] * 4)
        np.testing.assert_allclose(probabilities.greater, [1.0 / 3.0] * 4)


class TestMonotonicity(unittest.TestCase):
    """Tail probabilities shrink as the relative margin grows."""

    def _assert_monotonic(self, probabilities):
        smaller = probabilities.smaller
        greater = probabilities.greater

        self.assertGreater(probabilities.value, 0.0)
        self.assertLessEqual(smaller[-1], smaller[0])
        self.assertLessEqual(greater[-1], greater[0])
        for a, b in zip(smaller, smaller[1:]):
            self.assertGreaterEqual(a, b)
        for a, b in zip(greater, greater[1:]):
            self.assertGreaterEqual(a, b)

    def test_native_provider(self):
        provider = NativeDistributionProvider(representation_size=4096, seed=21)
        inputs = InputSample(
            vrh=provider.uniform(2.3, 2.7),
            vt=provider.uniform(2.3, 2.7),
            vsupply=provider.uniform(4.8, 5.4),
        )
        result = evaluate(inputs, OutputChannel.ALL)
        reporter = TailProbabilityReporter(provider, stream=io.StringIO())

        for channel in OutputChannel.channels():
            self._assert_monotonic(reporter.compute(result[channel]))

    def test_empirical_provider(self):
        provider = MonteCarloProvider(seed=21)
        samples = []
        for _ in range(2000):
            inputs = InputSample(
                vrh=provider.uniform(2.3, 2.7),
                vt=provider.uniform(2.3, 2.7),
                vsupply=provider.uniform(4.8, 5.4),
            )
            samples.append(evaluate(inputs, OutputChannel.RELATIVE_HUMIDITY).primary)

        reporter = TailProbabilityReporter(provider, stream=io.StringIO())
        self._assert_monotonic(reporter.compute(EmpiricalDistribution(np.array(samples))))

    def test_probabilities_in_unit_interval(self):
        provider = NativeDistributionProvider(representation_size=1024, seed=4)
        value = provider.uniform(40.0, 45.0)
        probabilities = TailProbabilityReporter(provider, stream=io.StringIO()).compute(value)

        for p in probabilities.smaller + probabilities.greater:
            self.assertGreaterEqual(p, 0.0)
            self.assertLessEqual(p, 1.0)


class TestProviderFaults(unittest.TestCase):
    """Out-of-range provider answers are surfaced."""

    def test_faulty_answers(self):
        value = EmpiricalDistribution(np.array([1.0, 2.0]))

        for answer in (1.5, -0.1, float("nan")):
            reporter = TailProbabilityReporter(FixedAnswerProvider(answer), stream=io.StringIO())
            with self.assertRaises(ProbabilityFault):
                reporter.compute(value)

    def test_valid_answers_pass_through(self):
        value = EmpiricalDistribution(np.array([1.0, 2.0]))
        reporter = TailProbabilityReporter(FixedAnswerProvider(0.25), stream=io.StringIO())

        probabilities = reporter.compute(value)

        np.testing.assert_allclose(probabilities.smaller, [0.75] * 4)
        np.testing.assert_allclose(probabilities.greater, [0.25] * 4)


class TestReportText(unittest.TestCase):
    """Human-readable report."""

    def test_report_layout(self):
        stream = io.StringIO()
        reporter = TailProbabilityReporter(MonteCarloProvider(seed=0), stream=stream)
        value = EmpiricalDistribution(np.array([1.0, 2.0, 3.0, 4.0]))

        text = reporter.report(value, "Calibrated Relative Humidity", "%")
        lines = text.splitlines()

        self.assertEqual(stream.getvalue(), text)
        self.assertEqual(lines[0], "Calibrated Relative Humidity: 2.50 %.")
        self.assertEqual(lines[1], "")
        self.assertEqual(
            lines[2],
            "\tProbability that calibrated sensor output is   5% or more smaller than 2.50, is 0.500000",
        )
        self.assertEqual(
            lines[5],
            "\tProbability that calibrated sensor output is 200% or more smaller than 2.50, is 0.000000",
        )
        self.assertEqual(lines[6], "")
        self.assertEqual(
            lines[8],
            "\tProbability that calibrated sensor output is  50% or more greater than 2.50, is 0.250000",
        )
        self.assertEqual(len(lines), 11)


if __name__ == "__main__":
    unittest.main()
