"""
SHT4x Calibration Pipeline - Tail Probability Reporting
========================================================

Probabilities that the calibrated output deviates from its representative
value by a relative margin.

For representative value v and margin t ∈ {0.05, 0.50, 1.00, 2.00}:

    P(t or more smaller) = 1 - P(X > v × (1 - t))
    P(t or more greater) =     P(X > v × (1 + t))

The thresholds only ever multiply v, so v = 0 needs no special case.
Note that "smaller" and "greater" are relative to v itself: for negative v
the factors flip which side of v the threshold lies on, exactly as the
formulas are written.

P(X > c) comes from the run's distribution provider. A provider answer
outside [0, 1] is a ProbabilityFault and is never clamped.

Example:
--------
>>> reporter = TailProbabilityReporter(provider)
>>> text = reporter.report(rh, "Calibrated Relative Humidity", "%")
Calibrated Relative Humidity: 50.00 %.
...

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import sys
import math
from dataclasses import dataclass
from typing import Optional, TextIO, Tuple
import logging

from ..core.distributions import DistributionProvider, point_estimate

logger = logging.getLogger(__name__)

THRESHOLDS: Tuple[float, ...] = (0.05, 0.50, 1.00, 2.00)


class ProbabilityFault(Exception):
    """Provider returned a probability outside [0, 1]."""
    pass


@dataclass(frozen=True)
class TailProbabilities:
    """
    Tail probabilities around a representative value.

    Attributes:
        value: Representative value v
        thresholds: Relative margins t
        smaller: P(output is t·v or more smaller), per threshold
        greater: P(output is t·v or more greater), per threshold
    """
    value: float
    thresholds: Tuple[float, ...]
    smaller: Tuple[float, ...]
    greater: Tuple[float, ...]

    def as_dict(self):
        return {
            "value": self.value,
            "smaller": dict(zip(self.thresholds, self.smaller)),
            "greater": dict(zip(self.thresholds, self.greater)),
        }


class TailProbabilityReporter:
    """
    Computes and prints tail probabilities for calibrated outputs.

    Args:
        provider: Distribution provider answering P(X > c)
        stream: Text stream for the human-readable report
        thresholds: Relative margins
    """

    def __init__(self,
                 provider: DistributionProvider,
                 stream: Optional[TextIO] = None,
                 thresholds: Tuple[float, ...] = THRESHOLDS):
        self.provider = provider
        self.stream = stream if stream is not None else sys.stdout
        self.thresholds = tuple(thresholds)

    def _probability_gt(self, value, threshold: float) -> float:
        probability = self.provider.probability_gt(value, threshold)
        if not (isinstance(probability, (int, float)) and 0.0 <= probability <= 1.0):
            raise ProbabilityFault(
                f"{self.provider.name} provider returned P(X > {threshold:g}) = "
                f"{probability!r}, outside [0, 1]"
            )
        return float(probability)

    def compute(self, value, reference: Optional[float] = None) -> TailProbabilities:
        """
        Compute the eight tail probabilities.

        Args:
            value: Distributional or empirical output value
            reference: Representative value v (defaults to the value's mean)

        Returns:
            TailProbabilities

        Raises:
            ProbabilityFault: If the provider answers outside [0, 1]
        """
        v = point_estimate(value) if reference is None else float(reference)
        if math.isnan(v):
            raise ProbabilityFault("Representative value is NaN")

        smaller = tuple(
            1 - self._probability_gt(value, v * (1 - t)) for t in self.thresholds
        )
        greater = tuple(
            self._probability_gt(value, v * (1 + t)) for t in self.thresholds
        )

        return TailProbabilities(value=v, thresholds=self.thresholds,
                                 smaller=smaller, greater=greater)

    def format(self, probabilities: TailProbabilities, label: str, units: str) -> str:
        v = probabilities.value
        lines = [f"{label}: {v:.2f} {units}.", ""]

        for t, p in zip(probabilities.thresholds, probabilities.smaller):
            lines.append(
                f"\tProbability that calibrated sensor output is {round(t * 100):>3d}% "
                f"or more smaller than {v:.2f}, is {p:.6f}"
            )
        lines.append("")
        for t, p in zip(probabilities.thresholds, probabilities.greater):
            lines.append(
                f"\tProbability that calibrated sensor output is {round(t * 100):>3d}% "
                f"or more greater than {v:.2f}, is {p:.6f}"
            )

        return "\n".join(lines) + "\n"

    def report(self,
               value,
               label: str,
               units: str,
               reference: Optional[float] = None) -> str:
        """
        Compute, print and return the report for one output channel.

        Args:
            value: Distributional or empirical output value
            label: Human-readable output name
            units: Units of measurement
            reference: Representative value v (defaults to the value's mean)

        Returns:
            Formatted report text
        """
        probabilities = self.compute(value, reference)
        text = self.format(probabilities, label, units)

        self.stream.write(text)
        logger.debug(f"Reported tail probabilities for {label}: {probabilities.as_dict()}")

        return text
