"""
SHT4x Calibration Tests Module - Initialization
================================================

Unit and integration tests for the calibration system.

Test Organization:
------------------
1. test_calibration.py   - Datasheet equations and output selection
2. test_distributions.py - Native and Monte Carlo providers
3. test_aggregation.py   - Sample buffer and mean/variance
4. test_reporting.py     - Tail probabilities and report text
5. test_pipeline.py      - Run configuration, end-to-end runs, CLI, I/O

Example Test Run:
-----------------
$ pytest tests/
$ python -m tests

Version: 1.0.0
Author: Sensor Calibration Team
Date: October 17, 2026
"""

import unittest
import sys

from . import test_aggregation
from . import test_calibration
from . import test_distributions
from . import test_pipeline
from . import test_reporting

__all__ = [
    "test_aggregation",
    "test_calibration",
    "test_distributions",
    "test_pipeline",
    "test_reporting",
]


def create_test_suite():
    """
    Create comprehensive test suite.

    Returns:
        unittest.TestSuite with all tests
    """
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module in (test_aggregation, test_calibration, test_distributions,
                   test_pipeline, test_reporting):
        suite.addTests(loader.loadTestsFromModule(module))

    return suite


def run_tests(verbosity: int = 2):
    """
    Run all tests.

    Args:
        verbosity: Output verbosity level

    Returns:
        unittest.TestResult
    """
    suite = create_test_suite()
    runner = unittest.TextTestRunner(verbosity=verbosity)
    return runner.run(suite)


if __name__ == "__main__":
    result = run_tests()
    sys.exit(0 if result.wasSuccessful() else 1)
