import sys

from . import run_tests

result = run_tests()
sys.exit(0 if result.wasSuccessful() else 1)
