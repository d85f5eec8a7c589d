"""
SHT4x Calibration - Command Line Interface
==========================================

Usage:
------
sht4x-calibrate                      # all outputs, native distributional mode
sht4x-calibrate -S 1                 # Celsius only
sht4x-calibrate -S 0 -M 100000       # Monte Carlo, 100000 iterations
sht4x-calibrate -S 2 -b              # benchmark line: "<value> <microseconds>"
sht4x-calibrate -j -o outputs.csv    # JSON records plus CSV snapshot

Exit Status:
------------
0 on success, 1 on configuration errors, allocation failures, provider
faults and I/O errors.

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import argparse
import sys
from typing import List, Optional
import logging

from .core.aggregation import AllocationError
from .physics.calibration import OutputChannel
from .pipeline.reporting import ProbabilityFault
from .pipeline.runner import CalibrationPipeline, RunConfiguration
from .utils.config import (
    ConfigError,
    get_config_value,
    load_config,
    load_default_config,
    merge_configs,
)
from .utils.logging import log_error, setup_logging

logger = logging.getLogger(__name__)


def _output_select(value: str) -> int:
    if value.strip().lower() == "all":
        return int(OutputChannel.ALL)
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an output index or 'all', got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sht4x-calibrate",
        description="Example: SHT4xI sensor conversion routines with uncertainty propagation",
    )
    parser.add_argument(
        "-o", "--output", dest="output_path", metavar="PATH",
        help="Write the computed output values to a CSV file",
    )
    parser.add_argument(
        "-S", "--select-output", dest="output_select", type=_output_select, metavar="OUTPUT",
        help=(
            f"Compute 0-indexed output. Calculate all possible outputs if equal to "
            f"{int(OutputChannel.ALL)} or 'all'. Default: all"
        ),
    )
    parser.add_argument(
        "-M", "--multiple-executions", dest="iterations", type=int, metavar="N",
        help="Monte Carlo mode: repeat the kernel N times with scalar samples",
    )
    parser.add_argument(
        "-T", "--time", dest="timing", action="store_true",
        help="Time the kernel execution and print the CPU time",
    )
    parser.add_argument(
        "-b", "--benchmarking", action="store_true",
        help="Print '<primary value> <elapsed microseconds>' only",
    )
    parser.add_argument(
        "-j", "--json", dest="json_output", action="store_true",
        help="Print output in JSON format",
    )
    parser.add_argument(
        "-i", "--input", dest="input_path", metavar="PATH",
        help="Read inputs from a CSV file (not supported)",
    )
    parser.add_argument(
        "--config", dest="config_path", metavar="YAML",
        help="YAML file overriding the default input ranges and settings",
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Diagnostic log level (stderr)",
    )
    return parser


def build_run_configuration(args: argparse.Namespace, config: dict) -> RunConfiguration:
    """
    Combine parsed flags with the loaded configuration.

    Raises:
        ConfigError: On unsupported or conflicting flags
    """
    if args.input_path is not None:
        raise ConfigError("Reading inputs from CSV file is not currently supported")

    monte_carlo = args.iterations is not None
    output_select = args.output_select if args.output_select is not None else int(OutputChannel.ALL)

    return RunConfiguration.from_config(
        config,
        output_select=output_select,
        monte_carlo=monte_carlo,
        iterations=args.iterations if monte_carlo else 1,
        json_output=args.json_output,
        timing=args.timing,
        benchmarking=args.benchmarking,
        output_path=args.output_path,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_default_config()
        if args.config_path:
            config = merge_configs(config, load_config(args.config_path))

        level = args.log_level or get_config_value(config, "logging.level", "WARNING")
        try:
            setup_logging(level=level, log_dir=get_config_value(config, "logging.log_dir"))
        except ValueError as e:
            raise ConfigError(str(e)) from e

        run_config = build_run_configuration(args, config)
    except ConfigError as e:
        logger.debug("Configuration rejected", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        CalibrationPipeline(run_config).execute()
    except AllocationError as e:
        log_error(e, context="Allocation failed")
        return 1
    except ProbabilityFault as e:
        log_error(e, context="Probability computation fault")
        return 1
    except OSError as e:
        log_error(e, context="Failed to write results")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
