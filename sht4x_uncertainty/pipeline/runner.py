"""
SHT4x Calibration Pipeline - Run Orchestration
===============================================

Runs the calibration model over uncertain inputs and emits the results.

Pipeline Architecture:
---------------------
    RunConfiguration (CLI + YAML)
        ↓
    [Provider selected once: native or Monte Carlo]
        ↓
    for i in 1..N:                      (N = 1 in native mode)
        DistributionSource.draw_inputs()
            ↓
        evaluate(inputs, selector)
            ↓
        SampleBuffer.append(primary)    (Monte Carlo only)
        ↓
    aggregate(samples)                  (Monte Carlo only)
        ↓
    TailProbabilityReporter / JSON / CSV / benchmark line / sample dump

Configuration Rules:
--------------------
- Selecting all outputs excludes Monte Carlo and benchmarking modes
- CSV output excludes Monte Carlo mode
- More than one iteration requires Monte Carlo mode

Example:
--------
>>> from sht4x_uncertainty.pipeline import CalibrationPipeline, RunConfiguration
>>> from sht4x_uncertainty.physics import OutputChannel
>>>
>>> run_config = RunConfiguration(
...     output_select=OutputChannel.TEMPERATURE_CELSIUS,
...     monte_carlo=True,
...     iterations=10000,
...     seed=42,
... )
>>> pipeline = CalibrationPipeline(run_config)
>>> result = pipeline.run()
>>> pipeline.emit(result)

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import sys
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, TextIO
import logging

import numpy as np

from ..core.aggregation import MeanAndVariance, SampleBuffer, aggregate
from ..core.distributions import (
    DistributionProvider,
    EmpiricalDistribution,
    lower_bound,
    make_provider,
    point_estimate,
    upper_bound,
)
from ..physics.calibration import (
    CALIBRATION_TABLE,
    CalibrationResult,
    InputChannel,
    OutputChannel,
    evaluate,
)
from ..telemetry.sources import (
    DEFAULT_RANGES,
    ChannelRange,
    DistributionSource,
    ranges_from_config,
)
from ..utils.config import ConfigError, get_config_value, validate_config
from ..utils.io import (
    OutputRecord,
    format_benchmark_line,
    save_monte_carlo_samples,
    write_csv_snapshot,
    write_json,
)
from ..utils.logging import log_statistics
from .reporting import TailProbabilityReporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfiguration:
    """
    Validated settings for one run.

    Attributes:
        output_select: Output channel, or OutputChannel.ALL
        monte_carlo: Explicit sampling instead of native arithmetic
        iterations: Number of Monte Carlo iterations N
        json_output: Emit JSON records instead of text
        timing: Print CPU time after the results
        benchmarking: Print only "<primary> <microseconds>"
        output_path: CSV snapshot destination
        ranges: Uniform range per input channel
        representation_size: Particles per native distributional value
        seed: Random seed (None for fresh entropy)
        dump_path: Monte Carlo sample dump destination
    """
    output_select: OutputChannel = OutputChannel.ALL
    monte_carlo: bool = False
    iterations: int = 1
    json_output: bool = False
    timing: bool = False
    benchmarking: bool = False
    output_path: Optional[str] = None
    ranges: Mapping[InputChannel, ChannelRange] = field(default_factory=lambda: DEFAULT_RANGES)
    representation_size: int = 4096
    seed: Optional[int] = None
    dump_path: str = "data.out"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check flag combinations before any sampling starts.

        Raises:
            ConfigError: On any invalid combination
        """
        if isinstance(self.output_select, bool) or self.output_select not in tuple(OutputChannel):
            raise ConfigError(
                f"Output select value is greater than the possible number of outputs: "
                f"Provided {self.output_select}. Max: {int(OutputChannel.ALL)}"
            )
        object.__setattr__(self, "output_select", OutputChannel(self.output_select))

        if self.iterations < 1:
            raise ConfigError(f"Number of iterations must be >= 1, got {self.iterations}")

        if not self.monte_carlo and self.iterations != 1:
            raise ConfigError("Multiple iterations are only supported in Monte Carlo mode")

        if self.output_select == OutputChannel.ALL and (self.monte_carlo or self.benchmarking):
            raise ConfigError(
                "Please select a single output when in benchmarking mode or Monte Carlo mode"
            )

        if self.output_path is not None and self.monte_carlo:
            raise ConfigError("Writing to output file is not supported in Monte Carlo mode")

        if self.representation_size < 1:
            raise ConfigError("Representation size must be a positive integer")

        seed = self.seed
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
            raise ConfigError(f"Seed must be a non-negative integer, got {seed!r}")

        for channel in InputChannel:
            if channel not in self.ranges:
                raise ConfigError(f"Missing range for input channel {channel.name}")
        if self.ranges[InputChannel.SUPPLY_VOLTAGE].low <= 0:
            raise ConfigError("Supply voltage range must be strictly positive")

    @property
    def is_all_outputs(self) -> bool:
        return self.output_select == OutputChannel.ALL

    @classmethod
    def from_config(cls, config: Dict[str, Any], **overrides) -> "RunConfiguration":
        """
        Build a run configuration from a YAML-derived dictionary.

        Args:
            config: Configuration dictionary (see utils.config)
            **overrides: Field values taking precedence (e.g. CLI flags)

        Returns:
            Validated RunConfiguration
        """
        validate_config(config)

        try:
            ranges = ranges_from_config(config["inputs"])
        except ValueError as e:
            raise ConfigError(str(e)) from e

        settings = {
            "ranges": ranges,
            "representation_size": get_config_value(config, "native.representation_size", 4096),
            "seed": config.get("seed"),
            "dump_path": get_config_value(config, "monte_carlo.dump_path") or "data.out",
        }
        settings.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**settings)


@dataclass
class RunResult:
    """
    Outcome of one run.

    Attributes:
        outputs: Channel values of the last iteration
        primary: Tracked output (distributional, or empirical in Monte Carlo mode)
        statistics: Mean and variance of the samples (Monte Carlo only)
        samples: Read-only sample sequence (Monte Carlo only)
        elapsed_seconds: CPU time of sampling, calibration and aggregation
    """
    outputs: CalibrationResult
    primary: Any
    statistics: Optional[MeanAndVariance] = None
    samples: Optional[np.ndarray] = None
    elapsed_seconds: float = 0.0

    @property
    def elapsed_microseconds(self) -> int:
        return int(self.elapsed_seconds * 1000000)

    @property
    def primary_estimate(self) -> float:
        if self.statistics is not None:
            return self.statistics.mean
        return point_estimate(self.primary)


class CalibrationEngine:
    """
    Sampling/calibration/aggregation loop.

    Args:
        run_config: Validated run configuration
        provider: Optional provider (default: selected from run_config)
    """

    def __init__(self,
                 run_config: RunConfiguration,
                 provider: Optional[DistributionProvider] = None):
        self.run_config = run_config
        self.provider = provider or make_provider(
            run_config.monte_carlo,
            representation_size=run_config.representation_size,
            seed=run_config.seed,
        )
        if self.provider.is_sampling != run_config.monte_carlo:
            raise ConfigError(
                f"{self.provider.name} provider does not match the configured execution mode"
            )
        self.source = DistributionSource(self.provider, run_config.ranges)

        logger.info(
            f"CalibrationEngine created: provider={self.provider.name}, "
            f"output={run_config.output_select.name}, iterations={run_config.iterations}"
        )

    def run(self) -> RunResult:
        """
        Execute all iterations and aggregate.

        Returns:
            RunResult

        Raises:
            AllocationError: If the Monte Carlo buffer cannot be reserved
        """
        config = self.run_config
        buffer = SampleBuffer(config.iterations) if self.provider.is_sampling else None

        start = time.process_time()

        outputs = None
        for _ in range(config.iterations):
            inputs = self.source.draw_inputs()
            outputs = evaluate(inputs, config.output_select)

            if buffer is not None:
                buffer.append(outputs.primary)

        statistics = None
        samples = None
        primary = outputs.primary
        if buffer is not None:
            samples = buffer.freeze()
            statistics = aggregate(samples)
            primary = EmpiricalDistribution(samples)

        elapsed = time.process_time() - start

        if statistics is not None:
            log_statistics(
                {"mean": statistics.mean, "variance": statistics.variance,
                 "count": statistics.count},
                title=f"Monte Carlo {config.output_select.name}",
            )
        logger.info(f"Run finished in {elapsed:.6f} s CPU")

        return RunResult(
            outputs=outputs,
            primary=primary,
            statistics=statistics,
            samples=samples,
            elapsed_seconds=elapsed,
        )


class CalibrationPipeline:
    """
    Complete run: engine plus result emission.

    Args:
        run_config: Validated run configuration
        stream: Text stream for results (default: stdout)
        provider: Optional provider override
    """

    def __init__(self,
                 run_config: RunConfiguration,
                 stream: Optional[TextIO] = None,
                 provider: Optional[DistributionProvider] = None):
        self.run_config = run_config
        self.stream = stream if stream is not None else sys.stdout
        self.engine = CalibrationEngine(run_config, provider)
        self.reporter = TailProbabilityReporter(self.engine.provider, stream=self.stream)

    def run(self) -> RunResult:
        return self.engine.run()

    def execute(self) -> RunResult:
        """Run and emit in one call."""
        result = self.run()
        self.emit(result)
        return result

    def emit(self, result: RunResult) -> None:
        """
        Write results in the configured format.

        Args:
            result: Output of run()
        """
        config = self.run_config

        if config.benchmarking:
            self.stream.write(
                format_benchmark_line(result.primary_estimate, result.elapsed_microseconds) + "\n"
            )
        else:
            if config.json_output:
                write_json(self._records(result), stream=self.stream)
            else:
                self._report(result)

            if config.timing:
                self.stream.write(f"\nCPU time used: {result.elapsed_seconds:f} seconds\n")

            if config.output_path is not None:
                channels = list(result.outputs)
                write_csv_snapshot(
                    config.output_path,
                    [CALIBRATION_TABLE[c].label for c in channels],
                    [point_estimate(result.outputs[c]) for c in channels],
                )

        if result.samples is not None:
            save_monte_carlo_samples(result.samples, result.elapsed_microseconds, config.dump_path)

    def _report(self, result: RunResult) -> None:
        config = self.run_config

        if config.is_all_outputs:
            for channel in OutputChannel.channels():
                coefficients = CALIBRATION_TABLE[channel]
                self.reporter.report(result.outputs[channel], coefficients.label, coefficients.units)
        else:
            coefficients = CALIBRATION_TABLE[config.output_select]
            self.reporter.report(
                result.primary,
                coefficients.label,
                coefficients.units,
                reference=result.primary_estimate,
            )

    def _records(self, result: RunResult):
        config = self.run_config

        if config.is_all_outputs:
            return [self._native_record(c, result.outputs[c]) for c in OutputChannel.channels()]

        channel = config.output_select
        if result.samples is not None:
            return [OutputRecord(int(channel), CALIBRATION_TABLE[channel].label, result.samples)]
        return [self._native_record(channel, result.primary)]

    @staticmethod
    def _native_record(channel: OutputChannel, value) -> OutputRecord:
        support = (lower_bound(value), upper_bound(value))
        return OutputRecord(
            int(channel),
            CALIBRATION_TABLE[channel].label,
            [point_estimate(value)],
            statistic="mean",
            support=support,
        )
