"""
SHT4x Calibration Telemetry - Input Distribution Source
========================================================

Supplies the three analog input voltages for each pipeline iteration.

Input Model:
------------
Each ADC channel is modeled as uniform on a configured range [V]:

    V_RH ~ U(2.3, 2.7)
    V_T  ~ U(2.3, 2.7)
    V_DD ~ U(4.8, 5.4)

In native mode a draw is a full distributional value; in Monte Carlo
mode each iteration draws an independent scalar triple.

Example:
--------
>>> from sht4x_uncertainty.core import MonteCarloProvider
>>> source = DistributionSource(MonteCarloProvider(seed=1))
>>> sample = source.draw_inputs()
>>> 4.8 <= sample.vsupply <= 5.4
True

Author: Sensor Calibration Team
Date: October 17, 2026
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
import logging

from ..core.distributions import DistributionProvider
from ..physics.calibration import InputChannel, InputSample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelRange:
    """Closed interval [low, high] of an input channel [V]."""
    low: float
    high: float

    def __post_init__(self):
        if self.low > self.high:
            raise ValueError(f"Invalid range: low ({self.low}) > high ({self.high})")

    @property
    def width(self) -> float:
        return self.high - self.low

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


DEFAULT_RANGES: Mapping[InputChannel, ChannelRange] = MappingProxyType({
    InputChannel.HUMIDITY_VOLTAGE: ChannelRange(2.3, 2.7),
    InputChannel.TEMPERATURE_VOLTAGE: ChannelRange(2.3, 2.7),
    InputChannel.SUPPLY_VOLTAGE: ChannelRange(4.8, 5.4),
})

CONFIG_KEYS: Mapping[InputChannel, str] = MappingProxyType({
    InputChannel.HUMIDITY_VOLTAGE: "humidity_voltage",
    InputChannel.TEMPERATURE_VOLTAGE: "temperature_voltage",
    InputChannel.SUPPLY_VOLTAGE: "supply_voltage",
})


def ranges_from_config(inputs: Dict[str, Any]) -> Mapping[InputChannel, ChannelRange]:
    """
    Build channel ranges from the `inputs` config section.

    Channels missing from the section keep their default range.
    """
    ranges = dict(DEFAULT_RANGES)
    for channel, key in CONFIG_KEYS.items():
        if key in inputs:
            bounds = inputs[key]
            ranges[channel] = ChannelRange(float(bounds["low"]), float(bounds["high"]))
    return MappingProxyType(ranges)


class DistributionSource:
    """
    Draws input values through a distribution provider.

    Args:
        provider: Native or Monte Carlo provider
        ranges: Per-channel ranges (defaults to the datasheet test ranges)
    """

    def __init__(self,
                 provider: DistributionProvider,
                 ranges: Optional[Mapping[InputChannel, ChannelRange]] = None):
        self.provider = provider
        self.ranges = MappingProxyType(dict(ranges if ranges is not None else DEFAULT_RANGES))

        missing = [c.name for c in InputChannel if c not in self.ranges]
        if missing:
            raise ValueError(f"Missing ranges for channels: {missing}")

    def sample(self, channel: InputChannel, channel_range: Optional[ChannelRange] = None):
        """Draw one value for a channel, uniformly from its range."""
        channel_range = channel_range or self.ranges[channel]
        return self.provider.uniform(channel_range.low, channel_range.high)

    def draw_inputs(self) -> InputSample:
        """Draw a fresh (V_RH, V_T, V_DD) triple."""
        return InputSample(
            vrh=self.sample(InputChannel.HUMIDITY_VOLTAGE),
            vt=self.sample(InputChannel.TEMPERATURE_VOLTAGE),
            vsupply=self.sample(InputChannel.SUPPLY_VOLTAGE),
        )
