"""
SHT4x Calibration Physics - Datasheet Conversion Model
=======================================================

Linear conversion of ratiometric analog outputs to physical quantities.

Calibration Equations:
----------------------
Taken from Figure 4, page 8 of the SHT4xI-analog datasheet (2024-07-03):

    RH  = -12.5   + 125    × (V_RH / V_DD)      [%]
    T_C = -66.875 + 218.75 × (V_T  / V_DD)      [°C]
    T_F = -88.375 + 393.75 × (V_T  / V_DD)      [°F]

    where:
    - V_RH: humidity-channel voltage [V]
    - V_T:  temperature-channel voltage [V]
    - V_DD: supply voltage [V]

The outputs are ratiometric: only the fraction V/V_DD matters, so supply
uncertainty enters every channel.

Values may be floats (Monte Carlo mode) or DistributionalValues (native
mode); the formulas are written once and work for both.

Example:
--------
>>> inputs = InputSample(vrh=2.5, vt=2.5, vsupply=5.0)
>>> result = evaluate(inputs, OutputChannel.ALL)
>>> result[OutputChannel.RELATIVE_HUMIDITY]
50.0
>>> result.primary  # last formula evaluated
108.5

Author: Sensor Calibration Team
Date: October 17, 2026
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Dict
import logging

from ..core.distributions import lower_bound

logger = logging.getLogger(__name__)


class InputChannel(IntEnum):
    """Analog input channels."""
    HUMIDITY_VOLTAGE = 0
    TEMPERATURE_VOLTAGE = 1
    SUPPLY_VOLTAGE = 2


class OutputChannel(IntEnum):
    """Calibrated outputs; ALL selects every channel."""
    RELATIVE_HUMIDITY = 0
    TEMPERATURE_CELSIUS = 1
    TEMPERATURE_FAHRENHEIT = 2
    ALL = 3

    @classmethod
    def channels(cls):
        """Concrete channels in formula evaluation order."""
        return (cls.RELATIVE_HUMIDITY, cls.TEMPERATURE_CELSIUS, cls.TEMPERATURE_FAHRENHEIT)


@dataclass(frozen=True)
class InputSample:
    """One draw of the three analog inputs."""
    vrh: Any
    vt: Any
    vsupply: Any

    def __getitem__(self, channel: InputChannel):
        return (self.vrh, self.vt, self.vsupply)[channel]


@dataclass(frozen=True)
class CalibrationCoefficients:
    """
    value = offset + gain × (numerator / V_DD)

    Attributes:
        offset: Additive constant a
        gain: Multiplicative constant b
        numerator: Input channel divided by the supply voltage
        label: Human-readable output name
        units: Units of measurement
    """
    offset: float
    gain: float
    numerator: InputChannel
    label: str
    units: str

    def apply(self, inputs: InputSample):
        return self.offset + self.gain * (inputs[self.numerator] / inputs.vsupply)


CALIBRATION_TABLE: Mapping[OutputChannel, CalibrationCoefficients] = MappingProxyType({
    OutputChannel.RELATIVE_HUMIDITY: CalibrationCoefficients(
        offset=-12.5,
        gain=125.0,
        numerator=InputChannel.HUMIDITY_VOLTAGE,
        label="Calibrated Relative Humidity",
        units="%",
    ),
    OutputChannel.TEMPERATURE_CELSIUS: CalibrationCoefficients(
        offset=-66.875,
        gain=218.75,
        numerator=InputChannel.TEMPERATURE_VOLTAGE,
        label="Calibrated Temperature (in Celsius)",
        units="Celsius",
    ),
    OutputChannel.TEMPERATURE_FAHRENHEIT: CalibrationCoefficients(
        offset=-88.375,
        gain=393.75,
        numerator=InputChannel.TEMPERATURE_VOLTAGE,
        label="Calibrated Temperature (in Fahrenheit)",
        units="Fahrenheit",
    ),
})


class CalibrationResult(Mapping):
    """
    Read-only mapping of computed channels to values.

    `primary` is the last value computed, i.e. Fahrenheit when every
    channel is selected.
    """

    def __init__(self, values: Dict[OutputChannel, Any], primary: Any):
        self._values = dict(values)
        self.primary = primary

    def __getitem__(self, channel):
        return self._values[channel]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        items = ", ".join(f"{c.name}={v!r}" for c, v in self._values.items())
        return f"CalibrationResult({items})"


def evaluate(inputs: InputSample, selector: OutputChannel) -> CalibrationResult:
    """
    Apply the datasheet equations to one input sample.

    Args:
        inputs: Analog voltages (floats or distributional values)
        selector: Single output channel or OutputChannel.ALL

    Returns:
        CalibrationResult holding the selected channel values
    """
    selector = OutputChannel(selector)
    assert lower_bound(inputs.vsupply) > 0, "Supply voltage must be positive"

    selected = OutputChannel.channels() if selector == OutputChannel.ALL else (selector,)

    values = {}
    primary = None
    for channel in selected:
        primary = values[channel] = CALIBRATION_TABLE[channel].apply(inputs)

    return CalibrationResult(values, primary)
