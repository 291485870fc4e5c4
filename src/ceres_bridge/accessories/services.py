"""
Capability flags and the presentation services they require
"""

from enum import Enum, Flag
from typing import Dict, FrozenSet


class Capability(Flag):
    """Features a device reports in its status"""
    NONE = 0
    TEMPERATURE = 1
    HUMIDITY = 2
    AC = 4


class PresentationService(Enum):
    TEMPERATURE_SENSOR = "temperature_sensor"
    HUMIDITY_SENSOR = "humidity_sensor"
    HEATER_COOLER = "heater_cooler"


_T = Capability.TEMPERATURE
_H = Capability.HUMIDITY
_A = Capability.AC
_TEMP = PresentationService.TEMPERATURE_SENSOR
_HUM = PresentationService.HUMIDITY_SENSOR
_HC = PresentationService.HEATER_COOLER

# Heater-cooler reports the current temperature, so it also needs TEMPERATURE
REQUIRED_SERVICES: Dict[Capability, FrozenSet[PresentationService]] = {
    Capability.NONE: frozenset(),
    _T: frozenset({_TEMP}),
    _H: frozenset({_HUM}),
    _A: frozenset(),
    _T | _H: frozenset({_TEMP, _HUM}),
    _T | _A: frozenset({_TEMP, _HC}),
    _H | _A: frozenset({_HUM}),
    _T | _H | _A: frozenset({_TEMP, _HUM, _HC}),
}


def services_for(capabilities: Capability) -> FrozenSet[PresentationService]:
    return REQUIRED_SERVICES[capabilities]
