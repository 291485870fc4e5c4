"""
Heater-cooler state mapping between device status and the three-state HVAC model
"""

from enum import IntEnum
from typing import Optional

from ..device.models import AcStatus, ControlCommand, ControlVariable


class ObservedState(IntEnum):
    """CurrentHeaterCoolerState values (IDLE=1 is never reported)"""
    INACTIVE = 0
    HEATING = 2
    COOLING = 3


class TargetState(IntEnum):
    """TargetHeaterCoolerState values"""
    AUTO = 0
    HEAT = 1
    COOL = 2


def to_observed_state(status: AcStatus) -> ObservedState:
    if not status.on:
        return ObservedState.INACTIVE
    if status.mode == "heat":
        return ObservedState.HEATING
    # Unknown modes are reported as cooling
    return ObservedState.COOLING


def to_target_state(status: AcStatus) -> TargetState:
    if not status.on:
        return TargetState.AUTO
    if status.mode == "heat":
        return TargetState.HEAT
    return TargetState.COOL


def from_target_command(target: TargetState) -> Optional[ControlCommand]:
    """
    Control command for a target state. AUTO has no single-call equivalent
    and maps to None; the caller decides whether to touch ``on``.
    """
    target = TargetState(target)
    if target is TargetState.HEAT:
        return ControlCommand(ControlVariable.MODE, "heat")
    if target is TargetState.COOL:
        return ControlCommand(ControlVariable.MODE, "cool")
    return None
