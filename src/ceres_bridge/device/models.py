"""
Device payload models and control variables
"""

from enum import Enum
from typing import Optional, Union
from dataclasses import dataclass
from pydantic import BaseModel

SUPPORTED_MODES = ("heat", "cool")

class DeviceFeatures(BaseModel):
    """Feature set a device reports about itself"""
    temperature: bool = False
    humidity: bool = False
    ac: bool = False

class AcStatus(BaseModel):
    """Body of GET /ac/status"""
    on: bool
    mode: Optional[str] = None
    temp: Optional[float] = None
    swing: bool

class DeviceStatus(AcStatus):
    """Body of GET / - the air-conditioner fields plus the required feature map"""
    features: DeviceFeatures


class ControlVariable(Enum):
    """Variables accepted by GET /ac/control, one per request"""
    ON = "on"
    SWING = "swing"
    TEMP = "temp"
    MODE = "mode"


@dataclass(frozen=True)
class ControlCommand:
    variable: ControlVariable
    value: Union[bool, float, str]


def encode_control(command: ControlCommand) -> dict:
    """Encode a command as the single query parameter the device expects"""
    variable, value = command.variable, command.value

    if variable in (ControlVariable.ON, ControlVariable.SWING):
        encoded = "1" if value else "0"
    elif variable is ControlVariable.TEMP:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"temp must be a number, got {value!r}")
        encoded = f"{float(value):g}"
    elif variable is ControlVariable.MODE:
        if value not in SUPPORTED_MODES:
            raise ValueError(f"Unsupported mode {value!r}")
        encoded = value
    else:
        raise ValueError(f"Unknown control variable {variable!r}")

    return {variable.value: encoded}


def read_control_value(status: AcStatus, variable: ControlVariable):
    """Return the status field backing a control variable"""
    if variable is ControlVariable.ON:
        return status.on
    if variable is ControlVariable.SWING:
        return status.swing
    if variable is ControlVariable.TEMP:
        return status.temp
    return status.mode
