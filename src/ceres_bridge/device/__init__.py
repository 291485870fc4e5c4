"""
Device client for ceres-http devices
"""

from .client import DeviceClient
from .models import AcStatus, DeviceStatus, DeviceFeatures, ControlVariable, ControlCommand, encode_control
from .metrics import parse_metric, TEMPERATURE_METRIC, HUMIDITY_METRIC

__all__ = [
    'DeviceClient', 'AcStatus', 'DeviceStatus', 'DeviceFeatures', 'ControlVariable',
    'ControlCommand', 'encode_control', 'parse_metric', 'TEMPERATURE_METRIC', 'HUMIDITY_METRIC'
]
