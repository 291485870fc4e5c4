"""
Exception hierarchy for the bridge
"""


class CeresBridgeError(Exception):
    """Base class for all bridge errors"""


class DeviceError(CeresBridgeError):
    """A request to a device did not produce a usable result"""

    def __init__(self, address: str, message: str):
        super().__init__(f"{address}: {message}")
        self.address = address


class DeviceUnreachableError(DeviceError):
    """Connection failure, timeout or HTTP error status"""


class MalformedResponseError(DeviceError):
    """Device answered, but the body does not have the expected shape"""


class CharacteristicError(CeresBridgeError):
    """Outward-facing get/set failure"""


class UnknownCharacteristicError(CeresBridgeError):
    """Service or characteristic is not exposed (or not writable)"""
