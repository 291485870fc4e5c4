"""
Accessory handler for one device
An instance is created per record; each exposes the presentation services
its capabilities require, and every characteristic read or write goes to
the device at its current address.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List
from dataclasses import dataclass

from ..device.client import DeviceClient
from ..device.metrics import TEMPERATURE_METRIC, HUMIDITY_METRIC
from ..device.models import ControlCommand, ControlVariable, read_control_value
from ..exceptions import (
    CharacteristicError, DeviceError, MalformedResponseError, UnknownCharacteristicError,
)
from ..records.store import RecordStore
from .climate import TargetState, from_target_command, to_observed_state, to_target_state
from .services import PresentationService

logger = logging.getLogger(__name__)

# Characteristic names
ACTIVE = "Active"
CURRENT_TEMPERATURE = "CurrentTemperature"
CURRENT_RELATIVE_HUMIDITY = "CurrentRelativeHumidity"
CURRENT_HEATER_COOLER_STATE = "CurrentHeaterCoolerState"
TARGET_HEATER_COOLER_STATE = "TargetHeaterCoolerState"
SWING_MODE = "SwingMode"
COOLING_THRESHOLD_TEMPERATURE = "CoolingThresholdTemperature"
HEATING_THRESHOLD_TEMPERATURE = "HeatingThresholdTemperature"

Getter = Callable[[], Awaitable[Any]]
Setter = Callable[[Any], Awaitable[None]]


def as_flag(value: Any) -> bool:
    """Active / SwingMode write value: a bool or the integers 0 and 1"""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"expected 0 or 1, got {value!r}")


@dataclass(frozen=True)
class AccessoryInformation:
    manufacturer: str = "Custom-Made"
    model: str = "ESP8266-Arduino"
    serial_number: str = "esp8266"


class AccessoryService:
    """A presentation service: a named set of readable/writable characteristics"""

    service_type: PresentationService

    def __init__(self, accessory: "DeviceAccessory"):
        self.accessory = accessory
        self._getters: Dict[str, Getter] = {}
        self._setters: Dict[str, Setter] = {}

    @property
    def characteristics(self) -> List[str]:
        return list(self._getters)

    def is_writable(self, name: str) -> bool:
        return name in self._setters

    async def get(self, name: str) -> Any:
        getter = self._getters.get(name)
        if getter is None:
            raise UnknownCharacteristicError(f"{self.service_type.value} has no characteristic {name}")
        return await getter()

    async def set(self, name: str, value: Any) -> None:
        setter = self._setters.get(name)
        if setter is None:
            raise UnknownCharacteristicError(f"{self.service_type.value}.{name} is not writable")
        await setter(value)


class TemperatureSensorService(AccessoryService):
    service_type = PresentationService.TEMPERATURE_SENSOR

    def __init__(self, accessory: "DeviceAccessory"):
        super().__init__(accessory)
        self._getters[CURRENT_TEMPERATURE] = accessory.get_temperature


class HumiditySensorService(AccessoryService):
    service_type = PresentationService.HUMIDITY_SENSOR

    def __init__(self, accessory: "DeviceAccessory"):
        super().__init__(accessory)
        self._getters[CURRENT_RELATIVE_HUMIDITY] = accessory.get_humidity


class HeaterCoolerService(AccessoryService):
    service_type = PresentationService.HEATER_COOLER

    def __init__(self, accessory: "DeviceAccessory"):
        super().__init__(accessory)
        a = accessory

        self._getters[ACTIVE] = lambda: a.get_ac_flag(ControlVariable.ON)
        self._setters[ACTIVE] = lambda value: a.set_ac_variable(ControlVariable.ON, as_flag(value))

        self._getters[CURRENT_HEATER_COOLER_STATE] = a.get_observed_state
        self._getters[TARGET_HEATER_COOLER_STATE] = a.get_target_state
        self._setters[TARGET_HEATER_COOLER_STATE] = a.set_target_state

        self._getters[CURRENT_TEMPERATURE] = a.get_temperature

        self._getters[SWING_MODE] = lambda: a.get_ac_flag(ControlVariable.SWING)
        self._setters[SWING_MODE] = lambda value: a.set_ac_variable(ControlVariable.SWING, as_flag(value))

        for name in (COOLING_THRESHOLD_TEMPERATURE, HEATING_THRESHOLD_TEMPERATURE):
            self._getters[name] = a.get_set_point
            self._setters[name] = a.set_set_point


SERVICE_CLASSES = {
    PresentationService.TEMPERATURE_SENSOR: TemperatureSensorService,
    PresentationService.HUMIDITY_SENSOR: HumiditySensorService,
    PresentationService.HEATER_COOLER: HeaterCoolerService,
}


class DeviceAccessory:
    """Accessory handler bound to one record identity"""

    def __init__(self, identity: str, store: RecordStore, client: DeviceClient,
                 info: AccessoryInformation = AccessoryInformation()):
        self.identity = identity
        self.store = store
        self.client = client
        self.info = info
        self.services: Dict[PresentationService, AccessoryService] = {}

    @property
    def record(self):
        record = self.store.find(self.identity)
        if record is None:
            raise CharacteristicError(f"No record for accessory {self.identity}")
        return record

    @property
    def address(self) -> str:
        return self.record.address

    @property
    def display_name(self) -> str:
        record = self.store.find(self.identity)
        return record.name if record else self.identity

    def ensure_services(self, required: Iterable[PresentationService]) -> List[PresentationService]:
        """Instantiate any missing services; existing ones are never removed"""
        added = []
        for service_type in sorted(required, key=lambda s: s.value):
            if service_type in self.services:
                continue
            logger.info(f"Configuring {service_type.value} service for {self.display_name}")
            self.services[service_type] = SERVICE_CLASSES[service_type](self)
            added.append(service_type)
        return added

    def get_service(self, service_type: PresentationService) -> AccessoryService:
        service = self.services.get(service_type)
        if service is None:
            raise UnknownCharacteristicError(f"{self.display_name} does not expose {service_type.value}")
        return service

    # ================== CHARACTERISTIC HANDLERS ==================

    async def get_temperature(self) -> float:
        return await self._read_metric(TEMPERATURE_METRIC)

    async def get_humidity(self) -> float:
        return await self._read_metric(HUMIDITY_METRIC)

    async def get_ac_flag(self, variable: ControlVariable) -> int:
        return int(bool(await self.get_ac_variable(variable)))

    async def get_ac_variable(self, variable: ControlVariable):
        address = self.address
        logger.debug(f"Get {variable.value} on {address}")
        try:
            status = await self.client.fetch_ac_status(address)
            value = read_control_value(status, variable)
            if value is None:
                raise MalformedResponseError(address, f"status has no {variable.value}")
        except DeviceError as e:
            logger.error(f"Cannot get variable {variable.value} on {address}: error {e}")
            raise CharacteristicError("Cannot get status") from e
        logger.debug(f"Got {value} for {variable.value} on {address}")
        return value

    async def set_ac_variable(self, variable: ControlVariable, value) -> None:
        address = self.address
        try:
            await self.client.send_control(address, ControlCommand(variable, value))
        except DeviceError as e:
            logger.error(f"Cannot set {variable.value} to {value} on {address}: {e}")
            raise CharacteristicError("Cannot set status") from e

    async def get_set_point(self) -> float:
        return float(await self.get_ac_variable(ControlVariable.TEMP))

    async def set_set_point(self, value) -> None:
        await self.set_ac_variable(ControlVariable.TEMP, float(value))

    async def get_observed_state(self) -> int:
        status = await self._fetch_ac_status("current")
        return int(to_observed_state(status))

    async def get_target_state(self) -> int:
        status = await self._fetch_ac_status("target")
        return int(to_target_state(status))

    async def set_target_state(self, value) -> None:
        target = TargetState(int(value))
        logger.debug(f"Set AC cooling state {target.name} on {self.display_name}")
        command = from_target_command(target)
        if command is None:
            logger.debug(f"Target {target.name} has no control equivalent, leaving {self.display_name} unchanged")
            return
        await self.set_ac_variable(command.variable, command.value)

    # ================== HELPERS ==================

    async def _fetch_ac_status(self, mode: str):
        address = self.address
        logger.debug(f"Get coolingState on {address} with mode {mode}")
        try:
            return await self.client.fetch_ac_status(address)
        except DeviceError as e:
            logger.error(f"Cannot get coolingState on {address} with mode {mode}: {e}")
            raise CharacteristicError("Cannot get status") from e

    async def _read_metric(self, name: str) -> float:
        address = self.address
        try:
            return await self.client.read_metric(address, name)
        except MalformedResponseError as e:
            logger.error(f"Cannot parse {name} from metrics of {address}: {e}")
            raise CharacteristicError("Cannot parse metrics result") from e
        except DeviceError as e:
            logger.error(f"Cannot access metrics on {address}: {e}")
            raise CharacteristicError("Cannot get status") from e
