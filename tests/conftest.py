"""Pytest configuration and shared fixtures for bridge tests."""
import asyncio
from typing import Dict, List, Optional, Union

import pytest

from ceres_bridge.accessories.bridge import InMemoryAccessoryBridge
from ceres_bridge.device.models import AcStatus, ControlCommand, DeviceStatus
from ceres_bridge.discovery.guard import InFlightGuard
from ceres_bridge.discovery.manager import ReconciliationEngine
from ceres_bridge.exceptions import DeviceUnreachableError, MalformedResponseError
from ceres_bridge.records.store import RecordStore


def make_status(on=True, mode="cool", temp=22.0, swing=False,
                temperature=True, humidity=False, ac=True) -> DeviceStatus:
    return DeviceStatus(
        on=on, mode=mode, temp=temp, swing=swing,
        features={"temperature": temperature, "humidity": humidity, "ac": ac},
    )


class FakeDeviceClient:
    """DeviceClient stand-in keyed by address."""

    def __init__(self):
        self.statuses: Dict[str, Union[DeviceStatus, Exception]] = {}
        self.ac_statuses: Dict[str, Union[AcStatus, Exception]] = {}
        self.metrics: Dict[str, Union[Dict[str, float], Exception]] = {}
        self.fetch_calls: List[str] = []
        self.controls: List[tuple] = []
        self.control_error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None

    async def fetch_status(self, address: str) -> DeviceStatus:
        self.fetch_calls.append(address)
        if self.gate is not None:
            await self.gate.wait()
        result = self.statuses.get(address, DeviceUnreachableError(address, "no route"))
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_ac_status(self, address: str) -> AcStatus:
        result = self.ac_statuses.get(address, DeviceUnreachableError(address, "no route"))
        if isinstance(result, Exception):
            raise result
        return result

    async def read_metric(self, address: str, name: str) -> float:
        result = self.metrics.get(address, DeviceUnreachableError(address, "no route"))
        if isinstance(result, Exception):
            raise result
        if name not in result:
            raise MalformedResponseError(address, f"Metric {name} not found")
        return result[name]

    async def send_control(self, address: str, command: ControlCommand) -> None:
        if self.control_error is not None:
            raise self.control_error
        self.controls.append((address, command))


@pytest.fixture
def fake_client():
    return FakeDeviceClient()


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def guard():
    return InFlightGuard()


@pytest.fixture
def bridge():
    return InMemoryAccessoryBridge()


@pytest.fixture
def engine(fake_client, store, guard, bridge):
    return ReconciliationEngine(fake_client, store, guard, bridge)
