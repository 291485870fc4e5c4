"""
Device record data structures
"""

import uuid
from typing import FrozenSet, Optional
from dataclasses import dataclass, field
from datetime import datetime

from ..accessories.services import Capability, PresentationService
from ..device.models import DeviceStatus

# Fixed namespace: identities must survive restarts
IDENTITY_NAMESPACE = uuid.UUID("6f1c1d2e-8a4b-5c3d-9e7f-0a1b2c3d4e5f")

def derive_identity(service_name: str) -> str:
    """Stable identity for an advertised service name"""
    return str(uuid.uuid5(IDENTITY_NAMESPACE, service_name))


def capabilities_from_status(status: DeviceStatus) -> Capability:
    capabilities = Capability.NONE
    if status.features.temperature:
        capabilities |= Capability.TEMPERATURE
    if status.features.humidity:
        capabilities |= Capability.HUMIDITY
    if status.features.ac:
        capabilities |= Capability.AC
    return capabilities


@dataclass(frozen=True)
class CapabilityDelta:
    """Capability flags gained and lost by one upsert"""
    added: Capability = Capability.NONE
    removed: Capability = Capability.NONE

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


@dataclass(frozen=True)
class DeviceRecord:
    """One physical device as currently known"""
    identity: str
    name: str
    address: str
    capabilities: Capability = Capability.NONE
    status: Optional[DeviceStatus] = None
    services: FrozenSet[PresentationService] = frozenset()
    last_seen: Optional[datetime] = field(default=None, compare=False)

    @property
    def has_temperature(self) -> bool:
        return Capability.TEMPERATURE in self.capabilities

    @property
    def has_humidity(self) -> bool:
        return Capability.HUMIDITY in self.capabilities

    @property
    def has_ac(self) -> bool:
        return Capability.AC in self.capabilities


@dataclass(frozen=True)
class UpsertResult:
    record: DeviceRecord
    created: bool
    delta: CapabilityDelta
