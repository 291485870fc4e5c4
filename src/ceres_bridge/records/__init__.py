"""
Device record store
"""

from .models import (
    Capability, CapabilityDelta, DeviceRecord, UpsertResult,
    capabilities_from_status, derive_identity,
)
from .store import RecordStore

__all__ = [
    'Capability', 'CapabilityDelta', 'DeviceRecord', 'UpsertResult',
    'capabilities_from_status', 'derive_identity', 'RecordStore'
]
