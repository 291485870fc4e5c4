"""
In-memory store of known device records
"""

import logging
import threading
from typing import Dict, FrozenSet, List, Optional
from dataclasses import replace
from datetime import datetime, timezone

from ..accessories.services import Capability, PresentationService
from ..device.models import DeviceStatus
from .models import CapabilityDelta, DeviceRecord, UpsertResult

logger = logging.getLogger(__name__)

class RecordStore:
    """
    Canonical copy of every known device record, keyed by identity.
    Records are immutable; upsert swaps in a new object so readers never
    see a partially merged record.
    """

    def __init__(self):
        self._records: Dict[str, DeviceRecord] = {}
        self._lock = threading.Lock()

    def find(self, identity: str) -> Optional[DeviceRecord]:
        return self._records.get(identity)

    def all(self) -> List[DeviceRecord]:
        return sorted(self._records.values(), key=lambda record: record.name)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identity: str) -> bool:
        return identity in self._records

    def upsert(self, identity: str, *,
               name: Optional[str] = None,
               address: Optional[str] = None,
               status: Optional[DeviceStatus] = None,
               capabilities: Optional[Capability] = None,
               services: Optional[FrozenSet[PresentationService]] = None) -> UpsertResult:
        """
        Create the record or merge the supplied fields into it.
        Fields left as None keep their current value.
        """
        now = datetime.now(timezone.utc)

        with self._lock:
            existing = self._records.get(identity)

            if existing is None:
                if not address:
                    raise ValueError(f"Cannot create record {identity} without an address")
                record = DeviceRecord(
                    identity=identity,
                    name=name or identity,
                    address=address,
                    capabilities=capabilities if capabilities is not None else Capability.NONE,
                    status=status,
                    services=frozenset(services or ()),
                    last_seen=now
                )
                delta = CapabilityDelta(added=record.capabilities)
                created = True
            else:
                changes = {'last_seen': now}
                if name is not None:
                    changes['name'] = name
                if address is not None:
                    changes['address'] = address
                if status is not None:
                    changes['status'] = status
                if capabilities is not None:
                    changes['capabilities'] = capabilities
                if services is not None:
                    changes['services'] = frozenset(services)
                record = replace(existing, **changes)
                delta = CapabilityDelta(
                    added=record.capabilities & ~existing.capabilities,
                    removed=existing.capabilities & ~record.capabilities
                )
                created = False

            self._records[identity] = record

        if created:
            logger.debug(f"Created record {record.name} ({identity}) at {record.address}")
        elif delta.changed:
            logger.info(f"Capabilities of {record.name} changed: +{delta.added} -{delta.removed}")

        return UpsertResult(record=record, created=created, delta=delta)
