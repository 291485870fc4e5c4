"""
Reconciliation engine
Turns discovery events into created/updated device records and makes sure
each record's accessory exposes the services its capabilities require.
"""

import asyncio
import ipaddress
import logging
from typing import Dict, Iterable, Optional, Set

from ..accessories.accessory import AccessoryInformation, DeviceAccessory
from ..accessories.bridge import AccessoryBridge
from ..accessories.services import services_for
from ..device.client import DeviceClient
from ..exceptions import DeviceUnreachableError, MalformedResponseError
from ..records.models import DeviceRecord, capabilities_from_status, derive_identity
from ..records.store import RecordStore
from .guard import InFlightGuard
from .models import DiscoveryEvent, ReconcileOutcome

logger = logging.getLogger(__name__)

def select_address(addresses: Iterable[str]) -> Optional[str]:
    """First entry that is a literal IP address"""
    for address in addresses or ():
        try:
            ipaddress.ip_address(str(address).strip())
        except ValueError:
            continue
        return str(address).strip()
    return None

class ReconciliationEngine:
    """Reconciles discovered services against the record store"""

    def __init__(self, client: DeviceClient, store: RecordStore, guard: InFlightGuard,
                 bridge: AccessoryBridge, info: AccessoryInformation = AccessoryInformation()):
        self.client = client
        self.store = store
        self.guard = guard
        self.bridge = bridge
        self.info = info
        self.accessories: Dict[str, DeviceAccessory] = {}
        self._tasks: Set[asyncio.Task] = set()

    # ================== ENTRY POINTS ==================

    def schedule(self, event: DiscoveryEvent) -> asyncio.Task:
        """Fire-and-forget reconciliation for a discovery event"""
        task = asyncio.ensure_future(self.on_discovered(event.name, event.addresses))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def handle_event(self, event: DiscoveryEvent) -> ReconcileOutcome:
        return await self.on_discovered(event.name, event.addresses)

    def configure_accessory(self, record: DeviceRecord) -> asyncio.Task:
        """
        Restore a previously persisted record and immediately re-reconcile it
        at its last-known address
        """
        logger.info(f"Loading accessory from cache: {record.name}")
        result = self.store.upsert(
            record.identity,
            name=record.name,
            address=record.address,
            status=record.status,
            capabilities=record.capabilities,
            services=record.services
        )
        self._accessory_for(record.identity).ensure_services(result.record.services)
        return self.schedule(DiscoveryEvent(name=record.name, addresses=[record.address]))

    async def on_discovered(self, service_name: str, addresses: Iterable[str]) -> ReconcileOutcome:
        """
        Reconcile one discovery event. Never raises: discovery must keep
        running whatever happens to a single device.
        """
        identity = derive_identity(service_name)

        if not self.guard.try_enter(identity):
            logger.debug(f"Reconciliation of {service_name} already in flight, dropping event")
            return ReconcileOutcome.DUPLICATE_IN_FLIGHT

        try:
            return await self._reconcile(identity, service_name, list(addresses or ()))
        except Exception as e:
            logger.error(f"Reconciliation of {service_name} failed: {e}", exc_info=True)
            return ReconcileOutcome.FAILED
        finally:
            self.guard.leave(identity)

    async def drain(self) -> None:
        """Wait for all scheduled reconciliations"""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ================== RECONCILIATION ==================

    async def _reconcile(self, identity: str, service_name: str, addresses) -> ReconcileOutcome:
        logger.info(f"ceres-http service up: {service_name} {addresses}")

        address = select_address(addresses)
        if address is None:
            logger.warning(f"No usable address for {service_name}, treating as unreachable")
            return ReconcileOutcome.UNREACHABLE

        try:
            status = await self.client.fetch_status(address)
        except DeviceUnreachableError as e:
            logger.warning(f"Cannot get features of {service_name} at {address}: {e}")
            return ReconcileOutcome.UNREACHABLE
        except MalformedResponseError as e:
            logger.warning(f"Malformed status from {service_name} at {address}: {e}")
            return ReconcileOutcome.MALFORMED

        capabilities = capabilities_from_status(status)
        existing = self.store.find(identity)
        exposed = existing.services if existing else frozenset()
        required = services_for(capabilities)

        result = self.store.upsert(
            identity,
            name=service_name,
            address=address,
            status=status,
            capabilities=capabilities,
            services=exposed | required
        )
        record = result.record

        if existing and existing.address != address:
            logger.info(f"{service_name} moved from {existing.address} to {address}")
        if result.delta.removed:
            logger.info(f"{service_name} no longer reports {result.delta.removed}; keeping its services")

        added = self._accessory_for(identity).ensure_services(record.services)

        if result.created:
            logger.info(f"Created accessory {service_name} at {address} with {len(added)} services")
            self.bridge.register_new_accessory(record)
            return ReconcileOutcome.CREATED

        if added:
            logger.info(f"Added {', '.join(s.value for s in added)} to {service_name}")
        self.bridge.update_accessory(record)
        return ReconcileOutcome.UPDATED

    def _accessory_for(self, identity: str) -> DeviceAccessory:
        accessory = self.accessories.get(identity)
        if accessory is None:
            accessory = DeviceAccessory(identity, self.store, self.client, self.info)
            self.accessories[identity] = accessory
        return accessory
