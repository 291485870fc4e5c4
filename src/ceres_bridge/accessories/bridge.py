"""
Boundary to the host accessory framework
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict

from ..records.models import DeviceRecord

logger = logging.getLogger(__name__)

class AccessoryBridge(ABC):
    """Receives created/updated records so the host can persist them"""

    @abstractmethod
    def register_new_accessory(self, record: DeviceRecord) -> None:
        ...

    @abstractmethod
    def update_accessory(self, record: DeviceRecord) -> None:
        ...


class InMemoryAccessoryBridge(AccessoryBridge):
    """Standalone host: keeps the latest copy of each record"""

    def __init__(self):
        self.accessories: Dict[str, DeviceRecord] = {}
        self.registrations = 0
        self.updates = 0

    def register_new_accessory(self, record: DeviceRecord) -> None:
        logger.info(f"Registering new accessory {record.name} ({record.identity})")
        self.accessories[record.identity] = record
        self.registrations += 1

    def update_accessory(self, record: DeviceRecord) -> None:
        logger.debug(f"Updating accessory {record.name} ({record.identity})")
        self.accessories[record.identity] = record
        self.updates += 1
