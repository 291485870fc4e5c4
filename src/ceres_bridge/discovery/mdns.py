"""
mDNS browser for ceres-http services (zeroconf)
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from zeroconf import IPVersion, ServiceStateChange, Zeroconf
from zeroconf.asyncio import AsyncServiceBrowser, AsyncServiceInfo, AsyncZeroconf

from .models import DiscoveryEvent

logger = logging.getLogger(__name__)

EventCallback = Callable[[DiscoveryEvent], Awaitable[object]]

def instance_name(name: str, service_type: str) -> str:
    """'device-1._ceres-http._tcp.local.' -> 'device-1'"""
    suffix = "." + service_type
    if name.endswith(suffix):
        return name[:-len(suffix)]
    return name.rstrip(".")

class MdnsBrowser:
    """Browses one service type and forwards every Added/Updated announcement"""

    def __init__(self, service_type: str, on_event: EventCallback, resolve_timeout_ms: int = 3000):
        self.service_type = service_type
        self.on_event = on_event
        self.resolve_timeout_ms = resolve_timeout_ms
        self._aiozc: Optional[AsyncZeroconf] = None
        self._browser: Optional[AsyncServiceBrowser] = None
        self._tasks: Set[asyncio.Task] = set()

    async def start(self) -> None:
        logger.info(f"Starting mDNS browser for {self.service_type}")
        self._aiozc = AsyncZeroconf(ip_version=IPVersion.All)
        self._browser = AsyncServiceBrowser(
            self._aiozc.zeroconf,
            [self.service_type],
            handlers=[self._on_service_state_change]
        )

    async def stop(self) -> None:
        if self._browser:
            await self._browser.async_cancel()
            self._browser = None
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        if self._aiozc:
            await self._aiozc.async_close()
            self._aiozc = None
        logger.info("mDNS browser stopped")

    def _on_service_state_change(self, zeroconf: Zeroconf, service_type: str, name: str,
                                 state_change: ServiceStateChange) -> None:
        if state_change not in (ServiceStateChange.Added, ServiceStateChange.Updated):
            logger.debug(f"mDNS service {state_change.name.lower()}: {name}")
            return
        task = asyncio.ensure_future(self._resolve(zeroconf, service_type, name))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _resolve(self, zeroconf: Zeroconf, service_type: str, name: str) -> None:
        info = AsyncServiceInfo(service_type, name)
        addresses = []
        host = ""
        try:
            if await info.async_request(zeroconf, self.resolve_timeout_ms):
                # IPv4 first, devices rarely answer on IPv6
                addresses = info.parsed_addresses(IPVersion.V4Only) + info.parsed_addresses(IPVersion.V6Only)
                host = (info.server or "").rstrip(".")
            else:
                logger.warning(f"Could not resolve {name} within {self.resolve_timeout_ms}ms")
        except Exception as e:
            logger.warning(f"Error resolving {name}: {e}")

        event = DiscoveryEvent(name=instance_name(name, service_type), host=host, addresses=addresses)
        try:
            await self.on_event(event)
        except Exception as e:
            logger.error(f"Discovery handler failed for {event.name}: {e}")
