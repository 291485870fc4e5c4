"""
Bridge Server - Main orchestrator for discovery, reconciliation and the API
"""

import logging
from typing import List

import uvicorn

from ..accessories.accessory import AccessoryInformation
from ..accessories.bridge import AccessoryBridge, InMemoryAccessoryBridge
from ..api.main_api import BridgeAPI
from ..config_loader import load_config, setup_logging
from ..device.client import DeviceClient
from ..discovery.guard import InFlightGuard
from ..discovery.manager import ReconciliationEngine
from ..discovery.mdns import MdnsBrowser
from ..records.models import DeviceRecord, derive_identity
from ..records.store import RecordStore

logger = logging.getLogger(__name__)

class BridgeServer:
    """Main server wiring the discovery core to the host bridge and HTTP API"""

    def __init__(self, config_path: str = "config/config.yaml", bridge: AccessoryBridge = None):
        self.config = load_config(config_path)
        setup_logging(self.config)

        self.client = DeviceClient(self.config['device']['request_timeout'])
        self.store = RecordStore()
        self.guard = InFlightGuard()
        self.bridge = bridge or InMemoryAccessoryBridge()
        self.engine = ReconciliationEngine(
            self.client,
            self.store,
            self.guard,
            self.bridge,
            AccessoryInformation(**self.config['accessory_info'])
        )

        discovery = self.config['discovery']
        self.browser = MdnsBrowser(
            discovery['service_type'],
            self.engine.handle_event,
            discovery['resolve_timeout_ms']
        )
        self.api = BridgeAPI(self.engine, self.config)

        self.running = False

    async def start(self):
        """Restore known devices, start mDNS browsing, then serve the API"""
        logger.info("Starting Ceres climate bridge...")

        try:
            for record in self.known_device_records():
                self.engine.configure_accessory(record)

            if self.config['discovery']['enabled']:
                await self.browser.start()
            else:
                logger.info("mDNS discovery disabled - only known devices are reconciled")

            self.running = True
            await self._start_api_server()

        except Exception as e:
            logger.error(f"Server startup failed: {e}")
            await self.stop()
            raise

    async def stop(self):
        """Stop all services gracefully"""
        logger.info("Stopping server...")
        self.running = False
        await self.browser.stop()
        await self.engine.drain()
        logger.info("Server stopped")

    def known_device_records(self) -> List[DeviceRecord]:
        """Seed records for the devices listed in configuration"""
        records = []
        for device in self.config['known_devices']:
            records.append(DeviceRecord(
                identity=derive_identity(device['name']),
                name=device['name'],
                address=device['address']
            ))
        return records

    async def _start_api_server(self):
        """Start the FastAPI server"""
        config = uvicorn.Config(
            self.api.app,
            host=self.config['api']['host'],
            port=self.config['api']['port'],
            log_level="info",
            access_log=False  # We handle our own logging
        )

        server = uvicorn.Server(config)

        logger.info(f"Starting API server on {self.config['api']['host']}:{self.config['api']['port']}")
        logger.info(f"API documentation: http://localhost:{self.config['api']['port']}/docs")

        await server.serve()
