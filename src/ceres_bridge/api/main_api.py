"""
Main FastAPI application setup
"""

from fastapi import FastAPI
from typing import Dict
import logging

from .. import __version__
from .accessory_routes import create_accessory_routes
from .system_routes import create_system_routes

logger = logging.getLogger(__name__)

class BridgeAPI:
    """Local HTTP control surface for discovered accessories"""

    def __init__(self, engine, config: Dict):
        self.engine = engine
        self.config = config
        self.app = FastAPI(
            title="Ceres Climate Bridge",
            description="Local API exposing discovered ceres-http devices as accessories",
            version=__version__
        )
        self._setup_routes()

    def _setup_routes(self):
        """Setup FastAPI routes using modular approach"""
        self.app.include_router(create_accessory_routes(self.engine))
        self.app.include_router(create_system_routes(self.engine, self.config))
