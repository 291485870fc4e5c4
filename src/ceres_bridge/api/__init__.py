"""
API module for accessory control and monitoring
"""

from .main_api import BridgeAPI
from .accessory_routes import create_accessory_routes
from .system_routes import create_system_routes

__all__ = ['BridgeAPI', 'create_accessory_routes', 'create_system_routes']
