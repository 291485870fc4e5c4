# HTTP Helper for device connections
# Local ceres-http devices only speak plain HTTP on port 80

import aiohttp
import logging

logger = logging.getLogger(__name__)

def create_device_session(timeout_seconds: float = 5) -> aiohttp.ClientSession:
    """
    Create properly configured aiohttp session for local device connections (always HTTP)
    Prevents connection leaks with proper cleanup and limits
    """
    connector = aiohttp.TCPConnector(
        limit_per_host=2,           # ESP8266 firmware handles very few sockets
        ssl=False,                  # Devices use HTTP only
        force_close=True,           # Force connection cleanup
        enable_cleanup_closed=True
    )

    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=timeout_seconds)
    )
