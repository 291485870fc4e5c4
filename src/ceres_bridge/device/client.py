"""
HTTP client for a single ceres-http device
"""

import asyncio
import ipaddress
import json
import logging
from typing import Any, Callable, Dict, Optional

import aiohttp
from pydantic import ValidationError

from ..exceptions import DeviceUnreachableError, MalformedResponseError
from ..http_helper import create_device_session
from .metrics import parse_metric
from .models import AcStatus, DeviceStatus, ControlCommand, encode_control

logger = logging.getLogger(__name__)

def device_url(address: str, path: str) -> str:
    """URL for a device path; IPv6 literals need brackets"""
    try:
        if ipaddress.ip_address(address).version == 6:
            return f"http://[{address}]{path}"
    except ValueError:
        pass
    return f"http://{address}{path}"

class DeviceClient:
    """
    Stateless request/response wrapper around the device HTTP API.
    The address is passed on every call so one client serves all devices.
    """

    def __init__(self, request_timeout: float = 5,
                 session_factory: Callable[[float], aiohttp.ClientSession] = create_device_session):
        self.request_timeout = request_timeout
        self._session_factory = session_factory

    async def fetch_status(self, address: str) -> DeviceStatus:
        """GET / - status including the feature map"""
        payload = await self._get_json(address, "/")
        return self._validate(address, DeviceStatus, payload)

    async def fetch_ac_status(self, address: str) -> AcStatus:
        """GET /ac/status - on/mode/temp/swing"""
        payload = await self._get_json(address, "/ac/status")
        return self._validate(address, AcStatus, payload)

    async def fetch_metrics(self, address: str) -> str:
        """GET /metrics - raw plaintext metrics"""
        return await self._get_text(address, "/metrics")

    async def read_metric(self, address: str, name: str) -> float:
        """Fetch metrics and extract one named value"""
        text = await self.fetch_metrics(address)
        try:
            return parse_metric(text, name)
        except ValueError as e:
            raise MalformedResponseError(address, str(e)) from e

    async def send_control(self, address: str, command: ControlCommand) -> None:
        """GET /ac/control with exactly one variable=value parameter"""
        params = encode_control(command)
        logger.debug(f"Set {command.variable.value} to {command.value} on {address}")
        await self._get_text(address, "/ac/control", params=params)

    # ================== TRANSPORT ==================

    async def _get_text(self, address: str, path: str, params: Optional[Dict[str, str]] = None) -> str:
        url = device_url(address, path)
        try:
            async with self._session_factory(self.request_timeout) as session:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        raise DeviceUnreachableError(address, f"HTTP {response.status} for {path}")
                    try:
                        return await response.text()
                    except UnicodeDecodeError as e:
                        raise MalformedResponseError(address, f"Undecodable body from {path}: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.debug(f"HTTP GET failed for {url}: {e}")
            raise DeviceUnreachableError(address, f"Cannot reach {path}: {e}") from e

    async def _get_json(self, address: str, path: str) -> Any:
        body = await self._get_text(address, path)
        try:
            return json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(address, f"Invalid JSON from {path}: {e}") from e

    @staticmethod
    def _validate(address: str, model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(address, f"Unexpected {model.__name__} payload: {e}") from e
