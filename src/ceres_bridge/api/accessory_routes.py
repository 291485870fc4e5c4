"""
Accessory API routes: record listing and live characteristic get/set
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List, Optional
import logging

from ..accessories.services import Capability, PresentationService
from ..exceptions import CharacteristicError, UnknownCharacteristicError

logger = logging.getLogger(__name__)

# Response models
class AccessorySummary(BaseModel):
    identity: str
    name: str
    address: str
    capabilities: List[str]
    services: List[str]

class AccessoryDetail(AccessorySummary):
    status: Optional[Dict[str, Any]] = None
    last_seen: Optional[str] = None
    manufacturer: str
    model: str
    serial_number: str

class CharacteristicValue(BaseModel):
    value: Any


def _summary_fields(record) -> Dict[str, Any]:
    return {
        "identity": record.identity,
        "name": record.name,
        "address": record.address,
        "capabilities": [flag.name.lower() for flag in (Capability.TEMPERATURE, Capability.HUMIDITY, Capability.AC)
                         if flag in record.capabilities],
        "services": sorted(service.value for service in record.services),
    }


def create_accessory_routes(engine):
    """Create accessory routes"""
    router = APIRouter(prefix="/api", tags=["accessories"])

    def _get_record(identity: str):
        record = engine.store.find(identity)
        if record is None:
            raise HTTPException(status_code=404, detail="Accessory not found")
        return record

    def _get_service(identity: str, service: str):
        _get_record(identity)
        accessory = engine.accessories.get(identity)
        try:
            service_type = PresentationService(service)
            if accessory is None:
                raise UnknownCharacteristicError(f"{identity} has no services")
            return accessory.get_service(service_type)
        except (ValueError, UnknownCharacteristicError) as e:
            raise HTTPException(status_code=404, detail=str(e))

    @router.get("/accessories", response_model=List[AccessorySummary])
    async def list_accessories():
        """List all known accessories"""
        return [AccessorySummary(**_summary_fields(record)) for record in engine.store.all()]

    @router.get("/accessories/{identity}", response_model=AccessoryDetail)
    async def get_accessory(identity: str):
        """Record detail with the last cached status"""
        record = _get_record(identity)
        return AccessoryDetail(
            **_summary_fields(record),
            status=record.status.model_dump() if record.status else None,
            last_seen=record.last_seen.isoformat() if record.last_seen else None,
            manufacturer=engine.info.manufacturer,
            model=engine.info.model,
            serial_number=engine.info.serial_number
        )

    @router.get("/accessories/{identity}/{service}/{characteristic}", response_model=CharacteristicValue)
    async def get_characteristic(identity: str, service: str, characteristic: str):
        """Live read of one characteristic"""
        accessory_service = _get_service(identity, service)
        try:
            value = await accessory_service.get(characteristic)
        except UnknownCharacteristicError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except CharacteristicError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return CharacteristicValue(value=value)

    @router.put("/accessories/{identity}/{service}/{characteristic}", response_model=CharacteristicValue)
    async def set_characteristic(identity: str, service: str, characteristic: str, request: CharacteristicValue):
        """Live write of one characteristic"""
        accessory_service = _get_service(identity, service)
        try:
            await accessory_service.set(characteristic, request.value)
        except UnknownCharacteristicError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except (TypeError, ValueError) as e:
            raise HTTPException(status_code=422, detail=f"Invalid value for {characteristic}: {e}")
        except CharacteristicError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return CharacteristicValue(value=request.value)

    return router
