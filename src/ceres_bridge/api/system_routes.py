"""
System health and discovery API routes
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List
from datetime import datetime, timezone
import logging

from ..discovery.models import DiscoveryEvent

logger = logging.getLogger(__name__)

class HealthResponse(BaseModel):
    status: str
    accessories: int
    reconciliations_in_flight: int
    discovery_enabled: bool
    service_type: str
    timestamp: datetime

class ReconcileRequest(BaseModel):
    name: str
    addresses: List[str] = []

class ReconcileResponse(BaseModel):
    name: str
    outcome: str

def create_system_routes(engine, config):
    """Create system monitoring and manual discovery routes"""
    router = APIRouter(prefix="/api", tags=["system"])

    @router.get("/system/health", response_model=HealthResponse)
    async def get_health():
        """Bridge health and counters"""
        return HealthResponse(
            status="healthy",
            accessories=len(engine.store),
            reconciliations_in_flight=len(engine.guard),
            discovery_enabled=config['discovery']['enabled'],
            service_type=config['discovery']['service_type'],
            timestamp=datetime.now(timezone.utc)
        )

    @router.post("/discovery/reconcile", response_model=ReconcileResponse)
    async def reconcile(request: ReconcileRequest):
        """Feed a discovery event by hand (same duplicate rules as mDNS)"""
        logger.info(f"Manual discovery event for {request.name}")
        outcome = await engine.handle_event(DiscoveryEvent(name=request.name, addresses=request.addresses))
        return ReconcileResponse(name=request.name, outcome=outcome.value)

    return router
