"""
Discovery data structures
"""

from enum import Enum
from typing import List
from dataclasses import dataclass, field

@dataclass(frozen=True)
class DiscoveryEvent:
    """One service announcement from the discovery transport"""
    name: str
    host: str = ""
    addresses: List[str] = field(default_factory=list)

class ReconcileOutcome(Enum):
    CREATED = "created"
    UPDATED = "updated"
    DUPLICATE_IN_FLIGHT = "duplicate_in_flight"
    UNREACHABLE = "unreachable"
    MALFORMED = "malformed"
    FAILED = "failed"
