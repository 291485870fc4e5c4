"""
Discovery module: in-flight guard, reconciliation engine and mDNS browser
"""

from .guard import InFlightGuard
from .manager import ReconciliationEngine, select_address
from .models import DiscoveryEvent, ReconcileOutcome

__all__ = ['InFlightGuard', 'ReconciliationEngine', 'select_address', 'DiscoveryEvent', 'ReconcileOutcome']
