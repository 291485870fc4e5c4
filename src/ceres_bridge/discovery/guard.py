"""
In-flight guard: at most one reconciliation per identity at a time
"""

import threading
from typing import Set

class InFlightGuard:
    """
    try_enter() returns True for exactly one caller per identity until
    leave() is called. State is transient and starts empty on every run.
    """

    def __init__(self):
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    def try_enter(self, identity: str) -> bool:
        with self._lock:
            if identity in self._in_flight:
                return False
            self._in_flight.add(identity)
            return True

    def leave(self, identity: str) -> None:
        """Release the guard; a no-op if it was never entered"""
        with self._lock:
            self._in_flight.discard(identity)

    def is_in_flight(self, identity: str) -> bool:
        with self._lock:
            return identity in self._in_flight

    def __len__(self) -> int:
        with self._lock:
            return len(self._in_flight)
