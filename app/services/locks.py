"""
Per-event locks serializing the booking check-then-insert sequence
"""

import threading
from contextlib import contextmanager
from typing import Dict


class EventLockRegistry:
    """Hands out one lock per event id.

    Locks only cover this process; the booking workflow also takes a row
    lock on the event so several workers against a row-locking database
    stay serialized.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def _lock_for(self, event_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(event_id)
            if lock is None:
                lock = self._locks[event_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, event_id: int):
        lock = self._lock_for(event_id)
        with lock:
            yield

    def discard(self, event_id: int) -> None:
        """Forget the lock of a deleted event"""
        with self._guard:
            self._locks.pop(event_id, None)


event_locks = EventLockRegistry()
