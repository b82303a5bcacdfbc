from __future__ import annotations

import threading
from typing import List

from review_links.app.events.models import LinkEvent


class MemoryEventEmitter:
    """
    In-memory recording emitter.

    Properties:
    - safe for concurrent writers (one lock around the buffer)
    - preserves emission order per writer
    - never raises into the encoder
    """

    def __init__(self) -> None:
        self._events: List[LinkEvent] = []
        self._lock = threading.Lock()

    def emit(self, event: LinkEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[LinkEvent]:
        """Snapshot of the recorded events."""
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
