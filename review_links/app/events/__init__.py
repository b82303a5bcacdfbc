from .models import LinkEvent, LinkEventType
from .emitter import LinkEventEmitter, LoggingEventEmitter, NullEventEmitter
from .memory_emitter import MemoryEventEmitter

__all__ = [
    "LinkEvent",
    "LinkEventType",
    "LinkEventEmitter",
    "LoggingEventEmitter",
    "NullEventEmitter",
    "MemoryEventEmitter",
]
