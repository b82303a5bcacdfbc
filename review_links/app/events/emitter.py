from __future__ import annotations

import logging
from typing import Protocol

from review_links.app.events.models import LinkEvent

logger = logging.getLogger("review_links.events")


class LinkEventEmitter(Protocol):
    """
    Diagnostic sink for link generation outcomes.

    Injected into the encoder rather than held globally. Implementations
    shared between threads must be safe for concurrent writers.
    """

    def emit(self, event: LinkEvent) -> None:
        ...


class NullEventEmitter:
    """
    A safe no-op emitter.

    Used by callers and tests that do not care about diagnostics.
    """

    def emit(self, event: LinkEvent) -> None:
        return


class LoggingEventEmitter:
    """
    Default emitter: writes events to the standard logging tree.

    Successes go to INFO, failures to ERROR. Event details are attached
    as structured ``extra`` fields.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def emit(self, event: LinkEvent) -> None:
        details = dict(event.details or {})
        extra = {
            "event_type": event.event_type.value,
            "event_id": str(event.event_id),
            "details": details,
        }

        if event.is_failure:
            self._logger.error("%s %s", event.message, details, extra=extra)
        else:
            self._logger.info("%s %s", event.message, details, extra=extra)
