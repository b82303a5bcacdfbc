from __future__ import annotations

from typing import Any, Dict, Optional
from enum import Enum
from datetime import datetime, timezone
from uuid import uuid4, UUID

from pydantic import BaseModel, Field, ConfigDict


# ----------------------------------------------------------------------
# Event Types
# ----------------------------------------------------------------------
class LinkEventType(str, Enum):
    """
    Outcome events emitted by the link encoder.

    Exactly one event is emitted per encode call.
    """

    LINK_GENERATED = "link_generated"
    LINK_GENERATION_FAILED = "link_generation_failed"


# ----------------------------------------------------------------------
# Event Model
# ----------------------------------------------------------------------
class LinkEvent(BaseModel):
    """
    An immutable diagnostic observation of one link generation attempt.

    Details carry identifiers only (order reference, email, failure
    reason). Key material and plaintext are never attached.
    """

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    event_type: LinkEventType
    message: str

    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    @property
    def is_failure(self) -> bool:
        return self.event_type == LinkEventType.LINK_GENERATION_FAILED
