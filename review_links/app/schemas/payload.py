"""
Canonical invitation payload.

This is the record the review platform decrypts on its side. Field
declaration order is the serialization order and MUST remain stable:
required fields first, then ``sku``, then ``tags``.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CanonicalPayload(BaseModel):
    """
    Validated customer/order record sent to the review platform.

    Optional fields are either absent (``None``) or non-empty. They are
    never serialized as empty lists or nulls.
    """

    email: str
    name: str
    ref: str
    sku: Optional[List[str]] = None
    tags: Optional[List[str]] = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
