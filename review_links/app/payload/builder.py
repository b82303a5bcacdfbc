"""
Payload builder.

Validates a raw customer/order record and normalizes it into a
CanonicalPayload. Pure functions: no I/O, no logging, no shared state.
"""

from typing import Any, Dict, Mapping

from pydantic import ValidationError as SchemaValidationError

from review_links.app.errors import ValidationError
from review_links.app.schemas.payload import CanonicalPayload

# Checked and reported in this order.
REQUIRED_FIELDS = ("email", "name", "ref")
OPTIONAL_FIELDS = ("sku", "tags")


def validate_payload(data: Mapping[str, Any]) -> None:
    """
    Ensure every required field is present and non-empty.

    All missing fields are reported together, in ``REQUIRED_FIELDS``
    order, e.g. ``"Missing required fields: email, name"``.

    Raises:
        ValidationError: If one or more required fields are missing.
    """
    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]

    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}"
        )


def build_payload(data: Mapping[str, Any]) -> CanonicalPayload:
    """
    Construct a CanonicalPayload from raw input.

    Required fields are copied verbatim. ``sku`` and ``tags`` are kept
    only when they are non-empty lists or tuples; unordered
    collections are rejected. Any other input keys are dropped.

    Raises:
        ValidationError: If required fields are missing or a field has
            the wrong type.
    """
    validate_payload(data)

    fields: Dict[str, Any] = {field: data[field] for field in REQUIRED_FIELDS}

    for field in OPTIONAL_FIELDS:
        value = data.get(field)
        if not value:
            continue
        if not isinstance(value, (list, tuple)):
            raise ValidationError(
                f"Field '{field}' must be a list of strings"
            )
        fields[field] = list(value)

    try:
        return CanonicalPayload.model_validate(fields)
    except SchemaValidationError as exc:
        raise ValidationError(f"Invalid payload: {exc}") from exc
