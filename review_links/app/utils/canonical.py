"""
Canonical serialization of the invitation payload.

The bytes produced here are the exact encryption plaintext. The review
platform parses them as JSON, so the layout follows a compact
``JSON.stringify`` rendering:

- no whitespace between tokens
- non-ASCII characters emitted as UTF-8, not ``\\uXXXX`` escapes
- keys in model declaration order (NOT sorted)
- unset optional fields omitted entirely
"""

import json

from review_links.app.schemas.payload import CanonicalPayload


def canonicalize_payload(payload: CanonicalPayload) -> bytes:
    """Serialize a payload to its canonical UTF-8 JSON bytes."""
    return json.dumps(
        payload.model_dump(exclude_none=True),
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")
