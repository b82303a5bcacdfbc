"""
Review invitation link encoder.

Turns a CanonicalPayload into a business-generated review link:

    https://{domain}/evaluate-bgl/embed/{account_id}?p={sealed payload}

where the sealed payload is ``IV || ciphertext || HMAC tag``,
base64-encoded and then percent-encoded as a single query value.

Every call emits exactly one diagnostic event: LINK_GENERATED on
success, LINK_GENERATION_FAILED on any failure. Failures are re-raised
unchanged after the event is emitted.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

from review_links.app.config import KeyConfiguration
from review_links.app.crypto import sealing
from review_links.app.crypto.sealing import SealedMessage
from review_links.app.errors import ConfigurationError
from review_links.app.events import (
    LinkEvent,
    LinkEventEmitter,
    LinkEventType,
    LoggingEventEmitter,
)
from review_links.app.payload.builder import build_payload
from review_links.app.schemas.payload import CanonicalPayload
from review_links.app.utils.canonical import canonicalize_payload

logger = logging.getLogger(__name__)

LINK_TEMPLATE = "https://{domain}/evaluate-bgl/embed/{account_id}?p={payload}"


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------


def render_link(domain: str, account_id: str, sealed: SealedMessage) -> str:
    """
    Render the final URL for a sealed payload.

    ``safe=""`` escapes ``+``, ``/`` and ``=`` exactly as
    ``encodeURIComponent`` does for the base64 alphabet.
    """
    return LINK_TEMPLATE.format(
        domain=domain,
        account_id=account_id,
        payload=quote(sealed.to_base64(), safe=""),
    )


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def encode(
    payload: CanonicalPayload,
    config: KeyConfiguration,
    *,
    emitter: Optional[LinkEventEmitter] = None,
) -> str:
    """
    Encrypt, authenticate and render ``payload`` as a review link.

    Key presence is checked before any randomness is drawn or any cipher
    is constructed.

    Raises:
        ConfigurationError: If a key is missing, empty or not base64.
        CryptographicError: If encryption or MAC computation fails.
    """
    emitter = emitter or LoggingEventEmitter(logger)

    try:
        encryption_key = config.encryption_key.get_secret_value()
        authentication_key = config.authentication_key.get_secret_value()

        if not encryption_key or not authentication_key:
            raise ConfigurationError(
                "Missing required Trustpilot configuration keys"
            )

        enc_key = sealing.decode_key("encryption_key", encryption_key)
        auth_key = sealing.decode_key("authentication_key", authentication_key)

        sealed = sealing.seal(canonicalize_payload(payload), enc_key, auth_key)

        link = render_link(config.resolved_domain, config.account_id, sealed)

    except Exception as exc:
        emitter.emit(
            LinkEvent(
                event_type=LinkEventType.LINK_GENERATION_FAILED,
                message="Failed to generate Trustpilot link",
                details={"error": str(exc), "ref": payload.ref},
            )
        )
        raise

    emitter.emit(
        LinkEvent(
            event_type=LinkEventType.LINK_GENERATED,
            message="Generated Trustpilot link",
            details={"ref": payload.ref, "email": payload.email},
        )
    )
    return link


def generate_review_link(
    record: Mapping[str, Any],
    config: KeyConfiguration,
    *,
    emitter: Optional[LinkEventEmitter] = None,
) -> str:
    """
    Build a payload from a raw record and encode it in one step.

    Builder failures propagate without an event; the builder has no sink.
    """
    return encode(build_payload(record), config, emitter=emitter)
