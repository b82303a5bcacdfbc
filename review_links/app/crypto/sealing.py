"""
Authenticated encryption for invitation payloads (encrypt-then-MAC).

Wire layout, reproduced bit-for-bit for the review platform:

    IV (16 bytes) || AES-256-CBC ciphertext (PKCS#7 padded) || HMAC-SHA256 tag (32 bytes)

The tag covers ``IV || ciphertext`` so that neither the IV nor the
ciphertext can be substituted without detection.

IMPORTANT DESIGN RULE:
- Canonicalization MUST occur outside this module.
- This module encrypts bytes, and bytes only.
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from review_links.app.errors import ConfigurationError, CryptographicError

IV_SIZE = 16
TAG_SIZE = 32
ENCRYPTION_KEY_SIZE = 32


@dataclass(frozen=True)
class SealedMessage:
    """
    Encrypted and authenticated payload.

    Constructed once per link and never mutated.
    """

    iv: bytes
    ciphertext: bytes
    tag: bytes

    def to_bytes(self) -> bytes:
        return self.iv + self.ciphertext + self.tag

    def to_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")


# ------------------------------------------------------------------
# Key material
# ------------------------------------------------------------------


def decode_key(name: str, value: str) -> bytes:
    """
    Decode a base64-encoded key.

    Keys must be padded standard base64 (RFC 4648 section 4). Unpadded
    and base64url values are rejected. Error messages name the key,
    never its value.

    Raises:
        ConfigurationError: If the value is empty, is not valid base64,
            or decodes to zero bytes.
    """
    if not value:
        raise ConfigurationError(f"Missing required key: {name}")

    try:
        key = base64.b64decode(value.strip(), validate=True)
    except ValueError as exc:
        # binascii.Error, or non-ASCII characters in the input
        raise ConfigurationError(
            f"Key '{name}' is not valid base64"
        ) from exc

    if not key:
        raise ConfigurationError(f"Key '{name}' decodes to an empty value")

    return key


def generate_iv() -> bytes:
    """Return a fresh random IV from the OS CSPRNG."""
    return os.urandom(IV_SIZE)


# ------------------------------------------------------------------
# Encrypt-then-MAC
# ------------------------------------------------------------------


def seal(
    plaintext: bytes,
    encryption_key: bytes,
    authentication_key: bytes,
    *,
    iv: Optional[bytes] = None,
) -> SealedMessage:
    """
    Encrypt ``plaintext`` with AES-256-CBC and authenticate it with
    HMAC-SHA256.

    A random IV is drawn per call unless one is supplied.

    Raises:
        CryptographicError: If the encryption key is not 32 bytes, the
            IV is not 16 bytes, or the crypto backend rejects the input.
    """
    if len(encryption_key) != ENCRYPTION_KEY_SIZE:
        raise CryptographicError(
            f"Encryption key must be {ENCRYPTION_KEY_SIZE} bytes, "
            f"got {len(encryption_key)}"
        )

    if iv is None:
        iv = generate_iv()
    elif len(iv) != IV_SIZE:
        raise CryptographicError(
            f"IV must be {IV_SIZE} bytes, got {len(iv)}"
        )

    try:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(
            algorithms.AES(encryption_key),
            modes.CBC(iv),
        ).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        mac = hmac.HMAC(authentication_key, hashes.SHA256())
        mac.update(iv + ciphertext)
        tag = mac.finalize()
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CryptographicError(f"Payload encryption failed: {exc}") from exc

    return SealedMessage(iv=iv, ciphertext=ciphertext, tag=tag)
