import base64
import hashlib
import hmac
import json
from urllib.parse import unquote

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from review_links.app.config import KeyConfiguration
from review_links.app.crypto.sealing import IV_SIZE, TAG_SIZE, SealedMessage


ENCRYPTION_KEY = "StwbunBzOTc3yRKdrWLQUTWcXY632jmcuHZMPtncdZI="
AUTHENTICATION_KEY = "Yj2w5XlhA2Z0HztUzMUovuc8Awauxa2Obkwh/9DeFm8="

VALID_RECORD = {
    "email": "test@example.com",
    "name": "Test User",
    "ref": "ORDER123",
    "sku": ["SKU1"],
    "tags": ["tag1"],
}


def make_config(**overrides) -> KeyConfiguration:
    values = {
        "encryption_key": ENCRYPTION_KEY,
        "authentication_key": AUTHENTICATION_KEY,
    }
    values.update(overrides)
    return KeyConfiguration(**values)


def split_sealed(blob: bytes) -> SealedMessage:
    """
    Split a raw blob into its IV, ciphertext and tag regions.

    Structural only: the tag is not verified and nothing is decrypted.
    """
    assert len(blob) >= IV_SIZE + TAG_SIZE, f"blob too short: {len(blob)} bytes"

    ciphertext = blob[IV_SIZE:-TAG_SIZE]
    assert len(ciphertext) % 16 == 0, "ciphertext is not block aligned"

    return SealedMessage(
        iv=blob[:IV_SIZE],
        ciphertext=ciphertext,
        tag=blob[-TAG_SIZE:],
    )


def sealed_from_link(link: str) -> SealedMessage:
    """
    Recover the sealed message carried in a link's ``p`` parameter.
    """
    encoded = link.split("?p=", 1)[1]
    blob = base64.b64decode(unquote(encoded), validate=True)
    return split_sealed(blob)


def expected_tag(sealed: SealedMessage) -> bytes:
    """
    Independent HMAC-SHA256 over ``IV || ciphertext``, as the platform
    computes it on receipt.
    """
    return hmac.new(
        base64.b64decode(AUTHENTICATION_KEY),
        sealed.iv + sealed.ciphertext,
        hashlib.sha256,
    ).digest()


def open_sealed(sealed: SealedMessage) -> dict:
    """
    Decrypt a sealed message the way the receiving side does.

    Test-only: this package never decrypts.
    """
    decryptor = Cipher(
        algorithms.AES(base64.b64decode(ENCRYPTION_KEY)),
        modes.CBC(sealed.iv),
    ).decryptor()
    padded = decryptor.update(sealed.ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(128).unpadder()
    plaintext = unpadder.update(padded) + unpadder.finalize()
    return json.loads(plaintext)
