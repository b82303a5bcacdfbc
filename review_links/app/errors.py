"""
Error taxonomy for review invitation link generation.

Every failure raised by the payload builder or the link encoder is one of
the types below. Errors are constructed where they are detected and are
never retried or downgraded by this package; callers decide whether to
skip, retry or abort a batch.
"""


class LinkGenerationError(Exception):
    """Base class for all link generation failures."""


class ValidationError(LinkGenerationError):
    """Raised when required payload fields are missing or malformed."""


class ConfigurationError(LinkGenerationError):
    """Raised when key material is missing, empty or cannot be decoded."""


class CryptographicError(LinkGenerationError):
    """Raised when encryption or MAC computation fails."""
