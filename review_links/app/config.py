"""
Key configuration and environment settings.

KeyConfiguration is the read-only input the link encoder consumes. It
never reads the environment itself. LinkSettings is the process-level
loader used by the command-line entry point; library callers are free to
build a KeyConfiguration from any secret store.

Environment variables (prefix ``TRUSTPILOT_``, all optional):
    TRUSTPILOT_ENCRYPTION_KEY       base64 AES-256 key
    TRUSTPILOT_AUTHENTICATION_KEY   base64 HMAC-SHA256 key
    TRUSTPILOT_DOMAIN               review platform host
    TRUSTPILOT_ACCOUNT_ID           business account identifier
    TRUSTPILOT_LOG_LEVEL            DEBUG | INFO | WARNING | ERROR
"""

from functools import lru_cache
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DOMAIN = "www.trustpilot.de"

# Placeholder used by the platform documentation. Operators must
# configure their own account identifier.
PLACEHOLDER_ACCOUNT_ID = "<youraccountname>"


# -------------------------------------------------------------------------
# Reusable Type Aliases
# -------------------------------------------------------------------------

SensitiveKey = Annotated[
    SecretStr,
    Field(description="Base64-encoded key, redacted from logs and repr"),
]

# Rendered into the link path unescaped, so URL delimiters
# (/ ? # & =) are never allowed.
AccountID = Annotated[
    str,
    Field(
        pattern=r"^(?:<youraccountname>|[A-Za-z0-9][A-Za-z0-9._-]{0,127})$",
        description=(
            "Business account identifier used in the link path; "
            "strict validation to prevent path and query injection"
        ),
    ),
]


# -------------------------------------------------------------------------
# Encoder input
# -------------------------------------------------------------------------

class KeyConfiguration(BaseModel):
    """
    Symmetric key material and link target for the encoder.

    Key presence is checked by the encoder, not here, so that an empty
    key surfaces as ConfigurationError at generation time.
    """

    encryption_key: SensitiveKey
    authentication_key: SensitiveKey
    domain: Optional[str] = None
    account_id: AccountID = PLACEHOLDER_ACCOUNT_ID

    model_config = ConfigDict(frozen=True)

    @property
    def resolved_domain(self) -> str:
        return self.domain or DEFAULT_DOMAIN

    @property
    def is_placeholder_account(self) -> bool:
        return self.account_id == PLACEHOLDER_ACCOUNT_ID


# -------------------------------------------------------------------------
# Settings Model
# -------------------------------------------------------------------------

class LinkSettings(BaseSettings):
    """
    Link generation settings parsed from the environment.
    """

    encryption_key: SensitiveKey = SecretStr("")
    authentication_key: SensitiveKey = SecretStr("")

    domain: Annotated[
        Optional[str],
        Field(
            default=None,
            description=f"Review platform host, defaults to {DEFAULT_DOMAIN}",
        ),
    ]

    account_id: AccountID = PLACEHOLDER_ACCOUNT_ID

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TRUSTPILOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    def to_key_configuration(self) -> KeyConfiguration:
        return KeyConfiguration(
            encryption_key=self.encryption_key,
            authentication_key=self.authentication_key,
            domain=self.domain,
            account_id=self.account_id,
        )


# -------------------------------------------------------------------------
# Settings Provider
# -------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings() -> LinkSettings:
    """
    Process-wide settings singleton.

    Tests that change the environment must call ``get_settings.cache_clear()``.
    """
    return LinkSettings()
