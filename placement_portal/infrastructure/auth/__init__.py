"""Session credential handling."""

from placement_portal.infrastructure.auth.jwt import InvalidToken, decode_expiry, is_token_expired
from placement_portal.infrastructure.auth.session import (
    TOKEN_KEY,
    USER_KEY,
    CredentialStore,
    SessionCredential,
)

__all__ = [
    "CredentialStore",
    "InvalidToken",
    "SessionCredential",
    "TOKEN_KEY",
    "USER_KEY",
    "decode_expiry",
    "is_token_expired",
]
