"""JWT inspection for the portal client.

The backend verifies signatures; the client only needs the expiry claim
to decide whether a stored token is still worth sending.
"""

from datetime import datetime, timezone
from typing import Optional

import jwt

from placement_portal.core.logging import logger


class InvalidToken(ValueError):
    """Raised when a token cannot be decoded at all."""


def decode_expiry(token: str) -> Optional[datetime]:
    """Decode the ``exp`` claim of a JWT without verifying its signature.

    Args:
        token: JWT token string (without "Bearer " prefix)

    Returns:
        Expiry as an aware UTC datetime, or None if the token has no ``exp`` claim

    Raises:
        InvalidToken: If the token is malformed or ``exp`` is not numeric
    """
    try:
        payload = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
            algorithms=["HS256", "RS256", "ES256"],
        )
    except jwt.InvalidTokenError as e:
        logger.debug("jwt_decode_failed", error=str(e))
        raise InvalidToken(str(e)) from e

    exp = payload.get("exp")
    if exp is None:
        return None
    try:
        return datetime.fromtimestamp(float(exp), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidToken(f"Invalid exp claim: {exp!r}") from e


def is_token_expired(token: str, now: Optional[datetime] = None) -> bool:
    """Check whether a token is past its expiry. Undecodable tokens count as expired."""
    try:
        expires_at = decode_expiry(token)
    except InvalidToken:
        return True
    if expires_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    return expires_at <= now
