"""Bearer token issuance and verification.

Tokens are JWTs signed with a symmetric key (HS256 by default). Each token
asserts the account username as ``sub`` together with the configured issuer
and audience, and expires ``ACCESS_TOKEN_EXPIRE_MINUTES`` after issuance.
There is no refresh or revocation: a token stays valid until it expires.

Verification is a pure function of the token and the current time, which
keeps expiry behaviour testable without sleeping.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

import jwt

from ..config.settings import Settings, get_settings


class TokenValidationError(Exception):
    """Raised when a token is malformed, tampered with, expired or mis-addressed."""

    pass


def create_access_token(
    subject: str,
    now: Optional[datetime] = None,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Create a signed access token for ``subject``.

    Args:
        subject: Value for the ``sub`` claim (the account username).
        now: Issuance instant, defaults to the current UTC time.
        expires_delta: Token lifetime, defaults to
            ``settings.ACCESS_TOKEN_EXPIRE_MINUTES``.
        settings: Settings holding the key, issuer and audience.

    Returns:
        The encoded token string.
    """
    settings = settings or get_settings()
    issued_at = now or datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims: Dict[str, Any] = {
        "sub": subject,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + lifetime).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(
    token: str,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Verify ``token`` and return its subject.

    The signature, issuer, audience and expiry are all checked. Expiry is
    evaluated against ``now`` (default: current UTC time) instead of the
    library clock; a token is rejected from its ``exp`` instant onward.

    Raises:
        TokenValidationError: If any check fails or ``sub`` is missing.
    """
    settings = settings or get_settings()
    current = now or datetime.now(UTC)

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"require": ["exp", "iss", "aud", "sub"], "verify_exp": False},
        )
    except jwt.InvalidTokenError as e:
        raise TokenValidationError(str(e)) from e

    if int(payload["exp"]) <= int(current.timestamp()):
        raise TokenValidationError("Signature has expired")

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise TokenValidationError("Token subject is missing")

    return subject
