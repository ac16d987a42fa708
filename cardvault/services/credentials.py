"""
Credential service.

Password hashing (bcrypt through passlib) and signed session tokens
(HS256 JWTs through python-jose).

Token validation never raises for client-supplied input: anything that is
not a well-formed, correctly signed, unexpired token carrying a subject
comes back as the INVALID sentinel.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Final

from jose import JWTError, jwt
from passlib.context import CryptContext

from cardvault.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class _Invalid:
    """Sentinel type returned by validate_token on any verification failure."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "INVALID"

    def __bool__(self) -> bool:
        return False


INVALID: Final = _Invalid()


def hash_password(password: str) -> str:
    """Salted one-way hash; repeated calls on the same input differ."""
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """True iff `password` hashes to `hashed_password` under its embedded salt."""
    try:
        return pwd_context.verify(password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised or corrupt stored hash
        logger.warning("Stored password hash could not be parsed")
        return False


def issue_token(claims: dict[str, Any], now: datetime | None = None) -> str:
    """
    Sign a token embedding `claims`.

    `claims` must carry the username as `sub`. The token expires
    `settings.token_expire_days` after issuance.
    """
    if not claims.get("sub"):
        raise ValueError("Token claims must include a 'sub' (username)")

    issued_at = now or datetime.now(timezone.utc)
    to_encode = dict(claims)
    to_encode.update(
        {
            "iat": issued_at,
            "exp": issued_at + timedelta(days=settings.token_expire_days),
        }
    )
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def validate_token(token: Any) -> dict[str, Any] | _Invalid:
    """
    Verify signature and expiry.

    Returns the embedded claims, or INVALID for malformed, expired or
    tampered tokens and tokens without a subject.
    """
    if not isinstance(token, str) or not token:
        return INVALID

    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug("Rejected session token: %s", e)
        return INVALID

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        return INVALID
    return claims


def token_subject(token: Any) -> str | None:
    """Username carried by a valid token, else None."""
    claims = validate_token(token)
    if claims is INVALID:
        return None
    return claims["sub"]
