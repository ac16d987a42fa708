"""
Request authentication context.

Every protected handler receives an explicit AuthContext resolved from the
bearer token. The acting identity comes only from the verified token; no
handler accepts an owner from the client.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.db import get_user
from cardvault.db.database import get_session
from cardvault.models.failure import AuthError
from cardvault.services.credentials import token_subject

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller of one request."""

    username: str


async def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AuthContext:
    """Resolve the caller from the Authorization header or fail with AuthError."""
    if credentials is None:
        raise AuthError("Not authenticated", suggestion="Log in to continue.")

    username = token_subject(credentials.credentials)
    if username is None:
        logger.warning("Rejected invalid or expired session token")
        raise AuthError("Session expired or invalid", suggestion="Log in again.")

    # Tokens outlive accounts only if a user is removed out of band
    if await get_user(session, username) is None:
        logger.warning("Session token for unknown user %s", username)
        raise AuthError("Session expired or invalid", suggestion="Log in again.")

    return AuthContext(username=username)


CurrentUser = Annotated[AuthContext, Depends(get_auth_context)]
DbSession = Annotated[AsyncSession, Depends(get_session)]
