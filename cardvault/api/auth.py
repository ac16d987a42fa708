"""
Authentication endpoints.

Register and log in with a username and password; both return a session
token valid for seven days plus the public user record.
"""

import logging

from fastapi import APIRouter, status
from sqlalchemy.exc import IntegrityError

from cardvault.api.deps import CurrentUser, DbSession
from cardvault.db import create_user, get_user
from cardvault.models.failure import AuthError, NotFoundError, UsernameTakenError
from cardvault.models.records import LoginRequest, RegisterRequest, TokenResponse, UserOut
from cardvault.services.credentials import hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(username: str, user: UserOut) -> TokenResponse:
    return TokenResponse(token=issue_token({"sub": username}), user=user)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, session: DbSession) -> TokenResponse:
    """
    Create an account and log it in.

    Fails with username_taken if the username already exists.
    """
    if await get_user(session, request.username) is not None:
        raise UsernameTakenError(request.username)

    try:
        user = await create_user(session, request.username, hash_password(request.password))
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same name
        await session.rollback()
        raise UsernameTakenError(request.username) from e

    logger.info("Registered user %s", user.username)
    return _token_response(user.username, UserOut.model_validate(user))


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, session: DbSession) -> TokenResponse:
    """Exchange credentials for a session token."""
    user = await get_user(session, request.username)
    if user is None or not verify_password(request.password, user.hashed_password):
        logger.warning("Failed login for %s", request.username)
        raise AuthError("Invalid username or password")

    logger.info("User %s logged in", user.username)
    return _token_response(user.username, UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
async def me(auth: CurrentUser, session: DbSession) -> UserOut:
    """The user the presented token belongs to."""
    user = await get_user(session, auth.username)
    if user is None:
        raise NotFoundError("user", auth.username)
    return UserOut.model_validate(user)
