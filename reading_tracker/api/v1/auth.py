"""Authentication endpoints."""

import asyncio
from datetime import UTC, datetime, timedelta

import structlog
from fastapi import APIRouter, Request, status

from reading_tracker.api.v1.deps import DBSession
from reading_tracker.config import settings
from reading_tracker.core.exceptions import ConflictError, UnauthorizedError
from reading_tracker.core.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    hash_refresh_token,
    verify_password,
)
from reading_tracker.models.user import User
from reading_tracker.rate_limiter import limiter
from reading_tracker.repositories.user_repo import UserRepository
from reading_tracker.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)

router = APIRouter()
logger = structlog.get_logger(__name__)


async def _issue_tokens(user_repo: UserRepository, user: User, access_token: str) -> TokenResponse:
    """Persist a fresh refresh token and build the token pair."""
    raw_refresh, refresh_hash = create_refresh_token()
    expires_at = datetime.now(UTC) + timedelta(days=settings.jwt_refresh_token_expire_days)
    await user_repo.create_refresh_token(user.id, refresh_hash, expires_at)
    await user_repo.db.commit()

    return TokenResponse(
        access_token=access_token,
        refresh_token=raw_refresh,
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.auth_rate_limit)
async def register(
    request: Request,
    data: RegisterRequest,
    db: DBSession,
) -> TokenResponse:
    """
    Register a new user account.

    Returns access and refresh tokens on success.
    """
    user_repo = UserRepository(db)

    if await user_repo.get_by_email(data.email):
        raise ConflictError("Email already registered")

    if await user_repo.get_by_username(data.username):
        raise ConflictError("Username already taken")

    user = await user_repo.create(
        email=data.email,
        username=data.username,
        display_name=data.display_name,
        password_hash=hash_password(data.password),
    )

    logger.info("User registered", user_id=str(user.id), username=user.username)

    return await _issue_tokens(user_repo, user, create_access_token(subject=str(user.id)))


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
    description="""
Authenticate with an email address **or** a username and a password.

Recording the login time and signing the access token run concurrently;
if either fails the login fails.

**Example:**
```bash
curl -X POST /v1/auth/login \\
  -H "Content-Type: application/json" \\
  -d '{"identifier":"bookworm","password":"securepassword123"}'
```
    """,
)
@limiter.limit(settings.auth_rate_limit)
async def login(
    request: Request,
    data: LoginRequest,
    db: DBSession,
) -> TokenResponse:
    user_repo = UserRepository(db)

    user = await user_repo.get_by_login(data.identifier)
    if not user or not verify_password(data.password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")

    if user.status != "active":
        raise UnauthorizedError("Account is not active")

    # Both tasks start together and are joined; the first failure fails the login
    results = await asyncio.gather(
        user_repo.update_last_login(user.id),
        asyncio.to_thread(create_access_token, str(user.id)),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    _, access_token = results

    logger.info("User logged in", user_id=str(user.id))

    return await _issue_tokens(user_repo, user, access_token)


@router.post("/refresh", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
async def refresh_token(
    request: Request,
    data: RefreshRequest,
    db: DBSession,
) -> TokenResponse:
    """
    Refresh access token using refresh token.

    The old refresh token is revoked and a new one is issued (token rotation).
    """
    user_repo = UserRepository(db)

    token = await user_repo.get_refresh_token(hash_refresh_token(data.refresh_token))
    if not token or not token.is_valid:
        raise UnauthorizedError("Invalid or expired refresh token")

    user = await user_repo.get_by_id(token.user_id)
    if not user or user.status != "active":
        raise UnauthorizedError("User not found or inactive")

    await user_repo.revoke_refresh_token(token)

    logger.info("Token refreshed", user_id=str(user.id))

    return await _issue_tokens(user_repo, user, create_access_token(subject=str(user.id)))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    data: RefreshRequest,
    db: DBSession,
) -> None:
    """
    Logout by revoking the refresh token.
    """
    user_repo = UserRepository(db)

    token = await user_repo.get_refresh_token(hash_refresh_token(data.refresh_token))
    if token and token.is_valid:
        await user_repo.revoke_refresh_token(token)
        await db.commit()
        logger.info("User logged out", user_id=str(token.user_id))
