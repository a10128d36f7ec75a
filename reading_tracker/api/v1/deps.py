"""Shared API dependencies for authentication, authorization and paging."""

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.core.exceptions import ForbiddenError, UnauthorizedError
from reading_tracker.core.security import verify_access_token
from reading_tracker.db.session import get_db
from reading_tracker.models.user import User
from reading_tracker.repositories.user_repo import UserRepository
from reading_tracker.schemas.common import PageRequest, resolve_page
from reading_tracker.schemas.reading import SortOrder

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Get the current authenticated user from the bearer JWT."""
    if bearer:
        payload = verify_access_token(bearer.credentials)
        if payload and payload.get("sub"):
            user = await UserRepository(db).get_by_id(payload["sub"])
            if user and user.status == "active":
                return user

    raise UnauthorizedError("Invalid or missing authentication credentials")


def require_roles(*roles: str):
    """
    Dependency factory to require specific roles.

    Usage:
        @router.get("/admin", dependencies=[Depends(require_roles("admin"))])
    """

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if not any(role in user.roles for role in roles):
            raise ForbiddenError(f"Requires one of roles: {', '.join(roles)}")
        return user

    return role_checker


def get_page(
    page: int | None = Query(default=None, description="Page number (1-indexed)"),
    limit: int | None = Query(default=None, description="Items per page"),
    sort: SortOrder = Query(default=SortOrder.ASC, description="Sort direction"),
) -> PageRequest:
    """Paging query parameters; missing or non-positive values use the defaults."""
    return resolve_page(page, limit, sort.value)


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_roles("admin"))]
DBSession = Annotated[AsyncSession, Depends(get_db)]
Paging = Annotated[PageRequest, Depends(get_page)]
