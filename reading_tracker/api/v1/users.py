"""User endpoints."""

import structlog
from fastapi import APIRouter

from reading_tracker.api.v1.deps import CurrentUser, DBSession
from reading_tracker.repositories.user_repo import UserRepository
from reading_tracker.schemas.user import UserResponse, UserUpdate

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get my profile",
    description="""
Get the authenticated user's full profile.

**Example:**
```bash
curl -X GET /v1/users/me \\
  -H "Authorization: Bearer <token>"
```

**Requires:** Bearer token authentication
    """,
)
async def get_current_user_profile(
    current_user: CurrentUser,
) -> UserResponse:
    """Get the current authenticated user's profile."""
    return UserResponse.model_validate(current_user)


@router.patch("/me", response_model=UserResponse, summary="Update my profile")
async def update_current_user_profile(
    data: UserUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> UserResponse:
    """Update display name, biography or profile image; omitted fields are kept."""
    user_repo = UserRepository(db)

    user = await user_repo.update(current_user, **data.model_dump(exclude_unset=True))
    await db.commit()

    logger.info("User profile updated", user_id=str(user.id))

    return UserResponse.model_validate(user)
