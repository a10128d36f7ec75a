"""Admin API endpoints for user management, reading inspection and record correction.

All endpoints require the admin role.
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, Query, status

from reading_tracker.api.v1.deps import AdminUser, DBSession
from reading_tracker.core.exceptions import ForbiddenError, NotFoundError
from reading_tracker.repositories.user_repo import UserRepository
from reading_tracker.schemas.reading import ReadingDetailResponse, RecordCreate, RecordResponse
from reading_tracker.schemas.user import AdminUserUpdate, UserResponse
from reading_tracker.services.reading_service import ReadingService
from reading_tracker.services.record_service import RecordService

router = APIRouter()
logger = structlog.get_logger(__name__)


# ============================================================================
# Reading Endpoints
# ============================================================================


@router.get(
    "/readings/{reading_id}",
    response_model=ReadingDetailResponse,
    summary="Get any reading (admin)",
    description="""
Fetch a reading of any user together with its records.
Pass `include_document=true` to also attach the document it targets.

**Requires:** Admin role
    """,
)
async def get_reading(
    reading_id: UUID,
    db: DBSession,
    admin: AdminUser,
    include_document: bool = Query(default=False, description="Attach the full document"),
) -> ReadingDetailResponse:
    return await ReadingService(db).get_reading(reading_id, include_document=include_document)


@router.get(
    "/readings/{reading_id}/records",
    response_model=list[RecordResponse],
    summary="List records of any reading (admin)",
)
async def list_records(
    reading_id: UUID,
    db: DBSession,
    admin: AdminUser,
) -> list[RecordResponse]:
    return await RecordService(db).list_records(reading_id)


@router.put(
    "/readings/{reading_id}/records/{record_id}",
    response_model=RecordResponse,
    summary="Correct a record (admin)",
    description="""
Overwrite `progress` and `notes` of one record. Its id and timestamp are kept
and no other record of the reading is touched.

**Requires:** Admin role
    """,
)
async def update_record(
    reading_id: UUID,
    record_id: UUID,
    data: RecordCreate,
    db: DBSession,
    admin: AdminUser,
) -> RecordResponse:
    return await RecordService(db).update_record(reading_id, record_id, data)


# ============================================================================
# User Management Endpoints
# ============================================================================


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    summary="Get user details (admin)",
    description="Get full details for a specific user.",
)
async def get_user(
    user_id: UUID,
    db: DBSession,
    admin: AdminUser,
) -> UserResponse:
    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise NotFoundError("User", str(user_id))

    return UserResponse.model_validate(user)


@router.patch(
    "/users/{user_id}",
    response_model=UserResponse,
    summary="Update user (admin)",
    description="""
Update a user's display name, roles, or status.

**Updatable Fields:**
- `display_name`: User's display name
- `roles`: Array of roles (user, admin)
- `status`: `active` or `suspended`; suspending also revokes every refresh token

**Requires:** Admin role
    """,
)
async def update_user(
    user_id: UUID,
    data: AdminUserUpdate,
    db: DBSession,
    admin: AdminUser,
) -> UserResponse:
    user_repo = UserRepository(db)
    user = await user_repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User", str(user_id))

    update_data = data.model_dump(exclude_unset=True)
    if update_data:
        user = await user_repo.update(user, **update_data)

        revoked = 0
        if user.status != "active":
            revoked = await user_repo.revoke_all_refresh_tokens(user.id)
        await db.commit()

        logger.info(
            "Admin updated user",
            admin_id=str(admin.id),
            user_id=str(user_id),
            updates=list(update_data.keys()),
            revoked_tokens=revoked,
        )

    return UserResponse.model_validate(user)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user (admin)",
    description="""
Delete a user together with their readings, records, reading lists and
custom documents.

Admins cannot delete their own account here.

**Requires:** Admin role
    """,
)
async def delete_user(
    user_id: UUID,
    db: DBSession,
    admin: AdminUser,
) -> None:
    if user_id == admin.id:
        raise ForbiddenError("Cannot delete your own account")

    deleted = await UserRepository(db).delete(user_id)
    if not deleted:
        raise NotFoundError("User", str(user_id))

    await db.commit()

    logger.info("Admin deleted user", admin_id=str(admin.id), user_id=str(user_id))
