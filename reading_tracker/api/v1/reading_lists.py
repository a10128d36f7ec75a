"""Reading list endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from reading_tracker.api.v1.deps import CurrentUser, DBSession
from reading_tracker.schemas.reading_list import (
    ReadingIdsRequest,
    ReadingListChangeResponse,
    ReadingListCreate,
    ReadingListResponse,
)
from reading_tracker.services.reading_list_service import ReadingListService

router = APIRouter()


@router.get("", response_model=list[ReadingListResponse], summary="List my reading lists")
async def list_reading_lists(db: DBSession, current_user: CurrentUser) -> list[ReadingListResponse]:
    return await ReadingListService(db).get_lists(current_user)


@router.post(
    "",
    response_model=ReadingListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reading list",
)
async def create_reading_list(
    data: ReadingListCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> ReadingListResponse:
    return await ReadingListService(db).create_list(current_user, data)


@router.get("/{list_id}", response_model=ReadingListResponse, summary="Get a reading list")
async def get_reading_list(
    list_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
) -> ReadingListResponse:
    return await ReadingListService(db).get_list(list_id, current_user)


@router.put("/{list_id}", response_model=ReadingListResponse, summary="Rename a reading list")
async def update_reading_list(
    list_id: UUID,
    data: ReadingListCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> ReadingListResponse:
    return await ReadingListService(db).update_list(list_id, current_user, data)


@router.delete(
    "/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a reading list",
)
async def delete_reading_list(
    list_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
) -> None:
    await ReadingListService(db).delete_list(list_id, current_user)


@router.put(
    "/{list_id}/add-readings",
    response_model=ReadingListChangeResponse,
    summary="Add readings to a list",
    description="""
Add readings to the list. Ids already in the list are skipped.

Every id must be one of your readings, otherwise `404 NOT_FOUND` and nothing
is added. When nothing new was added the response says `"No changes"`.
    """,
)
async def add_readings(
    list_id: UUID,
    data: ReadingIdsRequest,
    db: DBSession,
    current_user: CurrentUser,
) -> ReadingListChangeResponse:
    return await ReadingListService(db).add_readings(list_id, current_user, data.reading_ids)


@router.put(
    "/{list_id}/remove-readings",
    response_model=ReadingListChangeResponse,
    summary="Remove readings from a list",
)
async def remove_readings(
    list_id: UUID,
    data: ReadingIdsRequest,
    db: DBSession,
    current_user: CurrentUser,
) -> ReadingListChangeResponse:
    """Ids that are not in the list are ignored; removing none reports "No changes"."""
    return await ReadingListService(db).remove_readings(list_id, current_user, data.reading_ids)
