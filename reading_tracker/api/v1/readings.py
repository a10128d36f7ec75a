"""Reading and record endpoints for the authenticated user."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from reading_tracker.api.v1.deps import CurrentUser, DBSession, Paging
from reading_tracker.schemas.common import PaginatedResponse
from reading_tracker.schemas.reading import (
    ReadingCreate,
    ReadingDetailResponse,
    ReadingResponse,
    ReadingSortField,
    ReadingStatus,
    ReadingType,
    RecordCreate,
    RecordResponse,
)
from reading_tracker.services.reading_service import ReadingService
from reading_tracker.services.record_service import RecordService

router = APIRouter()


@router.post(
    "",
    response_model=ReadingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start reading a document",
    description="""
Start tracking a book, a manga or one of your custom documents.

**Errors:**
- `404 NOT_FOUND` - The document does not exist (custom documents must be yours)
- `409 DUPLICATE` - You already have a reading for this document

**Example:**
```bash
curl -X POST /v1/readings \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"reading_type":"book","document_id":"<uuid>","reading_status":"ongoing"}'
```
    """,
)
async def start_reading(
    data: ReadingCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> ReadingResponse:
    return await ReadingService(db).start_reading(current_user, data)


@router.get(
    "",
    response_model=PaginatedResponse[ReadingResponse],
    summary="List my readings",
    description="""
Your readings ordered by creation time.

**Query Parameters:**
- `page` - 1-indexed page (default 1)
- `limit` - Page size (default 10)
- `sort` - `asc` (oldest first, default) or `desc`

An empty page is returned as `data: []`, never as an error.
    """,
)
async def list_readings(
    db: DBSession,
    current_user: CurrentUser,
    paging: Paging,
) -> PaginatedResponse[ReadingResponse]:
    return await ReadingService(db).list_by_user(current_user, paging)


@router.get(
    "/by-type",
    response_model=PaginatedResponse[ReadingResponse],
    summary="List my readings of one type",
)
async def list_readings_by_type(
    db: DBSession,
    current_user: CurrentUser,
    paging: Paging,
    reading_type: ReadingType = Query(..., alias="type"),
    sort_by: ReadingSortField = Query(default=ReadingSortField.CREATED_AT),
) -> PaginatedResponse[ReadingResponse]:
    """Readings of the given type sorted by ``sort_by``."""
    return await ReadingService(db).list_by_type(current_user, reading_type, sort_by, paging)


@router.get(
    "/by-status",
    response_model=PaginatedResponse[ReadingResponse],
    summary="List my readings with one status",
)
async def list_readings_by_status(
    db: DBSession,
    current_user: CurrentUser,
    paging: Paging,
    reading_status: ReadingStatus = Query(..., alias="status"),
) -> PaginatedResponse[ReadingResponse]:
    """Readings with the given status, ordered by last update."""
    return await ReadingService(db).list_by_status(current_user, reading_status, paging)


@router.get("/{reading_id}", response_model=ReadingDetailResponse, summary="Get my reading")
async def get_reading(
    reading_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
    include_document: bool = Query(default=False, description="Attach the full book, manga or custom document"),
) -> ReadingDetailResponse:
    return await ReadingService(db).get_reading_for_user(reading_id, current_user, include_document=include_document)


@router.put("/{reading_id}", response_model=ReadingResponse, summary="Update my reading")
async def update_reading(
    reading_id: UUID,
    data: ReadingCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> ReadingResponse:
    """Replace type, status and notes. The target document cannot change."""
    return await ReadingService(db).update_reading(reading_id, current_user, data)


@router.delete(
    "/{reading_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete my reading",
)
async def delete_reading(
    reading_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
) -> None:
    """Delete the reading, its records, and its entries in your reading lists."""
    await ReadingService(db).delete_reading(reading_id, current_user)


# Records


@router.post(
    "/{reading_id}/records",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a progress record",
)
async def add_record(
    reading_id: UUID,
    data: RecordCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> RecordResponse:
    return await RecordService(db).add_record(reading_id, current_user, data)


@router.get(
    "/{reading_id}/records",
    response_model=list[RecordResponse],
    summary="List progress records",
)
async def list_records(
    reading_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
) -> list[RecordResponse]:
    """Records in the order they were added."""
    return await RecordService(db).list_records_for_user(reading_id, current_user)


@router.put(
    "/{reading_id}/records/{record_id}",
    response_model=RecordResponse,
    summary="Update a progress record",
)
async def update_record(
    reading_id: UUID,
    record_id: UUID,
    data: RecordCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> RecordResponse:
    return await RecordService(db).update_record_for_user(reading_id, record_id, current_user, data)


@router.delete(
    "/{reading_id}/records/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a progress record",
)
async def delete_record(
    reading_id: UUID,
    record_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
) -> None:
    await RecordService(db).delete_record(reading_id, current_user, record_id)
