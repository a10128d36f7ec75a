"""Reading and record schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from reading_tracker.schemas.document import BookResponse, CustomDocumentResponse, MangaResponse


class ReadingType(str, Enum):
    """Kind of document a reading targets."""

    BOOK = "book"
    MANGA = "manga"
    CUSTOM_DOCUMENT = "custom_document"


class ReadingStatus(str, Enum):
    """Reading lifecycle status."""

    ONGOING = "ongoing"
    PAUSED = "paused"
    COMPLETED = "completed"


class ReadingSortField(str, Enum):
    """Sort keys accepted by the by-type listing."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    LAST_RECORD_UPDATE = "last_record_update"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Request Schemas


class ReadingCreate(BaseModel):
    """Start-reading request, also used as the full replacement body on update."""

    reading_type: ReadingType
    document_id: UUID
    reading_status: ReadingStatus = ReadingStatus.ONGOING
    notes: str = Field(default="", max_length=5000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "reading_type": "book",
                "document_id": "5b1f8f0e-2f4c-4a53-9b55-1f0e6f0c2a11",
                "reading_status": "ongoing",
                "notes": "Borrowed from the library",
            }
        }
    )


class RecordCreate(BaseModel):
    """Record append or update request."""

    progress: str = Field(..., min_length=1, max_length=255)
    notes: str = Field(default="", max_length=5000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "progress": "ch.3",
                "notes": "The pacing picks up here",
            }
        }
    )


# Response Schemas


class RecordResponse(BaseModel):
    """Progress record."""

    id: UUID
    progress: str
    notes: str
    recorded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReadingResponse(BaseModel):
    """Reading without its records."""

    id: UUID
    user_id: UUID
    document_id: UUID
    document_name: str
    reading_type: ReadingType
    reading_status: ReadingStatus
    notes: str
    last_record_update: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReadingDetailResponse(ReadingResponse):
    """Reading with its records in chronological order.

    ``document`` carries the full book, manga or custom document when the
    caller asks for it and the document still exists.
    """

    records: list[RecordResponse] = []
    document: BookResponse | MangaResponse | CustomDocumentResponse | None = None
