"""Reading list schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReadingListCreate(BaseModel):
    """Reading list create/update request."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Summer 2026",
                "description": "Beach reads",
            }
        }
    )


class ReadingIdsRequest(BaseModel):
    """Reading ids to add to or remove from a list."""

    reading_ids: list[UUID] = Field(..., min_length=1)


class ReadingListResponse(BaseModel):
    """Reading list with its member reading ids."""

    id: UUID
    name: str
    description: str
    reading_ids: list[UUID] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReadingListChangeResponse(BaseModel):
    """Outcome of an add/remove call; ``changed == 0`` is reported, not raised."""

    requested: int
    changed: int
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "requested": 2,
                "changed": 0,
                "message": "No changes",
            }
        }
    )
