"""User schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserResponse(BaseModel):
    """Full profile of the authenticated user."""

    id: UUID
    email: EmailStr
    username: str
    display_name: str
    biography: str | None = None
    profile_image_url: str | None = None
    roles: list[str]
    status: str
    last_login_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Profile update request; only provided fields change."""

    display_name: str | None = Field(default=None, min_length=1, max_length=100)
    biography: str | None = Field(default=None, max_length=1000)
    profile_image_url: str | None = Field(default=None, max_length=500)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "display_name": "Night Reader",
                "biography": "Mostly seinen and sci-fi.",
            }
        }
    )


class AdminUserUpdate(BaseModel):
    """Admin update for a user (can modify roles, status)."""

    display_name: str | None = Field(default=None, min_length=1, max_length=100)
    roles: list[str] | None = Field(
        default=None,
        description="User roles: user, admin",
    )
    status: Literal["active", "suspended"] | None = Field(
        default=None,
        description="Account status; suspending revokes every refresh token",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "roles": ["user", "admin"],
                "status": "active",
            }
        }
    )
