"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Login request body. ``identifier`` accepts an email or a username."""

    identifier: str = Field(min_length=3, max_length=255, description="Email address or username")
    password: str = Field(min_length=8, max_length=128, description="User password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "identifier": "reader@example.com",
                "password": "securepassword123",
            }
        }
    )


class RegisterRequest(BaseModel):
    """User registration request body."""

    email: EmailStr = Field(description="User email address")
    password: str = Field(min_length=8, max_length=128, description="User password")
    username: str = Field(
        min_length=3,
        max_length=50,
        pattern=r"^[a-zA-Z0-9_-]+$",
        description="Unique username (letters, numbers, underscore, hyphen)",
    )
    display_name: str = Field(min_length=1, max_length=100, description="Display name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "reader@example.com",
                "password": "securepassword123",
                "username": "bookworm",
                "display_name": "Book Worm",
            }
        }
    )


class TokenResponse(BaseModel):
    """Authentication token response."""

    access_token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="Refresh token for obtaining new access tokens")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Access token expiration time in seconds")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "refresh_token": "dGhpc2lzYXJlZnJlc2h0b2tlbg==",
                "token_type": "bearer",
                "expires_in": 3600,
            }
        }
    )


class RefreshRequest(BaseModel):
    """Token refresh request body."""

    refresh_token: str = Field(description="Refresh token from previous login/refresh")
