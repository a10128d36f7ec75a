"""Document schemas: catalog books and manga, user custom documents."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# Book


class BookCreate(BaseModel):
    """Catalog book creation request."""

    name: str = Field(..., min_length=1, max_length=500)
    author: str = Field(..., min_length=1, max_length=255)
    isbn: str | None = Field(default=None, max_length=20)
    cover_image_url: str | None = Field(default=None, max_length=500)
    edition: str | None = Field(default=None, max_length=100)
    pages: int = Field(..., ge=1)
    language: str = Field(default="en", max_length=10)
    publication_date: date | None = None
    publisher: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    genres: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "The Left Hand of Darkness",
                "author": "Ursula K. Le Guin",
                "isbn": "9780441478125",
                "pages": 304,
                "language": "en",
                "genres": ["science-fiction"],
            }
        }
    )


class BookUpdate(BaseModel):
    """Catalog book update request."""

    name: str | None = Field(default=None, min_length=1, max_length=500)
    author: str | None = Field(default=None, min_length=1, max_length=255)
    isbn: str | None = Field(default=None, max_length=20)
    cover_image_url: str | None = Field(default=None, max_length=500)
    edition: str | None = Field(default=None, max_length=100)
    pages: int | None = Field(default=None, ge=1)
    language: str | None = Field(default=None, max_length=10)
    publication_date: date | None = None
    publisher: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    genres: list[str] | None = None


class BookResponse(BaseModel):
    """Catalog book response."""

    id: UUID
    name: str
    author: str
    isbn: str | None = None
    cover_image_url: str | None = None
    edition: str | None = None
    pages: int
    language: str
    publication_date: date | None = None
    publisher: str | None = None
    description: str | None = None
    genres: list[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Manga


class MangaCreate(BaseModel):
    """Catalog manga creation request."""

    title: str = Field(..., min_length=1, max_length=500)
    author: str = Field(..., min_length=1, max_length=255)
    cover_image_url: str | None = Field(default=None, max_length=500)
    volume: int = Field(..., ge=1)
    chapters: int = Field(..., ge=1)
    demography: str = Field(..., min_length=1, max_length=50)
    genres: list[str] = Field(default_factory=list)
    publication_date: date | None = None
    publisher: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Vinland Saga",
                "author": "Makoto Yukimura",
                "volume": 1,
                "chapters": 8,
                "demography": "seinen",
                "genres": ["historical", "action"],
            }
        }
    )


class MangaUpdate(BaseModel):
    """Catalog manga update request."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    author: str | None = Field(default=None, min_length=1, max_length=255)
    cover_image_url: str | None = Field(default=None, max_length=500)
    volume: int | None = Field(default=None, ge=1)
    chapters: int | None = Field(default=None, ge=1)
    demography: str | None = Field(default=None, min_length=1, max_length=50)
    genres: list[str] | None = None
    publication_date: date | None = None
    publisher: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)


class MangaResponse(BaseModel):
    """Catalog manga response."""

    id: UUID
    title: str
    author: str
    cover_image_url: str | None = None
    volume: int
    chapters: int
    demography: str
    genres: list[str] = []
    publication_date: date | None = None
    publisher: str | None = None
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Custom documents


class CustomDocumentCreate(BaseModel):
    """Custom document creation request."""

    title: str = Field(..., min_length=1, max_length=500)
    author: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=5000)
    file_url: str | None = Field(default=None, max_length=500)
    url: str | None = Field(default=None, max_length=500)
    tags: list[str] = Field(default_factory=list)
    category: str | None = Field(default=None, max_length=100)
    version: str | None = Field(default=None, max_length=50)
    status: str | None = Field(default=None, max_length=50)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Thesis draft",
                "author": "Me",
                "description": "Working copy of chapter two",
                "tags": ["research"],
                "status": "draft",
            }
        }
    )


class CustomDocumentUpdate(BaseModel):
    """Partial custom document update; only provided fields change."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    author: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    file_url: str | None = Field(default=None, max_length=500)
    url: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = None
    category: str | None = Field(default=None, max_length=100)
    version: str | None = Field(default=None, max_length=50)
    status: str | None = Field(default=None, max_length=50)


class CustomDocumentResponse(BaseModel):
    """Custom document response."""

    id: UUID
    user_id: UUID
    title: str
    author: str
    description: str
    file_url: str | None = None
    url: str | None = None
    tags: list[str] = []
    category: str | None = None
    version: str | None = None
    status: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
