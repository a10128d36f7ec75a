"""Document endpoints: catalog books and manga, the caller's custom documents."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from reading_tracker.api.v1.deps import AdminUser, CurrentUser, DBSession, Paging
from reading_tracker.schemas.common import PaginatedResponse
from reading_tracker.schemas.document import (
    BookCreate,
    BookResponse,
    BookUpdate,
    CustomDocumentCreate,
    CustomDocumentResponse,
    CustomDocumentUpdate,
    MangaCreate,
    MangaResponse,
    MangaUpdate,
)
from reading_tracker.services.document_service import (
    BookService,
    CustomDocumentService,
    MangaService,
)

books_router = APIRouter()
mangas_router = APIRouter()
custom_documents_router = APIRouter()


# Books


@books_router.get(
    "",
    response_model=PaginatedResponse[BookResponse],
    summary="List books",
    description="""
Browse the book catalog, ordered by name.

**Query Parameters:**
- `name` - Name prefix (case-insensitive)
- `author` - Substring of the author name
- `genre` - Substring of any genre (case-insensitive)
- `page`, `limit` - Paging (defaults 1 and 10)
    """,
)
async def list_books(
    db: DBSession,
    paging: Paging,
    current_user: CurrentUser,
    name: str | None = Query(default=None, description="Name prefix"),
    author: str | None = Query(default=None, description="Author contains"),
    genre: str | None = Query(default=None, description="Genre contains"),
) -> PaginatedResponse[BookResponse]:
    return await BookService(db).list_books(paging, name_prefix=name, author=author, genre=genre)


@books_router.get("/isbn/{isbn}", response_model=BookResponse, summary="Get book by ISBN")
async def get_book_by_isbn(isbn: str, db: DBSession, current_user: CurrentUser) -> BookResponse:
    return await BookService(db).get_book_by_isbn(isbn)


@books_router.get("/{book_id}", response_model=BookResponse, summary="Get book")
async def get_book(book_id: UUID, db: DBSession, current_user: CurrentUser) -> BookResponse:
    return await BookService(db).get_book(book_id)


@books_router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create book (admin)",
)
async def create_book(data: BookCreate, db: DBSession, admin: AdminUser) -> BookResponse:
    return await BookService(db).create_book(data)


@books_router.patch("/{book_id}", response_model=BookResponse, summary="Update book (admin)")
async def update_book(
    book_id: UUID,
    data: BookUpdate,
    db: DBSession,
    admin: AdminUser,
) -> BookResponse:
    return await BookService(db).update_book(book_id, data)


@books_router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete book (admin)",
)
async def delete_book(book_id: UUID, db: DBSession, admin: AdminUser) -> None:
    await BookService(db).delete_book(book_id)


# Manga


@mangas_router.get("", response_model=PaginatedResponse[MangaResponse], summary="List manga")
async def list_mangas(
    db: DBSession,
    paging: Paging,
    current_user: CurrentUser,
    title: str | None = Query(default=None, description="Title prefix"),
    author: str | None = Query(default=None, description="Author contains"),
    demography: str | None = Query(default=None, description="Target demography, e.g. seinen"),
    genre: str | None = Query(default=None, description="Genre contains"),
) -> PaginatedResponse[MangaResponse]:
    """Browse the manga catalog, ordered by title and volume."""
    return await MangaService(db).list_mangas(
        paging,
        title_prefix=title,
        author=author,
        demography=demography,
        genre=genre,
    )


@mangas_router.get("/{manga_id}", response_model=MangaResponse, summary="Get manga")
async def get_manga(manga_id: UUID, db: DBSession, current_user: CurrentUser) -> MangaResponse:
    return await MangaService(db).get_manga(manga_id)


@mangas_router.post(
    "",
    response_model=MangaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create manga (admin)",
)
async def create_manga(data: MangaCreate, db: DBSession, admin: AdminUser) -> MangaResponse:
    return await MangaService(db).create_manga(data)


@mangas_router.patch("/{manga_id}", response_model=MangaResponse, summary="Update manga (admin)")
async def update_manga(
    manga_id: UUID,
    data: MangaUpdate,
    db: DBSession,
    admin: AdminUser,
) -> MangaResponse:
    return await MangaService(db).update_manga(manga_id, data)


@mangas_router.delete(
    "/{manga_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete manga (admin)",
)
async def delete_manga(manga_id: UUID, db: DBSession, admin: AdminUser) -> None:
    await MangaService(db).delete_manga(manga_id)


# Custom documents


@custom_documents_router.get(
    "",
    response_model=list[CustomDocumentResponse],
    summary="List my documents",
)
async def list_custom_documents(db: DBSession, current_user: CurrentUser) -> list[CustomDocumentResponse]:
    return await CustomDocumentService(db).list_documents(current_user)


@custom_documents_router.get(
    "/{document_id}",
    response_model=CustomDocumentResponse,
    summary="Get my document",
)
async def get_custom_document(
    document_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
) -> CustomDocumentResponse:
    return await CustomDocumentService(db).get_document(document_id, current_user)


@custom_documents_router.post(
    "",
    response_model=CustomDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a document",
    description="""
Create a private document that only you can read and track.

**Example:**
```bash
curl -X POST /v1/users/me/documents \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"title":"Thesis draft","author":"Me","description":"Chapter two"}'
```
    """,
)
async def create_custom_document(
    data: CustomDocumentCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> CustomDocumentResponse:
    return await CustomDocumentService(db).create_document(current_user, data)


@custom_documents_router.patch(
    "/{document_id}",
    response_model=CustomDocumentResponse,
    summary="Update my document",
)
async def update_custom_document(
    document_id: UUID,
    data: CustomDocumentUpdate,
    db: DBSession,
    current_user: CurrentUser,
) -> CustomDocumentResponse:
    """Partial update: only fields present in the body change."""
    return await CustomDocumentService(db).update_document(document_id, current_user, data)


@custom_documents_router.delete(
    "/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete my document",
)
async def delete_custom_document(
    document_id: UUID,
    db: DBSession,
    current_user: CurrentUser,
) -> None:
    await CustomDocumentService(db).delete_document(document_id, current_user)
