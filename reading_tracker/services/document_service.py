"""Document services: catalog books and manga, user custom documents."""

from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.cache.redis_client import CacheService, get_redis_client
from reading_tracker.core.exceptions import ConflictError, NotFoundError
from reading_tracker.models.user import User
from reading_tracker.repositories.document_repo import (
    BookRepository,
    CustomDocumentRepository,
    MangaRepository,
)
from reading_tracker.schemas.common import PageRequest, PaginatedResponse, create_pagination
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

logger = structlog.get_logger(__name__)


class BookService:
    """Service for catalog book operations.

    Book details are served read-through from Redis when caching is enabled.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BookRepository(db)

    @staticmethod
    def _cache_key(book_id: UUID) -> str:
        return f"book:{book_id}"

    async def _cache(self) -> CacheService:
        return CacheService(await get_redis_client())

    async def get_book(self, book_id: UUID) -> BookResponse:
        cache = await self._cache()
        cached = await cache.get(self._cache_key(book_id))
        if cached:
            return BookResponse.model_validate_json(cached)

        book = await self.repo.get_by_id(book_id)
        if not book:
            raise NotFoundError("Book", str(book_id))

        response = BookResponse.model_validate(book)
        await cache.set(self._cache_key(book_id), response.model_dump_json())
        return response

    async def get_book_by_isbn(self, isbn: str) -> BookResponse:
        book = await self.repo.get_by_isbn(isbn)
        if not book:
            raise NotFoundError("Book", isbn)
        return BookResponse.model_validate(book)

    async def list_books(
        self,
        paging: PageRequest,
        name_prefix: str | None = None,
        author: str | None = None,
        genre: str | None = None,
    ) -> PaginatedResponse[BookResponse]:
        books, total = await self.repo.list_books(
            name_prefix=name_prefix,
            author=author,
            genre=genre,
            page=paging.page,
            limit=paging.limit,
        )
        return PaginatedResponse[BookResponse](
            data=[BookResponse.model_validate(b) for b in books],
            pagination=create_pagination(paging.page, paging.limit, total),
        )

    async def create_book(self, data: BookCreate) -> BookResponse:
        if data.isbn and await self.repo.get_by_isbn(data.isbn):
            raise ConflictError("A book with this ISBN already exists", {"isbn": data.isbn})

        book = await self.repo.create(**data.model_dump())
        await self.db.commit()

        logger.info("Book created", book_id=str(book.id), name=book.name)

        return BookResponse.model_validate(book)

    async def update_book(self, book_id: UUID, data: BookUpdate) -> BookResponse:
        book = await self.repo.get_by_id(book_id)
        if not book:
            raise NotFoundError("Book", str(book_id))

        if data.isbn and data.isbn != book.isbn:
            clash = await self.repo.get_by_isbn(data.isbn)
            if clash:
                raise ConflictError("A book with this ISBN already exists", {"isbn": data.isbn})

        book = await self.repo.update(book, **data.model_dump(exclude_unset=True))
        await self.db.commit()
        await (await self._cache()).delete(self._cache_key(book_id))

        logger.info("Book updated", book_id=str(book_id))

        return BookResponse.model_validate(book)

    async def delete_book(self, book_id: UUID) -> None:
        book = await self.repo.get_by_id(book_id)
        if not book:
            raise NotFoundError("Book", str(book_id))

        await self.repo.delete(book)
        await self.db.commit()
        await (await self._cache()).delete(self._cache_key(book_id))

        logger.info("Book deleted", book_id=str(book_id))


class MangaService:
    """Service for catalog manga operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = MangaRepository(db)

    @staticmethod
    def _cache_key(manga_id: UUID) -> str:
        return f"manga:{manga_id}"

    async def _cache(self) -> CacheService:
        return CacheService(await get_redis_client())

    async def get_manga(self, manga_id: UUID) -> MangaResponse:
        cache = await self._cache()
        cached = await cache.get(self._cache_key(manga_id))
        if cached:
            return MangaResponse.model_validate_json(cached)

        manga = await self.repo.get_by_id(manga_id)
        if not manga:
            raise NotFoundError("Manga", str(manga_id))

        response = MangaResponse.model_validate(manga)
        await cache.set(self._cache_key(manga_id), response.model_dump_json())
        return response

    async def list_mangas(
        self,
        paging: PageRequest,
        title_prefix: str | None = None,
        author: str | None = None,
        demography: str | None = None,
        genre: str | None = None,
    ) -> PaginatedResponse[MangaResponse]:
        mangas, total = await self.repo.list_mangas(
            title_prefix=title_prefix,
            author=author,
            demography=demography,
            genre=genre,
            page=paging.page,
            limit=paging.limit,
        )
        return PaginatedResponse[MangaResponse](
            data=[MangaResponse.model_validate(m) for m in mangas],
            pagination=create_pagination(paging.page, paging.limit, total),
        )

    async def create_manga(self, data: MangaCreate) -> MangaResponse:
        manga = await self.repo.create(**data.model_dump())
        await self.db.commit()

        logger.info("Manga created", manga_id=str(manga.id), title=manga.title)

        return MangaResponse.model_validate(manga)

    async def update_manga(self, manga_id: UUID, data: MangaUpdate) -> MangaResponse:
        manga = await self.repo.get_by_id(manga_id)
        if not manga:
            raise NotFoundError("Manga", str(manga_id))

        manga = await self.repo.update(manga, **data.model_dump(exclude_unset=True))
        await self.db.commit()
        await (await self._cache()).delete(self._cache_key(manga_id))

        logger.info("Manga updated", manga_id=str(manga_id))

        return MangaResponse.model_validate(manga)

    async def delete_manga(self, manga_id: UUID) -> None:
        manga = await self.repo.get_by_id(manga_id)
        if not manga:
            raise NotFoundError("Manga", str(manga_id))

        await self.repo.delete(manga)
        await self.db.commit()
        await (await self._cache()).delete(self._cache_key(manga_id))

        logger.info("Manga deleted", manga_id=str(manga_id))


class CustomDocumentService:
    """Service for a user's own documents."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = CustomDocumentRepository(db)

    async def list_documents(self, user: User) -> list[CustomDocumentResponse]:
        documents = await self.repo.list_for_user(user.id)
        return [CustomDocumentResponse.model_validate(d) for d in documents]

    async def get_document(self, document_id: UUID, user: User) -> CustomDocumentResponse:
        document = await self.repo.get_for_user(user.id, document_id)
        if not document:
            raise NotFoundError("Custom document", str(document_id))
        return CustomDocumentResponse.model_validate(document)

    async def create_document(self, user: User, data: CustomDocumentCreate) -> CustomDocumentResponse:
        document = await self.repo.create(user.id, **data.model_dump())
        await self.db.commit()

        logger.info("Custom document created", document_id=str(document.id), user_id=str(user.id))

        return CustomDocumentResponse.model_validate(document)

    async def update_document(
        self,
        document_id: UUID,
        user: User,
        data: CustomDocumentUpdate,
    ) -> CustomDocumentResponse:
        """Apply only the fields present in the request; ``updated_at`` always moves."""
        document = await self.repo.get_for_user(user.id, document_id)
        if not document:
            raise NotFoundError("Custom document", str(document_id))

        document = await self.repo.update(document, **data.model_dump(exclude_unset=True))
        await self.db.commit()

        logger.info("Custom document updated", document_id=str(document_id), user_id=str(user.id))

        return CustomDocumentResponse.model_validate(document)

    async def delete_document(self, document_id: UUID, user: User) -> None:
        deleted = await self.repo.delete(user.id, document_id)
        if not deleted:
            raise NotFoundError("Custom document", str(document_id))

        await self.db.commit()

        logger.info("Custom document deleted", document_id=str(document_id), user_id=str(user.id))
