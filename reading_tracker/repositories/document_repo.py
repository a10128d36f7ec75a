"""Document repositories: catalog books and manga, per-user custom documents."""

import json
import uuid
from datetime import UTC, datetime

from sqlalchemy import String, and_, cast, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.models.document import Book, CustomDocument, Manga


def _like_literal(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally (escape char: backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _has_genre(column, genre: str):
    """Case-insensitive substring match against any element of a JSON genre list."""
    # Encoded like the stored JSON text, minus the surrounding quotes
    needle = _like_literal(json.dumps(genre.lower())[1:-1])
    return func.lower(cast(column, String)).like(f"%{needle}%", escape="\\")


class BookRepository:
    """Repository for catalog Book operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, **fields) -> Book:
        """Create a new book."""
        book = Book(**fields)
        self.db.add(book)
        await self.db.flush()
        await self.db.refresh(book)
        return book

    async def get_by_id(self, book_id: uuid.UUID) -> Book | None:
        """Get book by ID."""
        result = await self.db.execute(select(Book).where(Book.id == book_id))
        return result.scalar_one_or_none()

    async def get_by_isbn(self, isbn: str) -> Book | None:
        """Get book by ISBN."""
        result = await self.db.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def list_books(
        self,
        name_prefix: str | None = None,
        author: str | None = None,
        genre: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Book], int]:
        """List books ordered by name.

        Returns:
            Tuple of (books list, total count)
        """
        conditions = []
        if name_prefix:
            conditions.append(Book.name.ilike(f"{_like_literal(name_prefix)}%", escape="\\"))
        if author:
            conditions.append(Book.author.ilike(f"%{_like_literal(author)}%", escape="\\"))
        if genre:
            conditions.append(_has_genre(Book.genres, genre))

        count_stmt = select(func.count(Book.id)).where(*conditions)
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(Book)
            .where(*conditions)
            .order_by(Book.name.asc(), Book.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def update(self, book: Book, **kwargs) -> Book:
        """Update book fields; ``None`` values are skipped."""
        for key, value in kwargs.items():
            if hasattr(book, key) and value is not None:
                setattr(book, key, value)

        book.updated_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(book)
        return book

    async def delete(self, book: Book) -> None:
        """Delete a book."""
        await self.db.delete(book)
        await self.db.flush()


class MangaRepository:
    """Repository for catalog Manga operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, **fields) -> Manga:
        """Create a new manga."""
        manga = Manga(**fields)
        self.db.add(manga)
        await self.db.flush()
        await self.db.refresh(manga)
        return manga

    async def get_by_id(self, manga_id: uuid.UUID) -> Manga | None:
        """Get manga by ID."""
        result = await self.db.execute(select(Manga).where(Manga.id == manga_id))
        return result.scalar_one_or_none()

    async def list_mangas(
        self,
        title_prefix: str | None = None,
        author: str | None = None,
        demography: str | None = None,
        genre: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Manga], int]:
        """List manga ordered by title, then volume."""
        conditions = []
        if title_prefix:
            conditions.append(Manga.title.ilike(f"{_like_literal(title_prefix)}%", escape="\\"))
        if author:
            conditions.append(Manga.author.ilike(f"%{_like_literal(author)}%", escape="\\"))
        if genre:
            conditions.append(_has_genre(Manga.genres, genre))
        if demography:
            conditions.append(Manga.demography == demography)

        count_stmt = select(func.count(Manga.id)).where(*conditions)
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(Manga)
            .where(*conditions)
            .order_by(Manga.title.asc(), Manga.volume.asc(), Manga.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def update(self, manga: Manga, **kwargs) -> Manga:
        """Update manga fields; ``None`` values are skipped."""
        for key, value in kwargs.items():
            if hasattr(manga, key) and value is not None:
                setattr(manga, key, value)

        manga.updated_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(manga)
        return manga

    async def delete(self, manga: Manga) -> None:
        """Delete a manga."""
        await self.db.delete(manga)
        await self.db.flush()


class CustomDocumentRepository:
    """Repository for custom documents; every lookup is scoped to the owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: uuid.UUID, **fields) -> CustomDocument:
        document = CustomDocument(user_id=user_id, **fields)
        self.db.add(document)
        await self.db.flush()
        await self.db.refresh(document)
        return document

    async def get_for_user(
        self,
        user_id: uuid.UUID,
        document_id: uuid.UUID,
    ) -> CustomDocument | None:
        """Get one of the user's documents; other users' documents are invisible."""
        stmt = select(CustomDocument).where(
            and_(
                CustomDocument.user_id == user_id,
                CustomDocument.id == document_id,
            )
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: uuid.UUID) -> list[CustomDocument]:
        stmt = (
            select(CustomDocument)
            .where(CustomDocument.user_id == user_id)
            .order_by(CustomDocument.created_at.asc(), CustomDocument.id.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, document: CustomDocument, **kwargs) -> CustomDocument:
        """Apply a partial update; callers pass only the fields that were provided."""
        for key, value in kwargs.items():
            if hasattr(document, key):
                setattr(document, key, value)

        document.updated_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(document)
        return document

    async def delete(self, user_id: uuid.UUID, document_id: uuid.UUID) -> bool:
        """Delete one of the user's documents. Returns True if a row was removed."""
        stmt = delete(CustomDocument).where(
            and_(
                CustomDocument.user_id == user_id,
                CustomDocument.id == document_id,
            )
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0
