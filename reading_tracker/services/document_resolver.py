"""Polymorphic document lookup keyed by reading type."""

import uuid
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.core.exceptions import InvalidArgumentError, NotFoundError
from reading_tracker.models.document import Book, CustomDocument, Manga
from reading_tracker.repositories.document_repo import (
    BookRepository,
    CustomDocumentRepository,
    MangaRepository,
)
from reading_tracker.schemas.reading import ReadingType

Document = Book | Manga | CustomDocument
Lookup = Callable[[uuid.UUID, uuid.UUID], Awaitable[Document | None]]


class DocumentResolver:
    """Resolve ``(reading_type, document_id)`` to the document it names.

    Books and manga are looked up in the global catalog. Custom documents are
    only visible inside the caller's own scope, so a reading can never point
    at another user's custom document.
    """

    def __init__(self, db: AsyncSession):
        self.books = BookRepository(db)
        self.mangas = MangaRepository(db)
        self.custom_documents = CustomDocumentRepository(db)
        self._lookups: dict[ReadingType, Lookup] = {
            ReadingType.BOOK: self._book,
            ReadingType.MANGA: self._manga,
            ReadingType.CUSTOM_DOCUMENT: self._custom_document,
        }

    async def fetch(
        self,
        reading_type: ReadingType | str,
        document_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> Document:
        """Return the document itself.

        Raises:
            InvalidArgumentError: Unknown reading type
            NotFoundError: No such document in the type's scope
        """
        try:
            kind = ReadingType(reading_type)
        except ValueError:
            raise InvalidArgumentError("invalid reading type", {"reading_type": str(reading_type)})

        document = await self._lookups[kind](document_id, user_id)
        if document is None:
            raise NotFoundError(kind.value.replace("_", " ").capitalize(), str(document_id))
        return document

    async def resolve(
        self,
        reading_type: ReadingType | str,
        document_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> str:
        """Return the display name of the document. Raises as ``fetch`` does."""
        document = await self.fetch(reading_type, document_id, user_id)
        return document.display_name

    async def _book(self, document_id: uuid.UUID, user_id: uuid.UUID) -> Book | None:
        return await self.books.get_by_id(document_id)

    async def _manga(self, document_id: uuid.UUID, user_id: uuid.UUID) -> Manga | None:
        return await self.mangas.get_by_id(document_id)

    async def _custom_document(self, document_id: uuid.UUID, user_id: uuid.UUID) -> CustomDocument | None:
        return await self.custom_documents.get_for_user(user_id, document_id)
