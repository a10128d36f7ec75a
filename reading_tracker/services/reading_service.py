"""Reading service: start, query, update and delete readings."""

from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.core.exceptions import (
    DuplicateError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from reading_tracker.models.reading import Reading
from reading_tracker.models.user import User
from reading_tracker.repositories.reading_repo import ReadingRepository
from reading_tracker.repositories.record_repo import RecordRepository
from reading_tracker.schemas.common import PageRequest, PaginatedResponse, create_pagination
from reading_tracker.schemas.document import BookResponse, CustomDocumentResponse, MangaResponse
from reading_tracker.schemas.reading import (
    ReadingCreate,
    ReadingDetailResponse,
    ReadingResponse,
    ReadingSortField,
    ReadingStatus,
    ReadingType,
    RecordResponse,
)
from reading_tracker.services.document_resolver import DocumentResolver

logger = structlog.get_logger(__name__)

DOCUMENT_SCHEMAS = {
    ReadingType.BOOK: BookResponse,
    ReadingType.MANGA: MangaResponse,
    ReadingType.CUSTOM_DOCUMENT: CustomDocumentResponse,
}


class ReadingService:
    """Service for reading operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ReadingRepository(db)
        self.record_repo = RecordRepository(db)
        self.resolver = DocumentResolver(db)

    async def start_reading(self, user: User, data: ReadingCreate) -> ReadingResponse:
        """Start reading a document.

        The document must resolve in its type's scope and the user must not
        already have a reading for it.

        Raises:
            InvalidArgumentError: Unknown reading type
            NotFoundError: Document does not exist
            DuplicateError: A reading for (user, document) already exists
        """
        document_name = await self.resolver.resolve(data.reading_type, data.document_id, user.id)

        if await self.repo.exists_for_user(user.id, data.document_id):
            raise DuplicateError()

        try:
            reading = await self.repo.create(
                user_id=user.id,
                document_id=data.document_id,
                document_name=document_name,
                reading_type=data.reading_type.value,
                reading_status=data.reading_status.value,
                notes=data.notes,
            )
        except IntegrityError:
            # Lost the race against a concurrent start for the same document
            await self.db.rollback()
            raise DuplicateError()

        await self.db.commit()

        logger.info(
            "Reading started",
            reading_id=str(reading.id),
            user_id=str(user.id),
            document_id=str(data.document_id),
            reading_type=reading.reading_type,
        )

        return ReadingResponse.model_validate(reading)

    async def get_reading(self, reading_id: UUID, include_document: bool = False) -> ReadingDetailResponse:
        """Get any reading by id (administrative access)."""
        reading = await self.repo.get_by_id(reading_id)
        if not reading:
            raise NotFoundError("Reading", str(reading_id))

        return await self._detail(reading, include_document=include_document)

    async def get_reading_for_user(
        self, reading_id: UUID, user: User, include_document: bool = False
    ) -> ReadingDetailResponse:
        """Get one of the user's readings with its records, optionally with the document itself."""
        reading = await self._get_owned(reading_id, user)
        return await self._detail(reading, refresh_name=True, include_document=include_document)

    async def list_by_user(self, user: User, paging: PageRequest) -> PaginatedResponse[ReadingResponse]:
        """User's readings sorted by creation time."""
        readings, total = await self.repo.list_for_user(
            user.id,
            sort_by=ReadingSortField.CREATED_AT.value,
            ascending=paging.ascending,
            page=paging.page,
            limit=paging.limit,
        )
        return self._page(readings, total, paging)

    async def list_by_type(
        self,
        user: User,
        reading_type: ReadingType,
        sort_by: ReadingSortField,
        paging: PageRequest,
    ) -> PaginatedResponse[ReadingResponse]:
        """User's readings of one type, sorted by the selected timestamp."""
        readings, total = await self.repo.list_for_user(
            user.id,
            reading_type=reading_type.value,
            sort_by=sort_by.value,
            ascending=paging.ascending,
            page=paging.page,
            limit=paging.limit,
        )
        return self._page(readings, total, paging)

    async def list_by_status(
        self,
        user: User,
        reading_status: ReadingStatus,
        paging: PageRequest,
    ) -> PaginatedResponse[ReadingResponse]:
        """User's readings with one status, sorted by last update."""
        readings, total = await self.repo.list_for_user(
            user.id,
            reading_status=reading_status.value,
            sort_by=ReadingSortField.UPDATED_AT.value,
            ascending=paging.ascending,
            page=paging.page,
            limit=paging.limit,
        )
        return self._page(readings, total, paging)

    async def update_reading(
        self,
        reading_id: UUID,
        user: User,
        data: ReadingCreate,
    ) -> ReadingResponse:
        """Merge type, status and notes into one of the user's readings.

        Ownership is checked before the document is resolved, so a non-owner
        always gets ForbiddenError and nothing is written.
        """
        reading = await self._get_owned(reading_id, user)

        document_name = await self.resolver.resolve(data.reading_type, data.document_id, user.id)
        if data.document_id != reading.document_id:
            raise InvalidArgumentError(
                "document_id of an existing reading cannot change",
                {"document_id": str(data.document_id)},
            )

        reading = await self.repo.update(
            reading,
            reading_type=data.reading_type.value,
            reading_status=data.reading_status.value,
            notes=data.notes,
            document_name=document_name,
        )
        await self.db.commit()

        logger.info(
            "Reading updated",
            reading_id=str(reading.id),
            user_id=str(user.id),
            reading_status=reading.reading_status,
        )

        return ReadingResponse.model_validate(reading)

    async def delete_reading(self, reading_id: UUID, user: User) -> None:
        """Delete one of the user's readings, its records and list memberships."""
        await self._get_owned(reading_id, user)

        await self.repo.delete(reading_id)
        await self.db.commit()

        logger.info("Reading deleted", reading_id=str(reading_id), user_id=str(user.id))

    async def _get_owned(self, reading_id: UUID, user: User) -> Reading:
        reading = await self.repo.get_by_id(reading_id)
        if not reading:
            raise NotFoundError("Reading", str(reading_id))
        if reading.user_id != user.id:
            raise ForbiddenError("You do not own this reading")
        return reading

    async def _detail(
        self,
        reading: Reading,
        refresh_name: bool = False,
        include_document: bool = False,
    ) -> ReadingDetailResponse:
        records = await self.record_repo.list_for_reading(reading.id)
        response = ReadingDetailResponse.model_validate(reading)
        response.records = [RecordResponse.model_validate(r) for r in records]

        if refresh_name or include_document:
            try:
                document = await self.resolver.fetch(reading.reading_type, reading.document_id, reading.user_id)
            except NotFoundError:
                # Document is gone; the name captured at start is kept
                logger.debug("Reading document missing", reading_id=str(reading.id))
            else:
                if refresh_name:
                    response.document_name = document.display_name
                if include_document:
                    schema = DOCUMENT_SCHEMAS[ReadingType(reading.reading_type)]
                    response.document = schema.model_validate(document)

        return response

    @staticmethod
    def _page(readings: list[Reading], total: int, paging: PageRequest) -> PaginatedResponse[ReadingResponse]:
        return PaginatedResponse[ReadingResponse](
            data=[ReadingResponse.model_validate(r) for r in readings],
            pagination=create_pagination(paging.page, paging.limit, total),
        )
