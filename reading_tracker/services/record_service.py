"""Record service: progress entries inside a reading."""

from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.core.exceptions import ForbiddenError, NotFoundError
from reading_tracker.models.reading import Reading
from reading_tracker.models.user import User
from reading_tracker.repositories.reading_repo import ReadingRepository
from reading_tracker.repositories.record_repo import RecordRepository
from reading_tracker.schemas.reading import RecordCreate, RecordResponse

logger = structlog.get_logger(__name__)


class RecordService:
    """Service for record operations.

    Records are never loaded and rewritten as a whole: each call issues one
    statement filtered by (reading id, record id), so concurrent appends to
    the same reading cannot overwrite each other.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = RecordRepository(db)
        self.reading_repo = ReadingRepository(db)

    async def add_record(self, reading_id: UUID, user: User, data: RecordCreate) -> RecordResponse:
        """Append a record to one of the user's readings.

        The ownership check is part of the match: a reading owned by someone
        else is reported as not found.
        """
        matched = await self.reading_repo.touch_for_record(reading_id, user.id)
        if not matched:
            raise NotFoundError("Reading", str(reading_id))

        record = await self.repo.append(reading_id, data.progress, data.notes)
        await self.db.commit()

        logger.info(
            "Record added",
            reading_id=str(reading_id),
            record_id=str(record.id),
            user_id=str(user.id),
        )

        return RecordResponse.model_validate(record)

    async def update_record(
        self,
        reading_id: UUID,
        record_id: UUID,
        data: RecordCreate,
    ) -> RecordResponse:
        """Overwrite progress and notes of one record, keeping id and timestamp."""
        updated = await self.repo.update_in_reading(reading_id, record_id, data.progress, data.notes)
        if not updated:
            raise NotFoundError("Record", str(record_id))

        await self.db.commit()
        record = await self.repo.get_in_reading(reading_id, record_id)

        logger.info("Record updated", reading_id=str(reading_id), record_id=str(record_id))

        return RecordResponse.model_validate(record)

    async def update_record_for_user(
        self,
        reading_id: UUID,
        record_id: UUID,
        user: User,
        data: RecordCreate,
    ) -> RecordResponse:
        """Same as :meth:`update_record` on one of the user's readings."""
        await self._get_owned(reading_id, user)
        return await self.update_record(reading_id, record_id, data)

    async def list_records(self, reading_id: UUID) -> list[RecordResponse]:
        """All records of a reading in the order they were added."""
        reading = await self.reading_repo.get_by_id(reading_id)
        if not reading:
            raise NotFoundError("Reading", str(reading_id))

        records = await self.repo.list_for_reading(reading_id)
        return [RecordResponse.model_validate(r) for r in records]

    async def list_records_for_user(self, reading_id: UUID, user: User) -> list[RecordResponse]:
        await self._get_owned(reading_id, user)

        records = await self.repo.list_for_reading(reading_id)
        return [RecordResponse.model_validate(r) for r in records]

    async def delete_record(self, reading_id: UUID, user: User, record_id: UUID) -> None:
        """Remove a record from one of the user's readings."""
        reading = await self.reading_repo.get_by_id(reading_id)
        if not reading or reading.user_id != user.id:
            raise NotFoundError("Reading", str(reading_id))

        deleted = await self.repo.delete_in_reading(reading_id, record_id)
        if not deleted:
            raise NotFoundError("Record", str(record_id))

        await self.db.commit()

        logger.info(
            "Record deleted",
            reading_id=str(reading_id),
            record_id=str(record_id),
            user_id=str(user.id),
        )

    async def _get_owned(self, reading_id: UUID, user: User) -> Reading:
        reading = await self.reading_repo.get_by_id(reading_id)
        if not reading:
            raise NotFoundError("Reading", str(reading_id))
        if reading.user_id != user.id:
            raise ForbiddenError("You do not own this reading")
        return reading
