"""Reading repository for database operations."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.models.reading import Reading, ReadingListEntry, ReadingRecord

SORTABLE_COLUMNS = {
    "created_at": Reading.created_at,
    "updated_at": Reading.updated_at,
    "last_record_update": Reading.last_record_update,
}


class ReadingRepository:
    """Repository for Reading database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        user_id: uuid.UUID,
        document_id: uuid.UUID,
        document_name: str,
        reading_type: str,
        reading_status: str = "ongoing",
        notes: str = "",
    ) -> Reading:
        """Insert a reading. Raises IntegrityError when (user, document) is taken."""
        reading = Reading(
            user_id=user_id,
            document_id=document_id,
            document_name=document_name,
            reading_type=reading_type,
            reading_status=reading_status,
            notes=notes,
        )
        self.db.add(reading)
        await self.db.flush()
        await self.db.refresh(reading)
        return reading

    async def get_by_id(self, reading_id: uuid.UUID) -> Reading | None:
        """Get reading by ID, reloading any stale identity-map copy."""
        stmt = (
            select(Reading)
            .where(Reading.id == reading_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_for_user(self, user_id: uuid.UUID, document_id: uuid.UUID) -> bool:
        """Check whether the user already has a reading for the document."""
        stmt = select(Reading.id).where(
            and_(
                Reading.user_id == user_id,
                Reading.document_id == document_id,
            )
        )
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_for_user(
        self,
        user_id: uuid.UUID,
        reading_type: str | None = None,
        reading_status: str | None = None,
        sort_by: str = "created_at",
        ascending: bool = True,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Reading], int]:
        """List a user's readings with optional type/status filters.

        Args:
            user_id: Owner of the readings
            reading_type: Equality filter on the reading type
            reading_status: Equality filter on the status
            sort_by: One of ``created_at``, ``updated_at``, ``last_record_update``
            ascending: Chronological order when True, reverse otherwise
            page: Page number (1-indexed)
            limit: Items per page

        Returns:
            Tuple of (readings list, total count)
        """
        conditions = [Reading.user_id == user_id]
        if reading_type:
            conditions.append(Reading.reading_type == reading_type)
        if reading_status:
            conditions.append(Reading.reading_status == reading_status)

        count_stmt = select(func.count(Reading.id)).where(and_(*conditions))
        total = (await self.db.execute(count_stmt)).scalar_one()

        sort_column = SORTABLE_COLUMNS.get(sort_by, Reading.created_at)
        # id breaks ties so consecutive pages never overlap
        if ascending:
            order = (sort_column.asc(), Reading.id.asc())
        else:
            order = (sort_column.desc(), Reading.id.desc())

        stmt = (
            select(Reading)
            .where(and_(*conditions))
            .order_by(*order)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def update(self, reading: Reading, **kwargs) -> Reading:
        """Update reading fields."""
        for key, value in kwargs.items():
            if hasattr(reading, key):
                setattr(reading, key, value)

        reading.updated_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(reading)
        return reading

    async def touch_for_record(self, reading_id: uuid.UUID, user_id: uuid.UUID) -> int:
        """Bump record timestamps on the reading matching (id, owner).

        Returns the number of matched readings, 0 when the reading is absent or
        belongs to someone else.
        """
        now = datetime.now(UTC)
        stmt = (
            update(Reading)
            .where(and_(Reading.id == reading_id, Reading.user_id == user_id))
            .values(last_record_update=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def delete(self, reading_id: uuid.UUID) -> None:
        """Delete a reading together with its records and list memberships."""
        await self.db.execute(
            delete(ReadingListEntry).where(ReadingListEntry.reading_id == reading_id)
        )
        await self.db.execute(
            delete(ReadingRecord).where(ReadingRecord.reading_id == reading_id)
        )
        await self.db.execute(delete(Reading).where(Reading.id == reading_id))
