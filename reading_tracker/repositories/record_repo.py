"""Record repository: targeted statements against one reading's records."""

import uuid

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.models.reading import ReadingRecord


class RecordRepository:
    """Repository for ReadingRecord operations.

    Every statement is filtered by the parent reading id plus the record id,
    so a call can only ever touch records of the reading it names.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(
        self,
        reading_id: uuid.UUID,
        progress: str,
        notes: str = "",
    ) -> ReadingRecord:
        """Insert a new record under the reading."""
        record = ReadingRecord(reading_id=reading_id, progress=progress, notes=notes)
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    async def get_in_reading(
        self,
        reading_id: uuid.UUID,
        record_id: uuid.UUID,
    ) -> ReadingRecord | None:
        stmt = (
            select(ReadingRecord)
            .where(and_(ReadingRecord.reading_id == reading_id, ReadingRecord.id == record_id))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_reading(self, reading_id: uuid.UUID) -> list[ReadingRecord]:
        """Records of a reading in insertion order."""
        stmt = (
            select(ReadingRecord)
            .where(ReadingRecord.reading_id == reading_id)
            .order_by(ReadingRecord.recorded_at.asc(), ReadingRecord.id.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update_in_reading(
        self,
        reading_id: uuid.UUID,
        record_id: uuid.UUID,
        progress: str,
        notes: str,
    ) -> int:
        """Overwrite progress and notes of one record. Returns rows matched."""
        stmt = (
            update(ReadingRecord)
            .where(and_(ReadingRecord.reading_id == reading_id, ReadingRecord.id == record_id))
            .values(progress=progress, notes=notes)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def delete_in_reading(self, reading_id: uuid.UUID, record_id: uuid.UUID) -> int:
        """Remove one record. Returns rows removed."""
        stmt = delete(ReadingRecord).where(
            and_(ReadingRecord.reading_id == reading_id, ReadingRecord.id == record_id)
        )
        result = await self.db.execute(stmt)
        return result.rowcount
