"""Reading list repository for database operations."""

import uuid
from collections import defaultdict
from datetime import UTC, datetime

from sqlalchemy import and_, delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.models.reading import Reading, ReadingList, ReadingListEntry

# INSERT ... ON CONFLICT DO NOTHING per supported backend
_DIALECT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class ReadingListRepository:
    """Repository for ReadingList and its reading-id set."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        user_id: uuid.UUID,
        name: str,
        description: str = "",
    ) -> ReadingList:
        """Create an empty reading list."""
        reading_list = ReadingList(user_id=user_id, name=name, description=description)
        self.db.add(reading_list)
        await self.db.flush()
        await self.db.refresh(reading_list)
        return reading_list

    async def get_for_user(
        self,
        user_id: uuid.UUID,
        list_id: uuid.UUID,
    ) -> ReadingList | None:
        """Get a list by (owner, id)."""
        stmt = (
            select(ReadingList)
            .where(and_(ReadingList.user_id == user_id, ReadingList.id == list_id))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: uuid.UUID) -> list[ReadingList]:
        """All lists of the user, oldest first."""
        stmt = (
            select(ReadingList)
            .where(ReadingList.user_id == user_id)
            .order_by(ReadingList.created_at.asc(), ReadingList.id.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_reading_ids(
        self,
        list_ids: list[uuid.UUID],
    ) -> dict[uuid.UUID, list[uuid.UUID]]:
        """Map each list id to its member reading ids, in insertion order."""
        members: dict[uuid.UUID, list[uuid.UUID]] = defaultdict(list)
        if not list_ids:
            return members

        stmt = (
            select(ReadingListEntry.reading_list_id, ReadingListEntry.reading_id)
            .where(ReadingListEntry.reading_list_id.in_(list_ids))
            .order_by(ReadingListEntry.added_at.asc(), ReadingListEntry.reading_id.asc())
        )
        result = await self.db.execute(stmt)
        for list_id, reading_id in result.all():
            members[list_id].append(reading_id)
        return members

    async def find_owned_readings(
        self,
        user_id: uuid.UUID,
        reading_ids: list[uuid.UUID],
    ) -> set[uuid.UUID]:
        """Subset of ``reading_ids`` that exist and belong to the user."""
        stmt = select(Reading.id).where(
            and_(Reading.user_id == user_id, Reading.id.in_(reading_ids))
        )
        result = await self.db.execute(stmt)
        return set(result.scalars().all())

    async def add_entries(
        self,
        list_id: uuid.UUID,
        reading_ids: list[uuid.UUID],
    ) -> int:
        """Add reading ids not already in the list. Returns how many were added.

        Present ids are skipped by the insert itself, so concurrent adds of the
        same id count it once.
        """
        if not reading_ids:
            return 0

        insert = _DIALECT_INSERTS[self.db.get_bind().dialect.name]
        now = datetime.now(UTC)
        stmt = (
            insert(ReadingListEntry)
            .values(
                [
                    {"reading_list_id": list_id, "reading_id": reading_id, "added_at": now}
                    for reading_id in reading_ids
                ]
            )
            .on_conflict_do_nothing(index_elements=["reading_list_id", "reading_id"])
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def remove_entries(
        self,
        list_id: uuid.UUID,
        reading_ids: list[uuid.UUID],
    ) -> int:
        """Remove the given reading ids from the list. Returns how many were present."""
        stmt = delete(ReadingListEntry).where(
            and_(
                ReadingListEntry.reading_list_id == list_id,
                ReadingListEntry.reading_id.in_(reading_ids),
            )
        )
        result = await self.db.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

    async def touch(self, list_id: uuid.UUID) -> None:
        """Bump the list's update timestamp."""
        stmt = (
            update(ReadingList)
            .where(ReadingList.id == list_id)
            .values(updated_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(stmt)

    async def update(self, reading_list: ReadingList, name: str, description: str) -> ReadingList:
        """Overwrite name and description."""
        reading_list.name = name
        reading_list.description = description
        reading_list.updated_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(reading_list)
        return reading_list

    async def delete(self, user_id: uuid.UUID, list_id: uuid.UUID) -> int:
        """Delete a list and its entries. Returns lists removed."""
        owned = and_(ReadingList.user_id == user_id, ReadingList.id == list_id)

        await self.db.execute(
            delete(ReadingListEntry)
            .where(ReadingListEntry.reading_list_id.in_(select(ReadingList.id).where(owned)))
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(ReadingList).where(owned).execution_options(synchronize_session=False)
        )
        return result.rowcount
