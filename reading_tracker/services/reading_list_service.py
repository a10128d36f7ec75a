"""Reading list service."""

from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.core.exceptions import NotFoundError
from reading_tracker.models.reading import ReadingList
from reading_tracker.models.user import User
from reading_tracker.repositories.reading_list_repo import ReadingListRepository
from reading_tracker.schemas.reading_list import (
    ReadingListChangeResponse,
    ReadingListCreate,
    ReadingListResponse,
)

logger = structlog.get_logger(__name__)

NO_CHANGES = "No changes"


class ReadingListService:
    """Service for reading list operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ReadingListRepository(db)

    async def get_lists(self, user: User) -> list[ReadingListResponse]:
        """All of the user's lists; an empty result is not an error."""
        lists = await self.repo.list_for_user(user.id)
        members = await self.repo.get_reading_ids([rl.id for rl in lists])
        return [self._to_response(rl, members.get(rl.id, [])) for rl in lists]

    async def get_list(self, list_id: UUID, user: User) -> ReadingListResponse:
        reading_list = await self._get_owned(list_id, user)
        members = await self.repo.get_reading_ids([reading_list.id])
        return self._to_response(reading_list, members.get(reading_list.id, []))

    async def create_list(self, user: User, data: ReadingListCreate) -> ReadingListResponse:
        reading_list = await self.repo.create(user.id, data.name, data.description)
        await self.db.commit()

        logger.info("Reading list created", list_id=str(reading_list.id), user_id=str(user.id))

        return self._to_response(reading_list, [])

    async def add_readings(
        self,
        list_id: UUID,
        user: User,
        reading_ids: list[UUID],
    ) -> ReadingListChangeResponse:
        """Add readings to a list with set semantics.

        Every id must name one of the user's readings. Ids already in the list
        are skipped, so repeating a call changes nothing.
        """
        await self._get_owned(list_id, user)

        requested = list(dict.fromkeys(reading_ids))
        owned = await self.repo.find_owned_readings(user.id, requested)
        unknown = [reading_id for reading_id in requested if reading_id not in owned]
        if unknown:
            raise NotFoundError("Reading", str(unknown[0]))

        added = await self.repo.add_entries(list_id, requested)
        if added:
            await self.repo.touch(list_id)
        await self.db.commit()

        logger.info("Readings added to list", list_id=str(list_id), requested=len(requested), added=added)

        return ReadingListChangeResponse(
            requested=len(requested),
            changed=added,
            message="Readings added" if added else NO_CHANGES,
        )

    async def remove_readings(
        self,
        list_id: UUID,
        user: User,
        reading_ids: list[UUID],
    ) -> ReadingListChangeResponse:
        """Remove readings from a list; ids not in the list are ignored."""
        await self._get_owned(list_id, user)

        requested = list(dict.fromkeys(reading_ids))
        removed = await self.repo.remove_entries(list_id, requested)
        if removed:
            await self.repo.touch(list_id)
        await self.db.commit()

        logger.info(
            "Readings removed from list",
            list_id=str(list_id),
            requested=len(requested),
            removed=removed,
        )

        return ReadingListChangeResponse(
            requested=len(requested),
            changed=removed,
            message="Readings removed" if removed else NO_CHANGES,
        )

    async def update_list(
        self,
        list_id: UUID,
        user: User,
        data: ReadingListCreate,
    ) -> ReadingListResponse:
        """Overwrite name and description."""
        reading_list = await self._get_owned(list_id, user)
        reading_list = await self.repo.update(reading_list, data.name, data.description)
        members = await self.repo.get_reading_ids([reading_list.id])
        await self.db.commit()

        logger.info("Reading list updated", list_id=str(list_id), user_id=str(user.id))

        return self._to_response(reading_list, members.get(reading_list.id, []))

    async def delete_list(self, list_id: UUID, user: User) -> None:
        deleted = await self.repo.delete(user.id, list_id)
        if not deleted:
            raise NotFoundError("Reading list", str(list_id))

        await self.db.commit()

        logger.info("Reading list deleted", list_id=str(list_id), user_id=str(user.id))

    async def _get_owned(self, list_id: UUID, user: User) -> ReadingList:
        # Lists are scoped by owner, so someone else's list reads as absent
        reading_list = await self.repo.get_for_user(user.id, list_id)
        if not reading_list:
            raise NotFoundError("Reading list", str(list_id))
        return reading_list

    @staticmethod
    def _to_response(reading_list: ReadingList, reading_ids: list[UUID]) -> ReadingListResponse:
        return ReadingListResponse(
            id=reading_list.id,
            name=reading_list.name,
            description=reading_list.description,
            reading_ids=reading_ids,
            created_at=reading_list.created_at,
            updated_at=reading_list.updated_at,
        )
