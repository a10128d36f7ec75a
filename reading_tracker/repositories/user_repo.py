"""User repository for database operations."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reading_tracker.models.document import CustomDocument
from reading_tracker.models.reading import Reading, ReadingList, ReadingListEntry, ReadingRecord
from reading_tracker.models.user import RefreshToken, User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str | uuid.UUID) -> User | None:
        """Get user by ID."""
        if isinstance(user_id, str):
            user_id = uuid.UUID(user_id)

        stmt = select(User).where(User.id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        stmt = select(User).where(User.email == email.lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username (case-insensitive)."""
        stmt = select(User).where(User.username == username.lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_login(self, identifier: str) -> User | None:
        """Get user by email when the identifier contains ``@``, else by username."""
        if "@" in identifier:
            return await self.get_by_email(identifier)
        return await self.get_by_username(identifier)

    async def create(
        self,
        email: str,
        username: str,
        display_name: str,
        password_hash: str,
        roles: list[str] | None = None,
    ) -> User:
        """Create a new user."""
        user = User(
            email=email.lower(),
            username=username.lower(),
            display_name=display_name,
            password_hash=password_hash,
            roles=roles or ["user"],
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user: User, **kwargs) -> User:
        """Update user fields."""
        for key, value in kwargs.items():
            if hasattr(user, key):
                setattr(user, key, value)

        user.updated_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def delete(self, user_id: uuid.UUID) -> bool:
        """Delete a user with everything the user owns.

        Readings, their records, reading lists, custom documents and refresh
        tokens go in the same transaction. Returns True if the user existed.
        """
        owned_readings = select(Reading.id).where(Reading.user_id == user_id)
        owned_lists = select(ReadingList.id).where(ReadingList.user_id == user_id)

        await self.db.execute(
            delete(ReadingListEntry).where(
                or_(
                    ReadingListEntry.reading_list_id.in_(owned_lists),
                    ReadingListEntry.reading_id.in_(owned_readings),
                )
            )
        )
        await self.db.execute(delete(ReadingList).where(ReadingList.user_id == user_id))
        await self.db.execute(delete(ReadingRecord).where(ReadingRecord.reading_id.in_(owned_readings)))
        await self.db.execute(delete(Reading).where(Reading.user_id == user_id))
        await self.db.execute(delete(CustomDocument).where(CustomDocument.user_id == user_id))
        await self.db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))

        result = await self.db.execute(delete(User).where(User.id == user_id))
        return result.rowcount > 0

    async def update_last_login(self, user_id: uuid.UUID) -> None:
        """Stamp the user's last login time with a single targeted update."""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(last_login_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(stmt)

    # Refresh Token operations
    async def create_refresh_token(
        self,
        user_id: uuid.UUID,
        token_hash: str,
        expires_at: datetime,
    ) -> RefreshToken:
        """Create a new refresh token."""
        token = RefreshToken(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        self.db.add(token)
        await self.db.flush()
        return token

    async def get_refresh_token(self, token_hash: str) -> RefreshToken | None:
        """Get refresh token by hash."""
        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def revoke_refresh_token(self, token: RefreshToken) -> None:
        """Revoke a refresh token."""
        token.revoked_at = datetime.now(UTC)
        await self.db.flush()

    async def revoke_all_refresh_tokens(self, user_id: uuid.UUID) -> int:
        """Revoke all refresh tokens for a user. Returns count revoked."""
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .where(RefreshToken.revoked_at.is_(None))
        )
        result = await self.db.execute(stmt)
        tokens = result.scalars().all()

        now = datetime.now(UTC)
        for token in tokens:
            token.revoked_at = now

        await self.db.flush()
        return len(tokens)
