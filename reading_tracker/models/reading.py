"""Reading, record and reading-list database models."""

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from reading_tracker.models.base import Base, TimestampMixin, UUIDMixin, utcnow

READING_TYPES = ["book", "manga", "custom_document"]
READING_STATUSES = ["ongoing", "paused", "completed"]


class Reading(Base, UUIDMixin, TimestampMixin):
    """A user's engagement with one document.

    ``document_id`` is polymorphic: it points into ``books``, ``mangas`` or the
    owner's ``custom_documents`` depending on ``reading_type``, so it carries
    no foreign key.
    """

    __tablename__ = "readings"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    document_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    document_name: Mapped[str] = mapped_column(String(500), nullable=False)
    reading_type: Mapped[str] = mapped_column(String(20), nullable=False)
    reading_status: Mapped[str] = mapped_column(String(20), nullable=False, default="ongoing")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Bumped on every record append; backs the "last_record_update" sort
    last_record_update: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "document_id", name="uq_reading_user_document"),
        CheckConstraint(
            "reading_type IN ('book', 'manga', 'custom_document')",
            name="check_reading_type",
        ),
        CheckConstraint(
            "reading_status IN ('ongoing', 'paused', 'completed')",
            name="check_reading_status",
        ),
        Index("idx_readings_user_created", "user_id", "created_at"),
        Index("idx_readings_user_type", "user_id", "reading_type"),
        Index("idx_readings_user_status_updated", "user_id", "reading_status", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Reading {self.reading_type}:{self.document_id} user={self.user_id} {self.reading_status}>"


class ReadingRecord(Base, UUIDMixin):
    """Progress entry appended to a reading. Only addressable through its reading."""

    __tablename__ = "reading_records"

    reading_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("readings.id", ondelete="CASCADE"),
        nullable=False,
    )
    progress: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (Index("idx_reading_records_reading_recorded", "reading_id", "recorded_at"),)

    def __repr__(self) -> str:
        return f"<ReadingRecord {self.progress!r} (reading={self.reading_id})>"


class ReadingList(Base, UUIDMixin, TimestampMixin):
    """Named, user-owned set of reading references."""

    __tablename__ = "reading_lists"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (Index("idx_reading_lists_user", "user_id", "id"),)

    def __repr__(self) -> str:
        return f"<ReadingList {self.name!r} (user={self.user_id})>"


class ReadingListEntry(Base):
    """Membership of a reading in a list; the composite key gives set semantics."""

    __tablename__ = "reading_list_entries"

    reading_list_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("reading_lists.id", ondelete="CASCADE"),
        primary_key=True,
    )
    reading_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("readings.id", ondelete="CASCADE"),
        primary_key=True,
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (Index("idx_reading_list_entries_reading", "reading_id"),)
