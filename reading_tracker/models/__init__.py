"""SQLAlchemy models package."""

from reading_tracker.models.base import Base
from reading_tracker.models.document import Book, CustomDocument, Manga
from reading_tracker.models.reading import (
    READING_STATUSES,
    READING_TYPES,
    Reading,
    ReadingList,
    ReadingListEntry,
    ReadingRecord,
)
from reading_tracker.models.user import RefreshToken, User

__all__ = [
    "Base",
    "User",
    "RefreshToken",
    "Book",
    "Manga",
    "CustomDocument",
    "Reading",
    "ReadingRecord",
    "ReadingList",
    "ReadingListEntry",
    "READING_TYPES",
    "READING_STATUSES",
]
