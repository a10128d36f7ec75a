"""Repository package for data access."""

from reading_tracker.repositories.document_repo import (
    BookRepository,
    CustomDocumentRepository,
    MangaRepository,
)
from reading_tracker.repositories.reading_list_repo import ReadingListRepository
from reading_tracker.repositories.reading_repo import ReadingRepository
from reading_tracker.repositories.record_repo import RecordRepository
from reading_tracker.repositories.user_repo import UserRepository

__all__ = [
    "UserRepository",
    "BookRepository",
    "MangaRepository",
    "CustomDocumentRepository",
    "ReadingRepository",
    "RecordRepository",
    "ReadingListRepository",
]
