"""Services package for business logic."""

from reading_tracker.services.document_resolver import DocumentResolver
from reading_tracker.services.document_service import (
    BookService,
    CustomDocumentService,
    MangaService,
)
from reading_tracker.services.reading_list_service import ReadingListService
from reading_tracker.services.reading_service import ReadingService
from reading_tracker.services.record_service import RecordService

__all__ = [
    "DocumentResolver",
    "BookService",
    "MangaService",
    "CustomDocumentService",
    "ReadingService",
    "RecordService",
    "ReadingListService",
]
