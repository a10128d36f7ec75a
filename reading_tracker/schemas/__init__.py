"""Pydantic schemas package."""

from reading_tracker.schemas.common import (
    Pagination,
    PaginatedResponse,
    PageRequest,
    MessageResponse,
    ErrorResponse,
    ErrorDetail,
    create_pagination,
    resolve_page,
)
from reading_tracker.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RefreshRequest,
)
from reading_tracker.schemas.user import (
    AdminUserUpdate,
    UserResponse,
    UserUpdate,
)
from reading_tracker.schemas.document import (
    BookCreate,
    BookUpdate,
    BookResponse,
    MangaCreate,
    MangaUpdate,
    MangaResponse,
    CustomDocumentCreate,
    CustomDocumentUpdate,
    CustomDocumentResponse,
)
from reading_tracker.schemas.reading import (
    ReadingType,
    ReadingStatus,
    ReadingSortField,
    SortOrder,
    ReadingCreate,
    RecordCreate,
    RecordResponse,
    ReadingResponse,
    ReadingDetailResponse,
)
from reading_tracker.schemas.reading_list import (
    ReadingListCreate,
    ReadingIdsRequest,
    ReadingListResponse,
    ReadingListChangeResponse,
)

__all__ = [
    # Common
    "Pagination",
    "PaginatedResponse",
    "PageRequest",
    "MessageResponse",
    "ErrorResponse",
    "ErrorDetail",
    "create_pagination",
    "resolve_page",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "RefreshRequest",
    # User
    "AdminUserUpdate",
    "UserResponse",
    "UserUpdate",
    # Documents
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "MangaCreate",
    "MangaUpdate",
    "MangaResponse",
    "CustomDocumentCreate",
    "CustomDocumentUpdate",
    "CustomDocumentResponse",
    # Readings
    "ReadingType",
    "ReadingStatus",
    "ReadingSortField",
    "SortOrder",
    "ReadingCreate",
    "RecordCreate",
    "RecordResponse",
    "ReadingResponse",
    "ReadingDetailResponse",
    # Reading lists
    "ReadingListCreate",
    "ReadingIdsRequest",
    "ReadingListResponse",
    "ReadingListChangeResponse",
]
