"""Unit tests for request schemas and paging helpers."""

import uuid

import pytest
from pydantic import ValidationError

from reading_tracker.config import settings
from reading_tracker.core.exceptions import InvalidArgumentError
from reading_tracker.schemas.common import create_pagination, resolve_page
from reading_tracker.schemas.document import CustomDocumentUpdate
from reading_tracker.schemas.reading import (
    ReadingCreate,
    ReadingStatus,
    ReadingType,
    RecordCreate,
)
from reading_tracker.schemas.reading_list import ReadingIdsRequest
from reading_tracker.schemas.user import AdminUserUpdate


class TestReadingCreate:
    """Start-reading request validation."""

    def test_defaults(self):
        data = ReadingCreate(reading_type="book", document_id=uuid.uuid4())

        assert data.reading_type is ReadingType.BOOK
        assert data.reading_status is ReadingStatus.ONGOING
        assert data.notes == ""

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            ReadingCreate(reading_type="comic", document_id=uuid.uuid4())

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            ReadingCreate(reading_type="manga", document_id=uuid.uuid4(), reading_status="dropped")

    def test_document_id_must_be_uuid(self):
        with pytest.raises(ValidationError):
            ReadingCreate(reading_type="book", document_id="B123")


class TestRecordCreate:
    def test_progress_required(self):
        with pytest.raises(ValidationError):
            RecordCreate(progress="")

    def test_notes_optional(self):
        assert RecordCreate(progress="ch.3").notes == ""


def test_reading_ids_request_needs_at_least_one_id():
    with pytest.raises(ValidationError):
        ReadingIdsRequest(reading_ids=[])


def test_custom_document_update_tracks_provided_fields():
    """Only fields present in the body end up in the partial update."""
    data = CustomDocumentUpdate(title="New title")

    assert data.model_dump(exclude_unset=True) == {"title": "New title"}


class TestResolvePage:
    """Paging normalization."""

    @pytest.mark.parametrize(
        ("page", "limit"),
        [(None, None), (0, 0), (-2, -5)],
    )
    def test_missing_or_non_positive_values_use_defaults(self, page, limit):
        paging = resolve_page(page, limit)

        assert paging.page == 1
        assert paging.limit == 10

    def test_offset_beyond_sql_integer_is_invalid(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            resolve_page(10**12, 10**12)

        assert exc_info.value.status_code == 400

    def test_largest_representable_window_is_accepted(self):
        paging = resolve_page(2, 2**63 - 1)

        assert paging.limit == 2**63 - 1

    def test_limit_is_unbounded_by_default(self):
        assert settings.max_page_size is None
        assert resolve_page(1, 5000).limit == 5000

    def test_limit_capped_when_configured(self, monkeypatch):
        monkeypatch.setattr(settings, "max_page_size", 50)

        assert resolve_page(1, 5000).limit == 50

    def test_sort_direction(self):
        assert resolve_page(1, 10).ascending is True
        assert resolve_page(1, 10, "asc").ascending is True
        assert resolve_page(1, 10, "desc").ascending is False


class TestCreatePagination:
    def test_fifteen_items_make_two_pages(self):
        first = create_pagination(page=1, limit=10, total=15)
        second = create_pagination(page=2, limit=10, total=15)

        assert first.total_pages == 2
        assert first.has_next is True
        assert first.has_prev is False
        assert second.has_next is False
        assert second.has_prev is True

    def test_empty(self):
        pagination = create_pagination(page=1, limit=10, total=0)

        assert pagination.total_pages == 0
        assert pagination.has_next is False


class TestAdminUserUpdate:
    def test_only_given_fields_are_set(self):
        data = AdminUserUpdate(status="suspended")

        assert data.model_dump(exclude_unset=True) == {"status": "suspended"}

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            AdminUserUpdate(status="deleted")

    def test_empty_display_name_is_rejected(self):
        with pytest.raises(ValidationError):
            AdminUserUpdate(display_name="")
