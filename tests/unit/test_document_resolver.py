"""Unit tests for polymorphic document resolution."""

import uuid

import pytest

from reading_tracker.core.exceptions import InvalidArgumentError, NotFoundError
from reading_tracker.schemas.reading import ReadingType
from reading_tracker.services.document_resolver import DocumentResolver


@pytest.mark.asyncio
async def test_resolves_book_name(db_session, book, test_user):
    name = await DocumentResolver(db_session).resolve(ReadingType.BOOK, book.id, test_user.id)

    assert name == "Dune"


@pytest.mark.asyncio
async def test_resolves_manga_title_from_plain_tag(db_session, manga, test_user):
    name = await DocumentResolver(db_session).resolve("manga", manga.id, test_user.id)

    assert name == "Vinland Saga"


@pytest.mark.asyncio
async def test_resolves_own_custom_document(db_session, custom_document, test_user):
    name = await DocumentResolver(db_session).resolve(
        ReadingType.CUSTOM_DOCUMENT, custom_document.id, test_user.id
    )

    assert name == "Thesis draft"


@pytest.mark.asyncio
async def test_other_users_custom_document_is_not_found(db_session, custom_document, other_user):
    with pytest.raises(NotFoundError):
        await DocumentResolver(db_session).resolve(
            ReadingType.CUSTOM_DOCUMENT, custom_document.id, other_user.id
        )


@pytest.mark.asyncio
async def test_ids_are_scoped_by_type(db_session, book, test_user):
    """A book id does not resolve as a manga."""
    with pytest.raises(NotFoundError):
        await DocumentResolver(db_session).resolve(ReadingType.MANGA, book.id, test_user.id)


@pytest.mark.asyncio
async def test_unknown_type_is_invalid_argument(db_session, test_user):
    with pytest.raises(InvalidArgumentError) as exc_info:
        await DocumentResolver(db_session).resolve("comic", uuid.uuid4(), test_user.id)

    assert exc_info.value.error_message == "invalid reading type"
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_fetch_returns_the_document(db_session, manga, test_user):
    document = await DocumentResolver(db_session).fetch(ReadingType.MANGA, manga.id, test_user.id)

    assert document.id == manga.id
    assert document.demography == "seinen"
