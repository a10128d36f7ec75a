"""Pytest configuration and fixtures."""

import os

# Must be set before the application settings are first imported
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from reading_tracker.core.security import create_access_token, hash_password  # noqa: E402
from reading_tracker.db.session import get_db  # noqa: E402
from reading_tracker.main import app  # noqa: E402
from reading_tracker.models import Base, Book, CustomDocument, Manga, User  # noqa: E402

# PostgreSQL when provided, otherwise a throw-away SQLite file per test
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

TEST_PASSWORD = "testpassword123"


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Create test database engine."""
    if TEST_DATABASE_URL:
        engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool, echo=False)
    else:
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            poolclass=NullPool,
            connect_args={"timeout": 30},
            echo=False,
        )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting test data."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Test HTTP client; every request gets its own session, as in production."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


async def _create_user(
    db_session: AsyncSession,
    username: str,
    roles: list[str] | None = None,
) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        display_name=username.title(),
        password_hash=hash_password(TEST_PASSWORD),
        roles=roles or ["user"],
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _headers_for(user: User) -> dict[str, str]:
    token = create_access_token(subject=str(user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    return await _create_user(db_session, "testuser")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second regular user, for ownership checks."""
    return await _create_user(db_session, "otheruser")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "adminuser", roles=["user", "admin"])


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    """Create authentication headers for test user."""
    return _headers_for(test_user)


@pytest_asyncio.fixture
async def other_auth_headers(other_user: User) -> dict[str, str]:
    return _headers_for(other_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict[str, str]:
    return _headers_for(admin_user)


@pytest_asyncio.fixture
async def book(db_session: AsyncSession) -> Book:
    book = Book(
        name="Dune",
        author="Frank Herbert",
        isbn="9780441172719",
        pages=412,
        language="en",
        genres=["science-fiction"],
    )
    db_session.add(book)
    await db_session.commit()
    await db_session.refresh(book)
    return book


@pytest_asyncio.fixture
async def manga(db_session: AsyncSession) -> Manga:
    manga = Manga(
        title="Vinland Saga",
        author="Makoto Yukimura",
        volume=1,
        chapters=8,
        demography="seinen",
        genres=["historical"],
    )
    db_session.add(manga)
    await db_session.commit()
    await db_session.refresh(manga)
    return manga


@pytest_asyncio.fixture
async def custom_document(db_session: AsyncSession, test_user: User) -> CustomDocument:
    document = CustomDocument(
        user_id=test_user.id,
        title="Thesis draft",
        author="Test User",
        description="Chapter two",
        tags=["research"],
    )
    db_session.add(document)
    await db_session.commit()
    await db_session.refresh(document)
    return document
