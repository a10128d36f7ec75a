"""Readable document models: catalog books and manga, user-owned custom documents."""

import uuid
from datetime import date

from sqlalchemy import JSON, Date, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from reading_tracker.models.base import Base, TimestampMixin, UUIDMixin


class Book(Base, UUIDMixin, TimestampMixin):
    """Catalog book."""

    __tablename__ = "books"

    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    edition: Mapped[str | None] = mapped_column(String(100), nullable=True)
    pages: Mapped[int] = mapped_column(Integer, nullable=False)
    language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    publication_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    publisher: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    genres: Mapped[list[str]] = mapped_column(JSON, default=list)

    @property
    def display_name(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<Book {self.name!r}>"


class Manga(Base, UUIDMixin, TimestampMixin):
    """Catalog manga volume."""

    __tablename__ = "mangas"

    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    volume: Mapped[int] = mapped_column(Integer, nullable=False)
    chapters: Mapped[int] = mapped_column(Integer, nullable=False)
    demography: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    genres: Mapped[list[str]] = mapped_column(JSON, default=list)
    publication_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    publisher: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def display_name(self) -> str:
        return self.title

    def __repr__(self) -> str:
        return f"<Manga {self.title!r} vol.{self.volume}>"


class CustomDocument(Base, UUIDMixin, TimestampMixin):
    """Document authored by a user; only addressable through its owner."""

    __tablename__ = "custom_documents"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    file_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    version: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (Index("idx_custom_documents_user", "user_id", "id"),)

    @property
    def display_name(self) -> str:
        return self.title

    def __repr__(self) -> str:
        return f"<CustomDocument {self.title!r} (user={self.user_id})>"
