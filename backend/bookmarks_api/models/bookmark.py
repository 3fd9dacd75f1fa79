"""
Bookmarks API — Bookmark SQLAlchemy Model
===========================================

What:  ORM model representing the `bookmarks` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by SQLBookmarkStore for CRUD operations and by Alembic.

Table layout: id, title, url, description, rating.
    - id: UUID4 rendered as a 36-char string, generated by the validator
      before insert. Stored as VARCHAR so that arbitrary path segments can be
      looked up (and simply not found) on every backend.
    - rating: CHECK constraint mirrors the validator's [0, 5] range.
"""

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookmarks_api.database import Base


class Bookmark(Base):
    """
    A titled, rated reference to a web URL.

    Lifecycle:
        1. Inserted after validate_create() succeeds
        2. Partially updated in place by PATCH
        3. Deleted by DELETE; its id is never reused
    """

    __tablename__ = "bookmarks"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="UUID4 assigned on creation, immutable",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Absolute http/https URL",
    )

    # NULL means "no description"; it is never a validation failure
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Bookmark(id={self.id}, title='{self.title}', rating={self.rating})>"
