"""SQLAlchemy ORM models.

The service persists a single ``movies`` table. Column types mirror the
schema created on startup: a fixed 36-character UUID string as primary key,
a required title and three nullable attributes.
"""

from __future__ import annotations

from sqlalchemy import CHAR, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Movie(Base):
    """A movie record identified by a server-generated UUID."""

    __tablename__ = "movies"

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # DECIMAL(3,1) on the wire is a plain JSON number
    rating: Mapped[float | None] = mapped_column(
        Numeric(3, 1, asdecimal=False),
        nullable=True,
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Movie(id={self.id}, title={self.title})"
