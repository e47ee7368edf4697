"""Request and response bodies for the movies API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MovieCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, description="Required movie title")
    genre: str | None = None
    year: int | None = None
    rating: float | None = None


class MovieUpdate(BaseModel):
    """Partial update body.

    Only keys present in the request end up in ``model_fields_set``; an
    explicit ``null`` for ``genre``, ``year`` or ``rating`` clears the column.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    genre: str | None = None
    year: int | None = None
    rating: float | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str | None) -> str:
        if not value:
            raise ValueError("title must not be null or empty")
        return value


class MovieOut(BaseModel):
    id: str
    title: str
    genre: str | None = None
    year: int | None = None
    rating: float | None = None
