"""Translate wire payloads into parameterized statements and rows back."""

from __future__ import annotations

import uuid
from typing import Any, Mapping

from sqlalchemy import Insert, Update, insert, update

from movies_api.models import Movie
from movies_api.schemas import MovieCreate, MovieUpdate
from movies_api.services.models import UpdatePlan

COLUMNS = ("id", "title", "genre", "year", "rating")
MUTABLE_COLUMNS = ("title", "genre", "year", "rating")


class EmptyUpdateError(ValueError):
    """Raised when an update request carries none of the mutable fields."""


def new_movie_id() -> str:
    return str(uuid.uuid4())


def insert_values(movie_id: str, payload: MovieCreate) -> dict[str, Any]:
    """Column values for a new row, in table order, absent fields as None."""

    return {
        "id": movie_id,
        "title": payload.title,
        "genre": payload.genre,
        "year": payload.year,
        "rating": payload.rating,
    }


def build_insert(movie_id: str, payload: MovieCreate) -> Insert:
    return insert(Movie).values(insert_values(movie_id, payload))


def plan_update(movie_id: str, payload: MovieUpdate) -> UpdatePlan:
    """Collect the fields present in ``payload`` into an ordered plan.

    Presence is what matters, not the value: ``{"genre": null}`` yields a
    ``("genre", None)`` assignment.
    """

    present = payload.model_fields_set
    plan = UpdatePlan(movie_id=movie_id)
    for column in MUTABLE_COLUMNS:
        if column in present:
            plan.assignments.append((column, getattr(payload, column)))
    if not plan.assignments:
        raise EmptyUpdateError("no fields")
    return plan


def build_update(plan: UpdatePlan) -> Update:
    return (
        update(Movie)
        .where(Movie.id == plan.movie_id)
        .ordered_values(*plan.assignments)
    )


def row_to_movie(row: Mapping[str, Any]) -> dict[str, Any]:
    return {column: row[column] for column in COLUMNS}
