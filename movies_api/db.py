"""Connection pool, schema bootstrap and the movie repository."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, delete, select, text
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool
from sqlalchemy.sql.expression import Executable

from movies_api.core.config import Settings
from movies_api.models import Base, Movie
from movies_api.schemas import MovieCreate, MovieUpdate
from movies_api.services.mapper import (
    build_insert,
    build_update,
    new_movie_id,
    plan_update,
    row_to_movie,
)

logger = logging.getLogger(__name__)


class MovieNotFound(LookupError):
    """Raised when no row matches the requested movie id."""


def create_pool_engine(settings: Settings) -> Engine:
    """Engine backed by a fixed-size pool; no overflow connections."""

    return create_engine(
        settings.database_url(),
        poolclass=QueuePool,
        pool_size=settings.pool_size,
        max_overflow=0,
        pool_timeout=settings.pool_timeout,
        pool_pre_ping=True,
    )


def ensure_database(settings: Settings) -> None:
    """Create the target database if the account is allowed to.

    Failing here is tolerated: the database may already exist and the user
    may simply lack the CREATE privilege.
    """

    engine = create_engine(settings.server_url())
    try:
        name = engine.dialect.identifier_preparer.quote(settings.mysql_database)
        with engine.begin() as conn:
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS {name}"))
    except SQLAlchemyError as exc:
        logger.warning("Could not create database %s, continuing: %s", settings.mysql_database, exc)
    finally:
        engine.dispose()


def init_models(engine: Engine) -> None:
    """Create tables if they do not exist."""

    Base.metadata.create_all(bind=engine)


def bootstrap(settings: Settings) -> Engine:
    """Prepare storage before serving: database (best effort), pool, table."""

    ensure_database(settings)
    engine = create_pool_engine(settings)
    try:
        init_models(engine)
    except SQLAlchemyError:
        engine.dispose()
        raise
    logger.info("Database %s and table %s ready", settings.mysql_database, Movie.__tablename__)
    return engine


class Database:
    """Acquire-run-release access to the pool, one auto-committed call each."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def fetch_all(self, statement: Executable) -> list[RowMapping]:
        with self.engine.begin() as conn:
            return list(conn.execute(statement).mappings())

    def fetch_one(self, statement: Executable) -> RowMapping | None:
        with self.engine.begin() as conn:
            return conn.execute(statement).mappings().first()

    def execute(self, statement: Executable) -> int:
        """Run a write statement and return the number of matched rows."""

        with self.engine.begin() as conn:
            return conn.execute(statement).rowcount

    def dispose(self) -> None:
        self.engine.dispose()


class MovieRepository:
    """CRUD helpers for movie records."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create(self, payload: MovieCreate) -> dict[str, Any]:
        movie_id = new_movie_id()
        self.db.execute(build_insert(movie_id, payload))
        return self.get(movie_id)

    def list_all(self) -> list[dict[str, Any]]:
        query = select(Movie.__table__).order_by(Movie.title)
        return [row_to_movie(row) for row in self.db.fetch_all(query)]

    def get(self, movie_id: str) -> dict[str, Any]:
        query = select(Movie.__table__).where(Movie.id == movie_id)
        row = self.db.fetch_one(query)
        if row is None:
            raise MovieNotFound(movie_id)
        return row_to_movie(row)

    def update(self, movie_id: str, payload: MovieUpdate) -> dict[str, Any]:
        plan = plan_update(movie_id, payload)
        if self.db.execute(build_update(plan)) == 0:
            raise MovieNotFound(movie_id)
        return self.get(movie_id)

    def delete(self, movie_id: str) -> None:
        if self.db.execute(delete(Movie).where(Movie.id == movie_id)) == 0:
            raise MovieNotFound(movie_id)
