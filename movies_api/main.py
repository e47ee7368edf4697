"""FastAPI entrypoint wiring the movie repository to the HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from movies_api.core.config import get_settings
from movies_api.db import Database, MovieNotFound, MovieRepository, bootstrap
from movies_api.schemas import MovieCreate, MovieOut, MovieUpdate
from movies_api.services.mapper import EmptyUpdateError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure database and table exist before serving, close the pool after."""

    db = Database(bootstrap(get_settings()))
    app.state.repository = MovieRepository(db)
    try:
        yield
    finally:
        db.dispose()


app = FastAPI(title="Movies API", lifespan=lifespan)


def get_repository(request: Request) -> MovieRepository:
    return request.app.state.repository


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid request")
    return _error(status.HTTP_400_BAD_REQUEST, f"{location}: {message}" if location else message)


@app.exception_handler(StarletteHTTPException)
async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(MovieNotFound)
async def _not_found(_: Request, exc: MovieNotFound) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "not found")


@app.exception_handler(EmptyUpdateError)
async def _empty_update(_: Request, exc: EmptyUpdateError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(SQLAlchemyError)
async def _store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.post("/movies", response_model=MovieOut, status_code=status.HTTP_201_CREATED)
def create_movie(
    payload: MovieCreate,
    repo: MovieRepository = Depends(get_repository),
) -> MovieOut:
    """Persist a new movie under a freshly generated id."""

    return MovieOut(**repo.create(payload))


@app.get("/movies", response_model=list[MovieOut])
def list_movies(repo: MovieRepository = Depends(get_repository)) -> list[MovieOut]:
    return [MovieOut(**movie) for movie in repo.list_all()]


@app.get("/movies/{movie_id}", response_model=MovieOut)
def get_movie(movie_id: str, repo: MovieRepository = Depends(get_repository)) -> MovieOut:
    return MovieOut(**repo.get(movie_id))


@app.put("/movies/{movie_id}", response_model=MovieOut)
def update_movie(
    movie_id: str,
    payload: MovieUpdate | None = None,
    repo: MovieRepository = Depends(get_repository),
) -> MovieOut:
    """Change only the fields present in the body and return the full record."""

    return MovieOut(**repo.update(movie_id, payload or MovieUpdate()))


@app.delete("/movies/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movie(movie_id: str, repo: MovieRepository = Depends(get_repository)) -> Response:
    repo.delete(movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
