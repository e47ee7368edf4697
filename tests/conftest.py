import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from movies_api.core.config import get_settings
from movies_api.db import Database, MovieRepository, init_models
from movies_api.main import app, get_repository


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    monkeypatch.setenv("MYSQL_HOST", "db.test")
    monkeypatch.setenv("MYSQL_USER", "movies")
    monkeypatch.setenv("MYSQL_PASSWORD", "secret")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def engine():
    # One shared in-memory connection stands in for the MySQL pool
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    init_models(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    return MovieRepository(Database(engine))


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()
