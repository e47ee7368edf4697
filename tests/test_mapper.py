import uuid

import pytest
from sqlalchemy.dialects import sqlite

from movies_api.schemas import MovieCreate, MovieUpdate
from movies_api.services import mapper
from movies_api.services.mapper import EmptyUpdateError


def _compile(statement):
    compiled = statement.compile(dialect=sqlite.dialect())
    names = list(compiled.positiontup)
    return str(compiled), names, [compiled.params[name] for name in names]


def test_new_movie_id_is_uuid4_text():
    movie_id = mapper.new_movie_id()
    assert len(movie_id) == 36
    assert uuid.UUID(movie_id).version == 4
    assert mapper.new_movie_id() != movie_id


def test_insert_values_fill_absent_fields_with_none():
    values = mapper.insert_values("abc", MovieCreate(title="Dune", year=2021))
    assert list(values) == ["id", "title", "genre", "year", "rating"]
    assert values == {"id": "abc", "title": "Dune", "genre": None, "year": 2021, "rating": None}


def test_build_insert_binds_every_value():
    title = "Robert'); DROP TABLE movies;--"
    sql, names, params = _compile(mapper.build_insert("abc", MovieCreate(title=title, rating=7.5)))
    assert title not in sql
    assert sql.count("?") == 5
    assert names == ["id", "title", "genre", "year", "rating"]
    assert params == ["abc", title, None, None, 7.5]


def test_plan_update_keeps_column_order_and_id_last():
    payload = MovieUpdate.model_validate({"rating": 9.0, "title": "Dune"})
    plan = mapper.plan_update("abc", payload)
    assert plan.assignments == [("title", "Dune"), ("rating", 9.0)]
    assert plan.params == ["Dune", 9.0, "abc"]


def test_plan_update_treats_explicit_null_as_present():
    plan = mapper.plan_update("abc", MovieUpdate.model_validate({"genre": None, "year": None}))
    assert plan.assignments == [("genre", None), ("year", None)]
    assert plan.params == [None, None, "abc"]


@pytest.mark.parametrize("body", [{}, {"director": "Villeneuve"}])
def test_plan_update_rejects_empty_updates(body):
    with pytest.raises(EmptyUpdateError):
        mapper.plan_update("abc", MovieUpdate.model_validate(body))


def test_build_update_binds_assignments_then_id():
    plan = mapper.plan_update("abc", MovieUpdate.model_validate({"year": 1999, "genre": "Drama"}))
    sql, names, params = _compile(mapper.build_update(plan))
    assert sql.startswith("UPDATE movies SET genre=?, year=?")
    assert "Drama" not in sql
    assert names[:2] == ["genre", "year"]
    assert params == plan.params


def test_row_to_movie_picks_wire_columns():
    row = {"id": "abc", "title": "Dune", "genre": None, "year": 2021, "rating": 8.5, "extra": 1}
    assert mapper.row_to_movie(row) == {
        "id": "abc",
        "title": "Dune",
        "genre": None,
        "year": 2021,
        "rating": 8.5,
    }
