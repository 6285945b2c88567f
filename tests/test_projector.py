from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite

from pastepouch.core.errors import ProjectionError
from pastepouch.db.models import pastes, users
from pastepouch.domain import projector
from pastepouch.domain.projector import (
    ColumnSpec,
    Decoder,
    columns_of,
    decoder_for,
    normalize_type_name,
    project_rows,
    register_decoder,
)


@pytest.mark.parametrize(
    "type_name, zero",
    [
        ("TEXT", ""),
        ("VARCHAR", ""),
        ("UUID", ""),
        ("TIMESTAMP", ""),
        ("BOOL", False),
        ("INT4", 0),
        ("JSONB", ""),
    ],
)
def test_null_becomes_zero_value(type_name, zero):
    records = project_rows([ColumnSpec("value", type_name)], [(None,)])
    assert records == [{"value": zero}]
    assert records[0]["value"] is not None
    assert type(records[0]["value"]) is type(zero)


def test_values_keep_row_and_column_order():
    columns = [ColumnSpec("id", "INT4"), ColumnSpec("userid", "INT4"), ColumnSpec("content", "TEXT")]
    records = project_rows(columns, [(2, 7, "b"), (1, 7, "a")])
    assert records == [
        {"id": 2, "userid": 7, "content": "b"},
        {"id": 1, "userid": 7, "content": "a"},
    ]
    assert list(records[0]) == ["id", "userid", "content"]


def test_no_rows_gives_empty_list():
    assert project_rows([ColumnSpec("id", "INT4")], []) == []
    assert project_rows([], []) == []


def test_unrecognized_type_is_stringified():
    records = project_rows([ColumnSpec("n", "NUMERIC")], [(12,)])
    assert records == [{"n": "12"}]


def test_timestamp_is_rendered_as_iso_string():
    stamp = datetime(2024, 1, 2, 3, 4, 5)
    records = project_rows([ColumnSpec("created", "timestamp without time zone")], [(stamp,)])
    assert records == [{"created": "2024-01-02T03:04:05"}]


def test_boolean_accepts_integer_flags():
    records = project_rows([ColumnSpec("ok", "BOOLEAN")], [(1,), (0,), (True,)])
    assert [r["ok"] for r in records] == [True, False, True]


def test_bad_integer_raises_projection_error():
    with pytest.raises(ProjectionError):
        project_rows([ColumnSpec("id", "INT4")], [("abc",)])


def test_bad_boolean_raises_projection_error():
    with pytest.raises(ProjectionError):
        project_rows([ColumnSpec("ok", "BOOL")], [("yes",)])


def test_row_width_mismatch_raises_projection_error():
    with pytest.raises(ProjectionError):
        project_rows([ColumnSpec("id", "INT4")], [(1, 2)])


def test_normalize_type_name():
    assert normalize_type_name("varchar(255)") == "VARCHAR"
    assert normalize_type_name("TIMESTAMP WITHOUT TIME ZONE") == "TIMESTAMP"
    assert normalize_type_name("") == ""


def test_register_decoder_extends_lookup(monkeypatch):
    monkeypatch.setattr(projector, "DECODERS", dict(projector.DECODERS))
    register_decoder("float8", Decoder(float, 0.0))
    assert decoder_for("FLOAT8").zero == 0.0
    assert project_rows([ColumnSpec("x", "FLOAT8")], [(None,), ("1.5",)]) == [{"x": 0.0}, {"x": 1.5}]


def test_columns_of_uses_dialect_type_names():
    cols = columns_of(select(users), sqlite.dialect())
    assert [c.name for c in cols] == ["id", "name", "email"]
    assert [c.type_name for c in cols] == ["INTEGER", "TEXT", "TEXT"]

    count_cols = columns_of(select(func.count().label("count")).select_from(pastes), postgresql.dialect())
    assert count_cols == (ColumnSpec("count", "INTEGER"),)
