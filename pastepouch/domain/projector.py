"""
Row projector: typed tabular results -> JSON-ready records.

Each column's declared type name selects a decoder from ``DECODERS``. A
decoder knows how to coerce a raw driver value and which zero value stands
in for NULL, so the projected records never contain ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
import re
from typing import Any, Callable, Iterable, NamedTuple, Sequence

from sqlalchemy.engine import Dialect
from sqlalchemy.exc import CompileError

from pastepouch.core.errors import ProjectionError


class ColumnSpec(NamedTuple):
    name: str
    type_name: str


@dataclass(frozen=True)
class Decoder:
    """Coerces non-null values; NULL becomes ``zero``."""

    coerce: Callable[[Any], Any]
    zero: Any

    def decode(self, value: Any) -> Any:
        if value is None:
            return self.zero
        return self.coerce(value)


def _to_str(value: Any) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"not a boolean: {value!r}")


def _to_int64(value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"not an integer: {value!r}")
    number = int(value)
    if not -(2 ** 63) <= number < 2 ** 63:
        raise ValueError(f"integer out of 64-bit range: {number}")
    return number


STRING = Decoder(_to_str, "")
BOOLEAN = Decoder(_to_bool, False)
INT64 = Decoder(_to_int64, 0)

DECODERS: dict[str, Decoder] = {
    "CHAR": STRING,
    "VARCHAR": STRING,
    "TEXT": STRING,
    "UUID": STRING,
    "TIMESTAMP": STRING,
    "BOOL": BOOLEAN,
    "BOOLEAN": BOOLEAN,
    "INT4": INT64,
    "INT": INT64,
    "INTEGER": INT64,
}

_LENGTH_SUFFIX = re.compile(r"\(.*?\)")


def normalize_type_name(type_name: str) -> str:
    """``'varchar(255)'`` -> ``'VARCHAR'``, ``'timestamp without time zone'`` -> ``'TIMESTAMP'``."""
    cleaned = _LENGTH_SUFFIX.sub("", type_name or "").strip().upper()
    return cleaned.split()[0] if cleaned else ""


def register_decoder(type_name: str, decoder: Decoder) -> None:
    DECODERS[normalize_type_name(type_name)] = decoder


def decoder_for(type_name: str) -> Decoder:
    return DECODERS.get(normalize_type_name(type_name), STRING)


def columns_of(statement, dialect: Dialect) -> tuple[ColumnSpec, ...]:
    """Declared column names/types of a SQLAlchemy selectable, as rendered by ``dialect``."""
    specs = []
    for column in statement.selected_columns:
        try:
            type_name = column.type.compile(dialect=dialect)
        except CompileError:
            type_name = type(column.type).__name__
        specs.append(ColumnSpec(column.key, type_name))
    return tuple(specs)


def project_rows(columns: Sequence[ColumnSpec], rows: Iterable[Sequence[Any]]) -> list[dict[str, Any]]:
    decoders = [(column.name, decoder_for(column.type_name)) for column in columns]
    records: list[dict[str, Any]] = []
    for index, row in enumerate(rows):
        if len(row) != len(decoders):
            raise ProjectionError(f"row {index} has {len(row)} values for {len(decoders)} columns")
        record = {}
        for (name, decoder), value in zip(decoders, row):
            try:
                record[name] = decoder.decode(value)
            except (TypeError, ValueError, UnicodeDecodeError) as exc:
                raise ProjectionError(f"row {index}, column {name!r}: {exc}") from exc
        records.append(record)
    return records
