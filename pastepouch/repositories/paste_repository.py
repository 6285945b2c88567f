"""Data access for users and pastes, one parameterized statement per call."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from pastepouch.core.errors import DuplicateEmailError, StorageError
from pastepouch.db.models import pastes, users
from pastepouch.domain.projector import ColumnSpec, columns_of

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _storable_id(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


@dataclass
class RowSet:
    """Column metadata plus fetched rows of a single statement."""

    columns: tuple[ColumnSpec, ...] = ()
    rows: list[tuple[Any, ...]] = field(default_factory=list)
    rowcount: int = 0


class PasteRepository:
    """CRUD helpers over an injected SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessionmaker = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    def _query(self, statement) -> RowSet:
        columns = columns_of(statement, self.engine.dialect)
        try:
            with self._sessionmaker() as session:
                rows = [tuple(row) for row in session.execute(statement).all()]
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(f"query failed: {exc}") from exc
        return RowSet(columns=columns, rows=rows, rowcount=len(rows))

    def _write(self, statement) -> int:
        try:
            with self._sessionmaker() as session:
                result = session.execute(statement)
                session.commit()
                return result.rowcount
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(f"write failed: {exc}") from exc

    # -------------------------- users --------------------------
    def create_user(self, name: Optional[str], email: str) -> None:
        statement = insert(users).values(name=name, email=email)
        try:
            with self._sessionmaker() as session:
                session.execute(statement)
                session.commit()
        except IntegrityError as exc:
            raise DuplicateEmailError(f"a user with email {email!r} already exists") from exc
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(f"write failed: {exc}") from exc
        logger.info("Created user")

    def select_users(self) -> RowSet:
        return self._query(select(users).order_by(users.c.id))

    def get_user_count(self) -> RowSet:
        return self._query(select(func.count().label("count")).select_from(users))

    # -------------------------- pastes -------------------------
    def create_paste(self, userid: int, content: str) -> None:
        self._write(insert(pastes).values(userid=userid, content=content))
        logger.info("Created paste for user %s", userid)

    def select_pastes(self) -> RowSet:
        return self._query(select(pastes).order_by(pastes.c.id))

    def read_paste(self, paste_id: int) -> RowSet:
        if not _storable_id(paste_id):
            return RowSet(columns=columns_of(select(pastes), self.engine.dialect))
        return self._query(select(pastes).where(pastes.c.id == paste_id))

    def delete_paste(self, paste_id: int) -> RowSet:
        if not _storable_id(paste_id):
            return RowSet()
        affected = self._write(delete(pastes).where(pastes.c.id == paste_id))
        logger.info("Deleted paste %s (%d row(s))", paste_id, affected)
        return RowSet(rowcount=affected)

    def update_paste(self, paste_id: int, content: str) -> RowSet:
        if not _storable_id(paste_id):
            return RowSet()
        affected = self._write(update(pastes).where(pastes.c.id == paste_id).values(content=content))
        logger.info("Updated paste %s (%d row(s))", paste_id, affected)
        return RowSet(rowcount=affected)

    def get_paste_count(self) -> RowSet:
        return self._query(select(func.count().label("count")).select_from(pastes))
