"""Schema initializer: make sure the users and pastes tables exist."""
from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger(__name__)


def create_all(engine: Engine) -> None:
    """Create missing tables; existing tables are left untouched."""
    for table in (models.users, models.pastes):
        table.create(bind=engine, checkfirst=True)
        logger.info("%s table OK", table.name)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        create_all(get_engine())
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
