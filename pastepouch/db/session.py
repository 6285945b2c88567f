"""Engine helpers for the SQL backend."""
from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from pastepouch.core.config import get_settings

Base = declarative_base()


def make_engine(url: str) -> Engine:
    url = (url or "").strip()
    if not url:
        raise RuntimeError("A database URL must be configured to use the SQL backend.")
    connect_args = {}
    if url.startswith("sqlite"):
        # the HTTP front end shares one engine across worker threads
        connect_args["check_same_thread"] = False
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


@lru_cache
def get_engine() -> Engine:
    """Engine for the locally configured DATABASE_URL."""
    return make_engine(get_settings().database_url)
