"""Database helpers (engine factory, models, schema initializer)."""

from .session import Base, get_engine, make_engine
from .create_tables import create_all

__all__ = ["Base", "create_all", "get_engine", "make_engine"]
