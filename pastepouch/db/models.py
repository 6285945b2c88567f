"""SQLAlchemy models for the users and pastes tables."""
from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from .session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=True)
    email = Column(Text, unique=True, nullable=False)


class Paste(Base):
    __tablename__ = "pastes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # owning user by reference only; no foreign key is enforced
    userid = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)


users = User.__table__
pastes = Paste.__table__
