"""
SQLAlchemy ORM models for accounts and the movie catalog.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(128), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    avatar = Column(String(2048), nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    verification_code = Column(String(64), unique=True, nullable=True)
    reset_password_code = Column(String(64), unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<Account {self.id} verified={self.verified}>"


class Actor(Base):
    __tablename__ = "actors"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)
    avatar = Column(String(2048), nullable=True)


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    year = Column(Integer, nullable=False)
    genres = Column(JSON, nullable=False, default=list)
    directors = Column(JSON, nullable=False, default=list)
    actors = Column(JSON, nullable=False, default=list)   # actor ids as strings
    producer = Column(String(255), nullable=False)
    plot = Column(Text, nullable=True)
    poster = Column(String(2048), nullable=True)
