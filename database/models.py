"""
SQLAlchemy ORM models for users and their translation history.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(128))
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    last_login = Column(DateTime(timezone=True), default=_utcnow)


class Translation(Base):
    __tablename__ = "translations"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Owner's email; soft reference, not a foreign key.
    user_email = Column(String(255), nullable=False)
    original = Column(Text, nullable=False)
    translated = Column(Text, nullable=False)
    from_lang = Column(String(32))
    to_lang = Column(String(32))
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_translations_owner_created", "user_email", "created_at"),
    )
