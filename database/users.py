"""
Credential store — user lookup, registration and login bookkeeping.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.errors import DuplicateIdentity

logger = logging.getLogger(__name__)


async def find_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def insert_user(
    session: AsyncSession,
    *,
    email: str,
    password_hash: str,
    name: str,
) -> User:
    """
    Insert a new ``User``.

    The UNIQUE constraint on ``users.email`` is what guarantees two
    concurrent registrations cannot both succeed; an ``IntegrityError``
    rolls the session back and becomes ``DuplicateIdentity``.
    """
    now = datetime.now(timezone.utc)
    user = User(
        user_id=uuid.uuid4(),
        email=email,
        name=name,
        password_hash=password_hash,
        created_at=now,
        last_login=now,
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        logger.info("Duplicate registration rejected for %s", email)
        raise DuplicateIdentity("User already exists") from exc
    return user


async def update_last_login(
    session: AsyncSession,
    email: str,
    timestamp: datetime | None = None,
) -> None:
    await session.execute(
        update(User)
        .where(User.email == email)
        .values(last_login=timestamp or datetime.now(timezone.utc))
    )
    await session.flush()
