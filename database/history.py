"""
History store — per-user translation records.

Every query here filters on ``user_email``; callers pass the identity
resolved from the bearer token, never a client-supplied value.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import config
from database.models import Translation
from utils.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)


async def save_translation(
    session: AsyncSession,
    user_email: str,
    original: str,
    translated: str,
    from_lang: Optional[str] = None,
    to_lang: Optional[str] = None,
) -> Translation:
    if not original or not translated:
        raise ValidationError("Missing required fields")

    record = Translation(
        id=uuid.uuid4(),
        user_email=user_email,
        original=original,
        translated=translated,
        from_lang=from_lang,
        to_lang=to_lang,
        created_at=datetime.now(timezone.utc),
    )
    session.add(record)
    await session.flush()
    logger.debug("Saved translation %s for %s", record.id, user_email)
    return record


async def list_translations(
    session: AsyncSession,
    user_email: str,
    limit: int | None = None,
) -> List[Translation]:
    """Newest first, capped at ``history_limit`` records."""
    result = await session.execute(
        select(Translation)
        .where(Translation.user_email == user_email)
        .order_by(Translation.created_at.desc(), Translation.id.desc())
        .limit(config.history_limit if limit is None else limit)
    )
    return list(result.scalars().all())


async def delete_all_translations(session: AsyncSession, user_email: str) -> int:
    result = await session.execute(
        delete(Translation).where(Translation.user_email == user_email)
    )
    await session.flush()
    return result.rowcount or 0


async def delete_translation(
    session: AsyncSession,
    user_email: str,
    record_id: str | uuid.UUID,
) -> None:
    """
    Delete one record owned by ``user_email``.

    A record that exists but belongs to someone else is reported exactly
    like a missing one.
    """
    try:
        rid = uuid.UUID(record_id) if isinstance(record_id, str) else record_id
    except ValueError:
        raise NotFound("Translation not found")

    result = await session.execute(
        delete(Translation).where(
            Translation.id == rid,
            Translation.user_email == user_email,
        )
    )
    await session.flush()
    if not result.rowcount:
        raise NotFound("Translation not found")
