"""
Translation history routes. Every route requires a bearer token and acts
only on the caller's own records.

Route prefix: /api/history
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import get_current_identity
from auth.models import Identity
from database.history import (
    delete_all_translations,
    delete_translation,
    list_translations,
    save_translation,
)
from database.session import get_db_session
from utils.errors import NotFound, ValidationError
from utils.schemas import (
    ClearHistoryResponse,
    DeleteTranslationResponse,
    SaveTranslationRequest,
    SaveTranslationResponse,
    TranslationRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["history"])


@router.post("/save", response_model=SaveTranslationResponse)
async def save(
    req: SaveTranslationRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    try:
        record = await save_translation(
            session,
            identity.email,
            req.original,
            req.translated,
            from_lang=req.from_lang,
            to_lang=req.to_lang,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return {"success": True, "message": "Translation saved", "id": str(record.id)}


@router.get("/get", response_model=List[TranslationRecord])
async def get_history(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> List[TranslationRecord]:
    rows = await list_translations(session, identity.email)
    return [TranslationRecord.from_row(row) for row in rows]


@router.delete("/clear", response_model=ClearHistoryResponse)
async def clear_history(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    count = await delete_all_translations(session, identity.email)
    logger.info("Cleared %d translations for %s", count, identity.email)
    return {
        "success": True,
        "count": count,
        "message": f"Deleted {count} translations",
    }


@router.delete("/delete/{record_id}", response_model=DeleteTranslationResponse)
async def delete_one(
    record_id: str,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    try:
        await delete_translation(session, identity.email, record_id)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))

    return {"success": True, "message": "Translation deleted"}
