"""
Translation proxy — relays ``{messages, max_tokens}`` to the Anthropic
Messages API and returns its JSON verbatim.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from auth.dependencies import translate_access
from auth.models import Identity
from utils.errors import UpstreamError
from utils.llm_providers import AnthropicProvider
from utils.schemas import TranslateRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["translate"])


def get_translator(request: Request) -> AnthropicProvider:
    return request.app.state.translator


@router.post("/translate")
async def translate(
    req: TranslateRequest,
    translator: AnthropicProvider = Depends(get_translator),
    identity: Optional[Identity] = Depends(translate_access),
) -> Dict[str, Any]:
    logger.info(
        "Translation request received (%d messages%s)",
        len(req.messages),
        f", user {identity.email}" if identity else "",
    )
    logger.debug("Messages: %s", json.dumps(req.messages)[:200])

    try:
        data = await translator.complete(req.messages, req.max_tokens)
    except UpstreamError as exc:
        code = (
            status.HTTP_502_BAD_GATEWAY
            if exc.configured
            else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        raise HTTPException(status_code=code, detail=str(exc))

    logger.info("Translation successful")
    return data
